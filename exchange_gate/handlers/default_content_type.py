"""Handler that supplies a Content-Type when the response has none."""

from pydantic import Field

from exchange_gate.core.exchange_context import ExchangeContext
from exchange_gate.core.response import Response
from exchange_gate.handlers.handler import Handler
from exchange_gate.settings import Settings


class DefaultContentTypeHandler(Handler):
    """Sets Content-Type to `content_type` unless an earlier handler already set one."""

    content_type: str = Field(default_factory=lambda: Settings().get_default_content_type())

    async def apply(self, context: ExchangeContext) -> ExchangeContext:
        response = Response(context)
        if not response.content_type:
            self.logger.debug(f"[{context.transaction_id}] Defaulting Content-Type to '{self.content_type}'")
            response.content_type = self.content_type
        return context
