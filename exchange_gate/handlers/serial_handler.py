# Serial Handler that applies a sequence of other handlers.

import logging
import time
from typing import Sequence

from pydantic import Field

from exchange_gate.core.exchange_context import ExchangeContext
from exchange_gate.core.logging import log_handler_execution
from exchange_gate.handlers.handler import Handler

logger = logging.getLogger(__name__)


class SerialHandler(Handler):
    """
    A Handler that applies an ordered sequence of other handlers.

    Handlers are applied sequentially to the same shared context. If any
    handler raises an exception, execution stops and the exception propagates.

    Attributes:
        handlers (Sequence[Handler]): The ordered sequence of handlers to apply.
    """

    handlers: Sequence[Handler] = Field(default_factory=list)

    def model_post_init(self, __context) -> None:
        super().model_post_init(__context)
        if not self.handlers:
            logger.warning(f"Initializing SerialHandler '{self.name}' with an empty handler list.")

    async def apply(self, context: ExchangeContext) -> ExchangeContext:
        """
        Applies the contained handlers sequentially to the context.

        Args:
            context: The shared exchange context.

        Returns:
            The exchange context after all contained handlers have been applied.

        Raises:
            Exception: Propagates any exception raised by a contained handler.
        """
        tx_id = str(context.transaction_id)
        logger.debug(f"[{tx_id}] Entering SerialHandler: {self.name}")
        current_context = context
        for i, handler in enumerate(self.handlers):
            member_name = handler.name or handler.__class__.__name__
            logger.info(f"[{tx_id}] Applying handler {i + 1}/{len(self.handlers)} in {self.name}: {member_name}")
            start = time.perf_counter()
            try:
                current_context = await handler.apply(current_context)
            except Exception as e:
                log_handler_execution(
                    tx_id, member_name, "error", duration=time.perf_counter() - start, error=str(e)
                )
                raise  # Re-raise the exception to halt processing
            log_handler_execution(tx_id, member_name, "completed", duration=time.perf_counter() - start)
        logger.debug(f"[{tx_id}] Exiting SerialHandler: {self.name}")
        return current_context

    def __repr__(self) -> str:
        handler_reprs = [f"{h.name} <{h.__class__.__name__}>" for h in self.handlers]
        return f"<{self.name}(handlers=[{', '.join(handler_reprs)}])>"
