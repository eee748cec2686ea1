"""Handler for adding a response header from an environment variable."""

import os

from pydantic import field_validator

from exchange_gate.core.exchange_context import ExchangeContext
from exchange_gate.core.response import Response
from exchange_gate.handlers.handler import Handler


class AddHeaderFromEnvHandler(Handler):
    """Sets a response header, taking its value from an environment variable.

    Attributes:
        header_name: The name of the header to set (e.g., "X-Deployment").
        env_var_name: The name of the environment variable to source the header value from.
    """

    header_name: str
    env_var_name: str

    @field_validator("header_name", "env_var_name")
    @classmethod
    def validate_not_empty(cls, value: str, info) -> str:
        if not value:
            raise ValueError(f"{info.field_name} cannot be empty.")
        return value

    async def apply(self, context: ExchangeContext) -> ExchangeContext:
        """
        Sets the header on the response using a value from an environment variable.

        Raises:
            ValueError if the specified environment variable is not set.

        Args:
            context: The current exchange context.

        Returns:
            The modified exchange context.
        """
        header_value = os.environ.get(self.env_var_name)

        if header_value is None:
            error_msg = f"Environment variable '{self.env_var_name}' not set for handler {self.name}."
            self.logger.error(f"[{context.transaction_id}] {error_msg}")
            raise ValueError(f"[{context.transaction_id}] {error_msg}")

        self.logger.info(
            f"[{context.transaction_id}] Setting header '{self.header_name}' "
            f"from environment variable '{self.env_var_name}' ({self.name})."
        )
        Response(context).set_header(self.header_name, header_value)
        return context
