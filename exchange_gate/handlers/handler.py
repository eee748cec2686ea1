# Interfaces for the response-handling pipeline.

import abc
import logging
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from exchange_gate.core.exchange_context import ExchangeContext


class Handler(BaseModel, abc.ABC):
    """Abstract Base Class defining the interface for a pipeline step.

    Handlers typically wrap the context in a `Response` and mutate its status,
    headers or body.

    Attributes:
        name (Optional[str]): An optional name for the handler instance, used
            for logging and identification. Defaults to the class name.
    """

    name: Optional[str] = Field(default=None)
    logger: logging.Logger = Field(default_factory=lambda: logging.getLogger(__name__), exclude=True)

    model_config = ConfigDict(arbitrary_types_allowed=True)

    def model_post_init(self, __context: Any) -> None:
        if self.name is None:
            self.name = self.__class__.__name__

    @abc.abstractmethod
    async def apply(self, context: ExchangeContext) -> ExchangeContext:
        """
        Apply the handler to the exchange context.

        Args:
            context: The shared exchange context for the current transaction.

        Returns:
            The (mutated) exchange context.

        Raises:
            Exception: Handlers may raise exceptions to halt the pipeline.
        """
        raise NotImplementedError
