"""Pipeline handlers that act on an ExchangeContext through the Response façade."""

from .add_header_from_env import AddHeaderFromEnvHandler
from .default_content_type import DefaultContentTypeHandler
from .handler import Handler
from .serial_handler import SerialHandler

__all__ = ["AddHeaderFromEnvHandler", "DefaultContentTypeHandler", "Handler", "SerialHandler"]
