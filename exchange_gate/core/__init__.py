"""Accessor layers over a shared exchange context."""

from .cancellation import CancellationToken
from .cookie import Cookie
from .exchange_context import ExchangeContext, OwinKeys
from .response import Response
from .sending_headers import SendingHeadersHooks

__all__ = [
    "CancellationToken",
    "Cookie",
    "ExchangeContext",
    "OwinKeys",
    "Response",
    "SendingHeadersHooks",
]
