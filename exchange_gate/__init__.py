from exchange_gate.core import (
    CancellationToken,
    Cookie,
    ExchangeContext,
    OwinKeys,
    Response,
    SendingHeadersHooks,
)

__all__ = [
    "CancellationToken",
    "Cookie",
    "ExchangeContext",
    "OwinKeys",
    "Response",
    "SendingHeadersHooks",
]
