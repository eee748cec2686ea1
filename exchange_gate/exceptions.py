# Exchange Gate Exceptions


class ExchangeGateError(Exception):
    """Base exception for all errors raised while manipulating an exchange."""

    def __init__(self, *args, detail: str | None = None):
        super().__init__(*args)
        # Use the first arg as detail if detail kwarg is not provided and args exist
        self.detail = detail or (args[0] if args else None)


class MalformedStatusError(ValueError, ExchangeGateError):
    """Raised when a status line does not match '<3 digits>' or '<3 digits> <reason>'."""

    def __init__(self, *args, detail: str | None = None):
        ExchangeGateError.__init__(self, *args, detail=detail)


class ContextTypeError(TypeError, ExchangeGateError):
    """Raised when a context entry is present but holds a value of the wrong type."""

    def __init__(self, *args, key: str | None = None, detail: str | None = None):
        ExchangeGateError.__init__(self, *args, detail=detail)
        self.key = key


class HeaderParseError(ValueError, ExchangeGateError):
    """Raised when a typed header accessor finds a missing or unparsable value."""

    def __init__(self, *args, header_name: str | None = None, detail: str | None = None):
        ExchangeGateError.__init__(self, *args, detail=detail)
        self.header_name = header_name


class UnsupportedCapabilityError(NotImplementedError, ExchangeGateError):
    """Raised when the exchange context lacks a capability the caller asked for."""

    def __init__(self, *args, detail: str | None = None):
        ExchangeGateError.__init__(self, *args, detail=detail)


class WriteCancelledError(ExchangeGateError):
    """Raised when an asynchronous body write is cancelled before it completes."""

    pass


class NoBodyStreamError(ExchangeGateError):
    """Raised when a body write is attempted but the context carries no body stream."""

    pass


class HeadersSentError(ExchangeGateError):
    """Raised when a sending-headers callback is registered after headers were committed."""

    pass
