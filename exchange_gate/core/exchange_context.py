# Defines the ExchangeContext carrying one HTTP transaction's response state.

import uuid
from collections.abc import MutableMapping
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Type, TypeVar

from psygnal.containers import EventedDict

from exchange_gate.core.body_stream import BodyStream
from exchange_gate.core.context_accessor import get_value, set_value
from exchange_gate.core.sending_headers import HostSendingHeadersHooks, SendingHeadersHooks

T = TypeVar("T")


class OwinKeys:
    """Well-known keys of an OWIN-style environment mapping."""

    RESPONSE_STATUS_CODE = "owin.ResponseStatusCode"
    RESPONSE_REASON_PHRASE = "owin.ResponseReasonPhrase"
    RESPONSE_HEADERS = "owin.ResponseHeaders"
    RESPONSE_BODY = "owin.ResponseBody"
    ON_SENDING_HEADERS = "server.OnSendingHeaders"


def _read_sending_headers(environ: MutableMapping[str, Any]) -> Optional[SendingHeadersHooks]:
    # OWIN hosts store a register(callback, state) function under this key.
    value = environ.get(OwinKeys.ON_SENDING_HEADERS)
    if callable(value):
        return HostSendingHeadersHooks(value)
    return get_value(environ, OwinKeys.ON_SENDING_HEADERS, SendingHeadersHooks)


@dataclass
class ExchangeContext:
    """Holds the response state for a single transaction through the pipeline.

    The context is shared: every handler and the hosting layer see the same
    instance, so mutations made through one holder are visible to all.

    Attributes:
        transaction_id: A unique identifier for the transaction.
        status_code: The numeric response status code.
        reason_phrase: An explicitly set reason phrase, if any.
        headers: Response headers, each name mapping to an ordered list of values.
        body: The writable byte sink for the response body. Owned by the host.
        on_sending_headers: Registration list for sending-headers callbacks, or
            None if the host does not support them.
        data: A general-purpose store for handlers to share information
            related to this transaction.
    """

    transaction_id: uuid.UUID = field(default_factory=uuid.uuid4)
    status_code: int = 200
    reason_phrase: Optional[str] = None
    headers: Dict[str, List[str]] = field(default_factory=dict)
    body: Optional[BodyStream] = None
    on_sending_headers: Optional[SendingHeadersHooks] = None

    data: EventedDict[str, Any] = field(default_factory=EventedDict)

    def get_data(self, key: str, expected_type: Type[T], default: Optional[T] = None) -> Optional[T]:
        """Get a shared data value, raising ContextTypeError if it has the wrong type."""
        return get_value(self.data, key, expected_type, default)

    def set_data(self, key: str, value: Any) -> None:
        """Set a shared data value."""
        set_value(self.data, key, value)

    @classmethod
    def from_environment(cls, environ: MutableMapping[str, Any]) -> "ExchangeContext":
        """Build a context from an OWIN-style environment mapping.

        The headers mapping, body stream and hooks are shared by reference with
        `environ`. A registration function under `server.OnSendingHeaders` is
        wrapped so that callbacks registered on the context are forwarded to it. Keys outside `OwinKeys` are copied into `data`.

        Args:
            environ: The environment mapping populated by the host.

        Returns:
            A new ExchangeContext.

        Raises:
            ContextTypeError: If a well-known key holds a value of the wrong type.
        """
        headers = get_value(environ, OwinKeys.RESPONSE_HEADERS, MutableMapping)
        if headers is None:
            headers = {}
            set_value(environ, OwinKeys.RESPONSE_HEADERS, headers)

        context = cls(
            status_code=get_value(environ, OwinKeys.RESPONSE_STATUS_CODE, int, 200),
            reason_phrase=get_value(environ, OwinKeys.RESPONSE_REASON_PHRASE, str),
            headers=headers,
            body=get_value(environ, OwinKeys.RESPONSE_BODY, BodyStream),
            on_sending_headers=_read_sending_headers(environ),
        )
        known_keys = {v for k, v in vars(OwinKeys).items() if not k.startswith("_")}
        for key, value in environ.items():
            if key not in known_keys:
                context.data[key] = value
        return context

    def to_environment(self) -> Dict[str, Any]:
        """Render this context as an OWIN-style environment mapping."""
        environ: Dict[str, Any] = dict(self.data)
        set_value(environ, OwinKeys.RESPONSE_STATUS_CODE, self.status_code)
        set_value(environ, OwinKeys.RESPONSE_REASON_PHRASE, self.reason_phrase)
        set_value(environ, OwinKeys.RESPONSE_HEADERS, self.headers)
        set_value(environ, OwinKeys.RESPONSE_BODY, self.body)
        hooks: Any = self.on_sending_headers
        if isinstance(hooks, HostSendingHeadersHooks):
            hooks = hooks.register_fn
        set_value(environ, OwinKeys.ON_SENDING_HEADERS, hooks)
        return environ
