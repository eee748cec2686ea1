"""Response façade over an ExchangeContext."""

import logging
import re
from typing import Any, Dict, List, Optional, Union
from urllib.parse import quote

from exchange_gate.core import body_stream
from exchange_gate.core.body_stream import BodyStream
from exchange_gate.core.cancellation import CancellationToken
from exchange_gate.core.cookie import EPOCH, Cookie, format_cookie_date
from exchange_gate.core.exchange_context import ExchangeContext
from exchange_gate.core.headers import add_header, get_header, get_headers, set_header
from exchange_gate.core.reason_phrases import to_reason_phrase
from exchange_gate.core.sending_headers import SendingHeadersCallback
from exchange_gate.exceptions import (
    HeaderParseError,
    MalformedStatusError,
    NoBodyStreamError,
    UnsupportedCapabilityError,
)
from exchange_gate.settings import Settings, resolve_encoding

logger = logging.getLogger(__name__)

SET_COOKIE = "Set-Cookie"
CONTENT_TYPE = "Content-Type"
CONTENT_LENGTH = "Content-Length"

# ASCII digits only; int() would also take "1_000" and non-ASCII digits.
_CONTENT_LENGTH_PATTERN = re.compile(r"[ \t]*[+-]?[0-9]+[ \t]*")

BodyData = Union[str, bytes, bytearray, memoryview]


def _escape(value: str) -> str:
    """Percent-encode everything except RFC 3986 unreserved characters."""
    return quote(value, safe="")


def _starts_with_cookie(value: str, key: str) -> bool:
    return value.lower().startswith(f"{key}=".lower())


def _contains(value: str, fragment: str) -> bool:
    return fragment.lower() in value.lower()


class Response:
    """Reads and writes HTTP response semantics on a shared ExchangeContext.

    The Response holds no state of its own beyond the text encoding: status,
    headers and the body stream all live on the context, so several Response
    objects wrapping the same context see each other's changes.

    Setters that mutate headers or cookies return the Response so calls can be
    chained.

    Attributes:
        context: The wrapped exchange context.
        encoding: Text encoding used by `write` and `write_async` for str data.
    """

    def __init__(self, context: ExchangeContext, encoding: Optional[str] = None):
        self.context = context
        self.encoding = resolve_encoding(encoding) if encoding else Settings().get_response_encoding()

    # --- Status ---

    @property
    def status(self) -> str:
        """The status line: '<code>' or '<code> <reason phrase>'."""
        reason_phrase = self.reason_phrase
        if not reason_phrase:
            return str(self.status_code)
        return f"{self.status_code} {reason_phrase}"

    @status.setter
    def status(self, value: str) -> None:
        code = value[:3]
        if len(value) < 3 or (len(value) >= 4 and value[3] != " ") or not (code.isascii() and code.isdigit()):
            raise MalformedStatusError(
                f"Status must be a string with 3 digit status code, a space, and a reason phrase; got {value!r}"
            )
        self.status_code = int(code)
        self.reason_phrase = None if len(value) < 4 else value[4:]

    @property
    def status_code(self) -> int:
        return self.context.status_code

    @status_code.setter
    def status_code(self, value: int) -> None:
        self.context.status_code = value

    @property
    def reason_phrase(self) -> str:
        """The explicit reason phrase, or the canonical one for the status code."""
        reason_phrase = self.context.reason_phrase
        return reason_phrase if reason_phrase else to_reason_phrase(self.status_code)

    @reason_phrase.setter
    def reason_phrase(self, value: Optional[str]) -> None:
        self.context.reason_phrase = value

    # --- Headers ---

    @property
    def headers(self) -> Dict[str, List[str]]:
        return self.context.headers

    @headers.setter
    def headers(self, value: Dict[str, List[str]]) -> None:
        self.context.headers = value

    def get_header(self, name: str) -> Optional[str]:
        return get_header(self.headers, name)

    def get_headers(self, name: str) -> Optional[List[str]]:
        return get_headers(self.headers, name)

    def set_header(self, name: str, value: Optional[str]) -> "Response":
        """Replace the header's values with `value`; an empty value removes the header."""
        set_header(self.headers, name, value)
        return self

    @property
    def content_type(self) -> Optional[str]:
        return self.get_header(CONTENT_TYPE)

    @content_type.setter
    def content_type(self, value: Optional[str]) -> None:
        self.set_header(CONTENT_TYPE, value)

    @property
    def content_length(self) -> int:
        """The Content-Length header as an integer.

        Raises:
            HeaderParseError: If the header is absent or not an integer.
        """
        value = self.get_header(CONTENT_LENGTH)
        if value is None:
            raise HeaderParseError(f"{CONTENT_LENGTH} header is not set", header_name=CONTENT_LENGTH)
        if not _CONTENT_LENGTH_PATTERN.fullmatch(value):
            raise HeaderParseError(
                f"{CONTENT_LENGTH} header is not an integer: {value!r}", header_name=CONTENT_LENGTH
            )
        return int(value)

    @content_length.setter
    def content_length(self, value: int) -> None:
        self.set_header(CONTENT_LENGTH, str(int(value)))

    # --- Cookies ---

    def set_cookie(self, key: str, value: Union[str, Cookie]) -> "Response":
        """Append a Set-Cookie header.

        A plain string value produces 'key=value; path=/'. A Cookie produces
        'key=value' followed by its domain, path, expires, secure and HttpOnly
        attributes, each only when set.
        """
        if not isinstance(value, Cookie):
            add_header(self.headers, SET_COOKIE, f"{_escape(key)}={_escape(value)}; path=/")
            return self

        cookie = value
        parts = [f"{_escape(key)}={_escape(cookie.value or '')}"]
        if cookie.domain:
            parts.append(f"; domain={cookie.domain}")
        if cookie.path:
            parts.append(f"; path={cookie.path}")
        if cookie.expires is not None:
            parts.append(f"; expires={format_cookie_date(cookie.expires)}")
        if cookie.secure:
            parts.append("; secure")
        if cookie.http_only:
            parts.append("; HttpOnly")
        add_header(self.headers, SET_COOKIE, "".join(parts))
        return self

    def delete_cookie(self, key: str, cookie: Optional[Cookie] = None) -> "Response":
        """Expire the cookie `key` in the client.

        Without `cookie`, every pending Set-Cookie for `key` is replaced with a
        single expired entry. With `cookie`, only pending entries matching its
        domain (or, failing that, its path) are dropped, and the expired entry
        carries the same domain and path.
        """
        if cookie is None:
            expired = f"{_escape(key)}=; expires={format_cookie_date(EPOCH)}"
            existing = self.get_headers(SET_COOKIE)
            if existing is None:
                self.headers[SET_COOKIE] = [expired]
            else:
                self.headers[SET_COOKIE] = [v for v in existing if not _starts_with_cookie(v, key)] + [expired]
            logger.debug(f"Deleted cookie '{key}'")
            return self

        if cookie.domain:
            fragment: Optional[str] = f"domain={cookie.domain}"
        elif cookie.path:
            fragment = f"path={cookie.path}"
        else:
            fragment = None

        def rejected(value: str) -> bool:
            return _starts_with_cookie(value, key) and (fragment is None or _contains(value, fragment))

        existing = self.get_headers(SET_COOKIE)
        if existing is not None:
            self.headers[SET_COOKIE] = [v for v in existing if not rejected(v)]

        logger.debug(f"Deleted cookie '{key}' (domain={cookie.domain!r}, path={cookie.path!r})")
        return self.set_cookie(key, Cookie(path=cookie.path, domain=cookie.domain, expires=EPOCH))

    # --- Sending headers ---

    def on_sending_headers(self, callback: SendingHeadersCallback, state: Any = None) -> None:
        """Register a callback the host runs just before headers are sent.

        Raises:
            UnsupportedCapabilityError: If the context has no sending-headers hooks.
        """
        hooks = self.context.on_sending_headers
        if hooks is None:
            raise UnsupportedCapabilityError("Exchange context does not support on_sending_headers")
        hooks.register(callback, state)

    # --- Body ---

    @property
    def output_stream(self) -> Optional[BodyStream]:
        return self.context.body

    @output_stream.setter
    def output_stream(self, value: Optional[BodyStream]) -> None:
        self.context.body = value

    def _select(self, data: BodyData, offset: int, count: Optional[int]) -> memoryview:
        if isinstance(data, str):
            data = data.encode(self.encoding)
        view = memoryview(data).cast("B")
        if count is None:
            count = len(view) - offset
        if offset < 0 or count < 0 or offset + count > len(view):
            raise ValueError(f"offset={offset}, count={count} out of range for {len(view)} bytes")
        return view[offset : offset + count]

    def _require_stream(self) -> BodyStream:
        stream = self.output_stream
        if stream is None:
            raise NoBodyStreamError(f"[{self.context.transaction_id}] Exchange context has no body stream")
        return stream

    def write(self, data: BodyData, offset: int = 0, count: Optional[int] = None) -> None:
        """Write text or bytes to the body stream.

        Args:
            data: Text (encoded with `self.encoding`) or a bytes-like object.
            offset: Index of the first byte to write.
            count: Number of bytes to write; defaults to the rest of `data`.

        Raises:
            ValueError: If `offset`/`count` fall outside `data`.
            TypeError: If the body stream only supports asynchronous writes.
            NoBodyStreamError: If the context has no body stream.
        """
        chunk = self._select(data, offset, count)
        body_stream.write_sync(self._require_stream(), chunk)

    def write_format(self, fmt: str, *args: Any, **kwargs: Any) -> None:
        """Format `fmt` with `str.format` and write the result."""
        self.write(fmt.format(*args, **kwargs))

    async def write_async(
        self,
        data: BodyData,
        offset: int = 0,
        count: Optional[int] = None,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> None:
        """Asynchronously write text or bytes to the body stream.

        Takes the same arguments as `write`, plus an optional cancellation token.

        Raises:
            WriteCancelledError: If the token is cancelled before the write completes.
            ValueError: If `offset`/`count` fall outside `data`.
            NoBodyStreamError: If the context has no body stream.
        """
        chunk = self._select(data, offset, count)
        await body_stream.write_async(self._require_stream(), chunk, cancellation_token)
