"""Callbacks run by the host immediately before response headers are sent."""

import logging
from typing import Any, Callable, List, Tuple

from exchange_gate.exceptions import HeadersSentError

logger = logging.getLogger(__name__)

SendingHeadersCallback = Callable[[Any], None]


class SendingHeadersHooks:
    """Registration list for sending-headers callbacks, owned by one exchange context.

    Handlers append callbacks with `register`. The hosting layer calls `fire`
    exactly once, at the point where headers become final.
    """

    def __init__(self) -> None:
        self._callbacks: List[Tuple[SendingHeadersCallback, Any]] = []
        self._fired = False

    @property
    def fired(self) -> bool:
        return self._fired

    def register(self, callback: SendingHeadersCallback, state: Any = None) -> None:
        """Register `callback` to be invoked with `state` when headers are sent.

        Raises:
            HeadersSentError: If the hooks have already fired.
        """
        if self._fired:
            raise HeadersSentError("Cannot register a sending-headers callback after headers were sent")
        self._callbacks.append((callback, state))

    def fire(self) -> None:
        """Invoke every registered callback in registration order.

        Subsequent calls do nothing. Exceptions raised by a callback propagate
        to the caller and stop the remaining callbacks.
        """
        if self._fired:
            return
        self._fired = True
        logger.debug(f"Firing {len(self._callbacks)} sending-headers callback(s)")
        for callback, state in self._callbacks:
            callback(state)

    def __len__(self) -> int:
        return len(self._callbacks)


class HostSendingHeadersHooks(SendingHeadersHooks):
    """Sending-headers hooks backed by a host's OWIN registration function.

    OWIN hosts publish `server.OnSendingHeaders` as a function
    `register(callback, state)` and invoke the registered callbacks themselves,
    so `register` forwards to that function and `fire` only marks the commit point.
    """

    def __init__(self, register_fn: Callable[[SendingHeadersCallback, Any], None]) -> None:
        super().__init__()
        self.register_fn = register_fn

    def register(self, callback: SendingHeadersCallback, state: Any = None) -> None:
        if self._fired:
            raise HeadersSentError("Cannot register a sending-headers callback after headers were sent")
        self.register_fn(callback, state)
        self._callbacks.append((callback, state))

    def fire(self) -> None:
        self._fired = True
