"""Cancellation signal for asynchronous body writes."""

import asyncio


class CancellationToken:
    """A one-shot signal that asks pending asynchronous writes to stop.

    Once cancelled, a token stays cancelled.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    async def wait(self) -> None:
        """Suspend until the token is cancelled."""
        await self._event.wait()
