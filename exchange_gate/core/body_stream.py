"""Writing bytes to the body stream carried by an exchange context."""

import asyncio
import inspect
import logging
from typing import Any, Optional, Protocol, runtime_checkable

from exchange_gate.core.cancellation import CancellationToken
from exchange_gate.exceptions import WriteCancelledError

logger = logging.getLogger(__name__)


@runtime_checkable
class BodyStream(Protocol):
    """Anything with a `write(bytes)` method: a binary file, io.BytesIO, an asyncio.StreamWriter, ..."""

    def write(self, data: bytes, /) -> Any: ...


def write_sync(stream: BodyStream, data: memoryview) -> None:
    """Write `data` to `stream`, blocking until the stream accepts it.

    Raises:
        TypeError: If the stream only supports asynchronous writes.
    """
    if inspect.iscoroutinefunction(stream.write):
        raise TypeError(f"{type(stream).__name__}.write is a coroutine; use write_async for this body stream")
    stream.write(data)


async def _write_to_stream(stream: BodyStream, data: memoryview) -> None:
    if inspect.iscoroutinefunction(stream.write):
        await stream.write(data)
    elif hasattr(stream, "drain"):
        # asyncio.StreamWriter: write() buffers, drain() waits for flow control.
        stream.write(data)
        await stream.drain()
    else:
        await asyncio.to_thread(stream.write, data)


async def write_async(
    stream: BodyStream, data: memoryview, cancellation_token: Optional[CancellationToken] = None
) -> None:
    """Write `data` to `stream` without blocking the event loop.

    The write completes before this coroutine returns, so successive awaited
    calls reach the stream in the order they were issued.

    Args:
        stream: The body stream to write to.
        data: The bytes to write.
        cancellation_token: Optional token; cancelling it abandons the pending write.

    Raises:
        WriteCancelledError: If the token is cancelled before the write completes.
            A token that is already cancelled prevents the write from starting.
    """
    if cancellation_token is None:
        await _write_to_stream(stream, data)
        return

    if cancellation_token.is_cancelled:
        raise WriteCancelledError("Write cancelled before it started")

    write_task = asyncio.ensure_future(_write_to_stream(stream, data))
    cancel_task = asyncio.ensure_future(cancellation_token.wait())
    try:
        await asyncio.wait({write_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        cancel_task.cancel()
        if not write_task.done():
            write_task.cancel()
            await asyncio.wait({write_task})

    if write_task.cancelled():
        logger.debug(f"Cancelled pending write of {len(data)} bytes")
        raise WriteCancelledError(f"Write of {len(data)} bytes cancelled before completion")
    # Propagates any error raised by the stream itself.
    write_task.result()
