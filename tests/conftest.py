import io
import os

import pytest
from exchange_gate.core.exchange_context import ExchangeContext
from exchange_gate.core.response import Response
from exchange_gate.core.sending_headers import SendingHeadersHooks


@pytest.fixture(autouse=True)
def restore_environment():
    """AUTOUSE: Snapshots os.environ before each test and restores it afterwards."""
    original_environ = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_environ)


@pytest.fixture
def body() -> io.BytesIO:
    """An in-memory body stream."""
    return io.BytesIO()


@pytest.fixture
def context(body: io.BytesIO) -> ExchangeContext:
    """A fresh ExchangeContext with a body stream and sending-headers hooks."""
    return ExchangeContext(body=body, on_sending_headers=SendingHeadersHooks())


@pytest.fixture
def response(context: ExchangeContext) -> Response:
    """A UTF-8 Response wrapping the `context` fixture."""
    return Response(context, encoding="utf-8")
