import os
from unittest.mock import patch

import pytest
from exchange_gate.core.exchange_context import ExchangeContext
from exchange_gate.handlers.add_header_from_env import AddHeaderFromEnvHandler


@pytest.mark.asyncio
async def test_add_header_successful(context: ExchangeContext):
    """Test successful setting of a header from an environment variable."""
    handler = AddHeaderFromEnvHandler(header_name="X-Deployment", env_var_name="DEPLOYMENT_NAME")

    with patch.dict(os.environ, {"DEPLOYMENT_NAME": "blue"}):
        updated_context = await handler.apply(context)

    assert updated_context is context
    assert context.headers["X-Deployment"] == ["blue"]


@pytest.mark.asyncio
async def test_replaces_existing_values(context: ExchangeContext):
    context.headers["X-Deployment"] = ["green", "red"]
    handler = AddHeaderFromEnvHandler(header_name="X-Deployment", env_var_name="DEPLOYMENT_NAME")

    with patch.dict(os.environ, {"DEPLOYMENT_NAME": "blue"}):
        await handler.apply(context)

    assert context.headers["X-Deployment"] == ["blue"]


@pytest.mark.asyncio
async def test_env_var_not_set(context: ExchangeContext):
    """Test ValueError is raised and headers untouched if env var is not set."""
    handler = AddHeaderFromEnvHandler(header_name="X-Missing", env_var_name="MISSING_ENV_VAR")

    with patch.dict(os.environ, {}, clear=True):
        with pytest.raises(ValueError) as excinfo:
            await handler.apply(context)

    assert "Environment variable 'MISSING_ENV_VAR' not set" in str(excinfo.value)
    assert "X-Missing" not in context.headers


def test_instantiation_empty_header_name():
    with pytest.raises(ValueError, match="header_name cannot be empty."):
        AddHeaderFromEnvHandler(header_name="", env_var_name="SOME_ENV_VAR")


def test_instantiation_empty_env_var_name():
    with pytest.raises(ValueError, match="env_var_name cannot be empty."):
        AddHeaderFromEnvHandler(header_name="X-Header", env_var_name="")
