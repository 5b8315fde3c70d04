"""
Shared test configuration and fixtures.
"""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from facebook_authcode.config import StrategyConfig
from facebook_authcode.core.domain import TokenResponse
from facebook_authcode.core.strategy import FacebookAuthCodeStrategy


@pytest.fixture
def config():
    """Minimal valid strategy configuration."""
    return StrategyConfig(client_id="app-id", client_secret="app-secret")


@pytest.fixture
def graph_payload():
    """Sample Graph API /me response."""
    return {"id": "42", "name": "Jane Doe", "email": "jane@example.com"}


@pytest.fixture
def token_exchanger():
    """Token exchanger that issues access token A and refresh token B."""
    exchanger = MagicMock()
    exchanger.exchange = AsyncMock(
        return_value=TokenResponse(
            access_token="A", refresh_token="B", params={"expires_in": 3600}
        )
    )
    return exchanger


@pytest.fixture
def fetcher(graph_payload):
    """Authenticated fetcher returning the sample profile."""
    fetcher = MagicMock()
    fetcher.get = AsyncMock(
        return_value=(json.dumps(graph_payload).encode("utf-8"), MagicMock())
    )
    return fetcher


@pytest.fixture
def verify():
    """Verify callback accepting every user."""
    return AsyncMock(return_value={"id": 1})


@pytest.fixture
def make_strategy(config, token_exchanger, fetcher, verify):
    """Factory building a strategy from the default fixtures."""

    def _make(**overrides):
        return FacebookAuthCodeStrategy(
            overrides.pop("config", config),
            overrides.pop("verify", verify),
            token_exchanger=overrides.pop("token_exchanger", token_exchanger),
            fetcher=overrides.pop("fetcher", fetcher),
            **overrides,
        )

    return _make
