"""
Unit tests for the authlib OAuth2 client adapter.
"""

from urllib.parse import parse_qs

import httpx
import pytest
from respx import MockRouter

from facebook_authcode.config import StrategyConfig
from facebook_authcode.core.exceptions import OAuthRequestError, TokenExchangeError
from facebook_authcode.infrastructure.oauth_client import AuthlibOAuth2Client

TOKEN_URL = "https://graph.facebook.com/oauth/access_token"
PROFILE_URL = "https://graph.facebook.com/v2.2/me"


@pytest.fixture
def client():
    return AuthlibOAuth2Client(
        client_id="app-id", client_secret="app-secret", token_url=TOKEN_URL
    )


class TestExchange:
    """Tests for exchanging authorization codes."""

    @pytest.mark.asyncio
    async def test_exchange_success(self, client, respx_mock: MockRouter):
        route = respx_mock.post(TOKEN_URL).mock(
            return_value=httpx.Response(
                200,
                json={
                    "access_token": "access-123",
                    "refresh_token": "refresh-456",
                    "token_type": "bearer",
                    "expires_in": 5183944,
                },
            )
        )

        tokens = await client.exchange(
            "auth-code",
            {"grant_type": "authorization_code", "redirect_uri": "https://app/cb"},
        )

        assert tokens.access_token == "access-123"
        assert tokens.refresh_token == "refresh-456"
        assert tokens.params["token_type"] == "bearer"
        assert "access_token" not in tokens.params

        sent = parse_qs(route.calls.last.request.content.decode("utf-8"))
        assert sent["code"] == ["auth-code"]
        assert sent["grant_type"] == ["authorization_code"]
        assert sent["redirect_uri"] == ["https://app/cb"]
        assert "app-id" in sent["client_id"]
        assert "app-secret" in sent["client_secret"]

    @pytest.mark.asyncio
    async def test_exchange_omits_missing_redirect_uri(self, client, respx_mock: MockRouter):
        route = respx_mock.post(TOKEN_URL).mock(
            return_value=httpx.Response(200, json={"access_token": "access-123"})
        )

        tokens = await client.exchange(
            "auth-code", {"grant_type": "authorization_code", "redirect_uri": None}
        )

        assert tokens.refresh_token is None
        sent = parse_qs(route.calls.last.request.content.decode("utf-8"))
        assert "redirect_uri" not in sent

    @pytest.mark.asyncio
    async def test_exchange_rejected(self, client, respx_mock: MockRouter):
        respx_mock.post(TOKEN_URL).mock(
            return_value=httpx.Response(
                400,
                json={"error": "invalid_grant", "error_description": "Code expired"},
            )
        )

        with pytest.raises(TokenExchangeError, match="Code expired"):
            await client.exchange("expired", {"grant_type": "authorization_code"})

    @pytest.mark.asyncio
    async def test_exchange_server_error(self, client, respx_mock: MockRouter):
        respx_mock.post(TOKEN_URL).mock(return_value=httpx.Response(503))

        with pytest.raises(TokenExchangeError):
            await client.exchange("code", {"grant_type": "authorization_code"})

    @pytest.mark.asyncio
    async def test_exchange_network_error(self, client, respx_mock: MockRouter):
        respx_mock.post(TOKEN_URL).mock(
            side_effect=httpx.ConnectError("Connection failed")
        )

        with pytest.raises(TokenExchangeError) as exc_info:
            await client.exchange("code", {"grant_type": "authorization_code"})

        assert isinstance(exc_info.value.cause, httpx.ConnectError)


class TestGet:
    """Tests for authenticated GET requests."""

    @pytest.mark.asyncio
    async def test_get_sends_bearer_token(self, client, respx_mock: MockRouter):
        route = respx_mock.get(PROFILE_URL).mock(
            return_value=httpx.Response(200, content=b'{"id": "42"}')
        )

        body, response = await client.get(PROFILE_URL, "access-123")

        assert body == b'{"id": "42"}'
        assert response.status_code == 200
        assert route.calls.last.request.headers["Authorization"] == "Bearer access-123"

    @pytest.mark.asyncio
    async def test_get_error_status(self, client, respx_mock: MockRouter):
        error_body = b'{"error": {"message": "Invalid token", "code": 190}}'
        respx_mock.get(PROFILE_URL).mock(
            return_value=httpx.Response(401, content=error_body)
        )

        with pytest.raises(OAuthRequestError) as exc_info:
            await client.get(PROFILE_URL, "bad-token")

        assert exc_info.value.status_code == 401
        assert exc_info.value.data == error_body

    @pytest.mark.asyncio
    async def test_get_network_error(self, client, respx_mock: MockRouter):
        respx_mock.get(PROFILE_URL).mock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(OAuthRequestError) as exc_info:
            await client.get(PROFILE_URL, "access-123")

        assert exc_info.value.status_code is None


class TestFromConfig:
    """Tests for building the adapter from configuration."""

    def test_from_config(self):
        config = StrategyConfig(
            client_id="app-id",
            client_secret="app-secret",
            token_url="https://example.com/token",
        )

        client = AuthlibOAuth2Client.from_config(config)

        assert client._token_url == "https://example.com/token"

    def test_from_config_requires_credentials(self):
        with pytest.raises(ValueError):
            AuthlibOAuth2Client.from_config(
                StrategyConfig(client_id=None, client_secret=None)
            )
