"""
OAuth2 client adapter.

Implements the TokenExchanger and AuthenticatedFetcher ports with authlib's
httpx integration.
"""

import logging
from typing import Any, Mapping

import httpx
from authlib.integrations.httpx_client import AsyncOAuth2Client, OAuthError

from facebook_authcode.config import StrategyConfig
from facebook_authcode.core.domain import TokenResponse
from facebook_authcode.core.exceptions import OAuthRequestError, TokenExchangeError


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class AuthlibOAuth2Client:
    """
    Token exchange and authenticated GET requests against an OAuth2 provider.

    Client credentials are sent in the token request body
    (`client_secret_post`). A fresh httpx client is used per call, so one
    instance can be shared across concurrent attempts.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        token_url: str,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self._client_id = client_id
        self._client_secret = client_secret
        self._token_url = token_url
        self._timeout = timeout

    @classmethod
    def from_config(
        cls, config: StrategyConfig, timeout: float = DEFAULT_TIMEOUT
    ) -> "AuthlibOAuth2Client":
        """Create the adapter from strategy configuration."""
        config.validate()
        return cls(
            client_id=config.client_id or "",
            client_secret=config.client_secret or "",
            token_url=config.token_url,
            timeout=timeout,
        )

    def _session(self, token: dict[str, Any] | None = None) -> AsyncOAuth2Client:
        return AsyncOAuth2Client(
            client_id=self._client_id,
            client_secret=self._client_secret,
            token_endpoint_auth_method="client_secret_post",
            token=token,
            timeout=self._timeout,
        )

    async def exchange(self, code: str, params: Mapping[str, Any]) -> TokenResponse:
        """
        Exchange an authorization code for tokens.

        Raises:
            TokenExchangeError: On token endpoint rejection, network failure
                or an unparsable response
        """
        extra = {key: value for key, value in params.items() if value is not None}
        grant_type = extra.pop("grant_type", "authorization_code")

        try:
            async with self._session() as client:
                token = await client.fetch_token(
                    self._token_url,
                    grant_type=grant_type,
                    code=code,
                    **extra,
                )
        except OAuthError as e:
            logger.warning(
                f"Token endpoint rejected authorization code: {e}",
                extra={"error": str(e.error)},
            )
            raise TokenExchangeError(
                f"Failed to obtain access token: {e.description or e.error}", e
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Token request failed: {e}")
            raise TokenExchangeError(f"Failed to obtain access token: {e}", e) from e
        except ValueError as e:
            logger.error(f"Invalid token endpoint response: {e}")
            raise TokenExchangeError("Invalid token endpoint response", e) from e

        if not token or "access_token" not in token:
            raise TokenExchangeError("Token endpoint response has no access_token")

        return TokenResponse.from_token_endpoint(dict(token))

    async def get(self, url: str, access_token: str) -> tuple[bytes, httpx.Response]:
        """
        GET a protected resource with a bearer access token.

        Raises:
            OAuthRequestError: On network failure or non-2xx status
        """
        token = {"access_token": access_token, "token_type": "Bearer"}

        try:
            async with self._session(token=token) as client:
                response = await client.get(url)
        except httpx.HTTPError as e:
            logger.error(f"Authenticated GET failed: {e}")
            raise OAuthRequestError(None, str(e)) from e

        if not response.is_success:
            logger.warning(
                f"Authenticated GET returned {response.status_code}",
                extra={"status_code": response.status_code},
            )
            raise OAuthRequestError(response.status_code, response.content)

        return response.content, response
