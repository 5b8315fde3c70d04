"""
Port definitions (interfaces) for the authorization-code flow.

Ports define the contracts between the strategy and its collaborators.
The default adapters live in facebook_authcode.infrastructure; applications
may inject any object that satisfies these protocols.
"""

from typing import Any, Awaitable, Mapping, Protocol

from facebook_authcode.core.domain import NormalizedProfile, TokenResponse


class TokenExchanger(Protocol):
    """
    Port (interface) for exchanging an authorization code for tokens.
    """

    async def exchange(self, code: str, params: Mapping[str, Any]) -> TokenResponse:
        """
        Exchange an authorization code at the provider's token endpoint.

        Args:
            code: The authorization code received by the client
            params: Extra token request parameters (grant_type, redirect_uri)

        Returns:
            The issued tokens and exchange metadata

        Raises:
            Exception: Any failure; the strategy treats it as a rejection
        """
        ...


class AuthenticatedFetcher(Protocol):
    """
    Port (interface) for GET requests authorized with an access token.
    """

    async def get(self, url: str, access_token: str) -> tuple[bytes, Any]:
        """
        Perform an authenticated GET request.

        Returns:
            The response body and the underlying response object

        Raises:
            OAuthRequestError: On network failure or non-2xx status
        """
        ...


class ProfileLoader(Protocol):
    """Port (interface) for turning an access token into a profile."""

    async def load(self, access_token: str) -> NormalizedProfile:
        ...


class VerifyCallback(Protocol):
    """
    Application-supplied user verification.

    Called as `verify(access_token, refresh_token, profile)`, or with the
    inbound request prepended when `pass_req_to_callback` is set. Returns
    the user (falsy to reject) or `Verified(user, info)`, either directly
    or as an awaitable. Raising signals an internal error.
    """

    def __call__(self, *args: Any) -> Any | Awaitable[Any]:
        ...
