"""
Facebook authorization-code strategy.

Drives one authentication attempt end-to-end:

    validate request -> exchange code -> load profile (unless skipped)
    -> verify user -> AuthSuccess | AuthFailure | AuthError

Token exchange failures are authentication failures (an invalid or expired
code is a normal rejection). Anything that goes wrong after the exchange is
an error, since the credentials were already proven valid.
"""

import inspect
import logging
from typing import Any

from facebook_authcode.config import StrategyConfig
from facebook_authcode.core.domain import (
    AuthError,
    AuthFailure,
    AuthOutcome,
    AuthSuccess,
    InboundRequest,
    NormalizedProfile,
    ProviderErrorInfo,
    TokenResponse,
    Verified,
)
from facebook_authcode.core.ports import (
    AuthenticatedFetcher,
    ProfileLoader,
    TokenExchanger,
    VerifyCallback,
)
from facebook_authcode.core.profile import FacebookProfileLoader


logger = logging.getLogger(__name__)

AUTHORIZATION_CODE_GRANT = "authorization_code"


def _split_verified(result: Any) -> tuple[Any, Any]:
    """Accept either `user` or `Verified(user, info)` from the verify callback."""
    if isinstance(result, Verified):
        return result.user, result.info
    return result, None


class FacebookAuthCodeStrategy:
    """
    Authenticates requests carrying a Facebook authorization code.

    The strategy holds no per-request state; one instance can serve
    concurrent attempts.
    """

    name = "facebook-authcode"

    def __init__(
        self,
        config: StrategyConfig,
        verify: VerifyCallback,
        token_exchanger: TokenExchanger,
        fetcher: AuthenticatedFetcher | None = None,
        profile_loader: ProfileLoader | None = None,
    ):
        config.validate()
        if profile_loader is None:
            if fetcher is None:
                raise ValueError("Either fetcher or profile_loader is required")
            profile_loader = FacebookProfileLoader(
                fetcher,
                profile_url=config.profile_url,
                profile_fields=config.profile_fields,
                enable_proof=config.enable_proof,
                client_secret=config.client_secret,
            )

        self._config = config
        self._verify = verify
        self._token_exchanger = token_exchanger
        self._profile_loader = profile_loader

    @property
    def config(self) -> StrategyConfig:
        return self._config

    async def authenticate(self, request: InboundRequest) -> AuthOutcome:
        """
        Run one authentication attempt.

        Args:
            request: The inbound request (body, query, native request)

        Returns:
            Exactly one of AuthSuccess, AuthFailure or AuthError
        """
        query = request.query or {}

        if query.get("error"):
            info = ProviderErrorInfo.from_query(query)
            logger.warning(
                f"Provider reported OAuth error: {info.error}",
                extra={
                    "strategy": self.name,
                    "error_code": info.error_code,
                    "error_reason": info.error_reason,
                },
            )
            return AuthFailure(info)

        if request.body is None:
            logger.info("Rejected request without body", extra={"strategy": self.name})
            return AuthFailure()

        auth_code = request.param("code")
        redirect_uri = request.param("redirectUri")

        if not auth_code:
            logger.info(
                "Rejected request without authorization code",
                extra={"strategy": self.name},
            )
            return AuthFailure()

        try:
            tokens = await self._exchange_auth_code(auth_code, redirect_uri)
        except Exception as e:
            logger.warning(
                f"Authorization code exchange failed: {e}",
                extra={"strategy": self.name},
            )
            return AuthFailure(e)

        try:
            profile = await self._load_user_profile(tokens.access_token)
        except Exception as e:
            logger.error(
                f"Failed to load user profile: {e}",
                extra={"strategy": self.name},
            )
            return AuthError(e)

        return await self._verify_user(request, tokens, profile)

    async def _exchange_auth_code(
        self, auth_code: str, redirect_uri: str | None
    ) -> TokenResponse:
        params = {
            "grant_type": AUTHORIZATION_CODE_GRANT,
            "redirect_uri": redirect_uri,
        }
        return await self._token_exchanger.exchange(auth_code, params)

    async def _load_user_profile(self, access_token: str) -> NormalizedProfile | None:
        """Load the profile unless the skip policy says otherwise."""
        if await self._config.skip_user_profile.should_skip(access_token):
            logger.debug("Skipping user profile", extra={"strategy": self.name})
            return None
        return await self._profile_loader.load(access_token)

    async def _verify_user(
        self,
        request: InboundRequest,
        tokens: TokenResponse,
        profile: NormalizedProfile | None,
    ) -> AuthOutcome:
        args: tuple[Any, ...] = (tokens.access_token, tokens.refresh_token, profile)
        if self._config.pass_req_to_callback:
            args = (request, *args)

        try:
            result = self._verify(*args)
            if inspect.isawaitable(result):
                result = await result
        except Exception as e:
            logger.error(
                f"Verify callback raised: {e}",
                extra={"strategy": self.name},
                exc_info=True,
            )
            return AuthError(e)

        user, info = _split_verified(result)
        if not user:
            logger.info("Verify callback rejected user", extra={"strategy": self.name})
            return AuthFailure(info)

        logger.info(
            "Authenticated user",
            extra={"strategy": self.name, "profile_id": profile.id if profile else None},
        )
        return AuthSuccess(user, info)
