"""
Facebook OAuth 2.0 authorization-code authentication.

Exchanges an authorization code received by a client for tokens, loads and
normalizes the Facebook profile, and delegates acceptance of the user to an
application-supplied verify callback.
"""

from facebook_authcode.config import StrategyConfig, get_strategy_config
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
from facebook_authcode.core.exceptions import (
    AuthCodeError,
    FacebookGraphAPIError,
    InternalOAuthError,
    OAuthRequestError,
    ProfileParseError,
    TokenExchangeError,
)
from facebook_authcode.core.skip import AsyncSkip, FixedSkip, SyncSkip
from facebook_authcode.core.strategy import FacebookAuthCodeStrategy
from facebook_authcode.wiring import create_strategy

__version__ = "1.0.0"

__all__ = [
    "AsyncSkip",
    "AuthCodeError",
    "AuthError",
    "AuthFailure",
    "AuthOutcome",
    "AuthSuccess",
    "FacebookAuthCodeStrategy",
    "FacebookGraphAPIError",
    "FixedSkip",
    "InboundRequest",
    "InternalOAuthError",
    "NormalizedProfile",
    "OAuthRequestError",
    "ProfileParseError",
    "ProviderErrorInfo",
    "StrategyConfig",
    "SyncSkip",
    "TokenExchangeError",
    "TokenResponse",
    "Verified",
    "create_strategy",
    "get_strategy_config",
]
