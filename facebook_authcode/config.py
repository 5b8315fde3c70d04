"""
Strategy configuration.

Holds the Facebook application credentials, endpoint URLs and per-strategy
options. Loaded from environment variables or built directly; immutable once
created.
"""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from facebook_authcode.core.skip import SkipUserProfile, as_skip_policy, NEVER_SKIP


logger = logging.getLogger(__name__)


# Facebook endpoints
FACEBOOK_AUTHORIZATION_URL = "https://www.facebook.com/v2.2/dialog/oauth"
FACEBOOK_TOKEN_URL = "https://graph.facebook.com/oauth/access_token"
FACEBOOK_PROFILE_URL = "https://graph.facebook.com/v2.2/me"

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in _TRUTHY


@dataclass(frozen=True)
class StrategyConfig:
    """
    Configuration for FacebookAuthCodeStrategy.

    `client_id` and `client_secret` are required; call validate() (the
    strategy does so at construction) to fail fast when they are missing.
    """

    client_id: str | None
    client_secret: str | None
    authorization_url: str = FACEBOOK_AUTHORIZATION_URL
    token_url: str = FACEBOOK_TOKEN_URL
    profile_url: str = FACEBOOK_PROFILE_URL
    pass_req_to_callback: bool = False
    skip_user_profile: SkipUserProfile = NEVER_SKIP
    profile_fields: tuple[str, ...] | None = None
    enable_proof: bool = False

    def __post_init__(self):
        # Empty strings count as "use the default endpoint"
        for attr, default in (
            ("authorization_url", FACEBOOK_AUTHORIZATION_URL),
            ("token_url", FACEBOOK_TOKEN_URL),
            ("profile_url", FACEBOOK_PROFILE_URL),
        ):
            if not getattr(self, attr):
                object.__setattr__(self, attr, default)
        object.__setattr__(
            self, "skip_user_profile", as_skip_policy(self.skip_user_profile)
        )
        if self.profile_fields is not None:
            object.__setattr__(self, "profile_fields", tuple(self.profile_fields))

    @classmethod
    def from_env(cls) -> "StrategyConfig":
        """Load configuration from environment variables."""
        fields_env = os.getenv("FACEBOOK_PROFILE_FIELDS", "")
        profile_fields = tuple(
            f.strip() for f in fields_env.split(",") if f.strip()
        ) or None

        return cls(
            client_id=os.getenv("FACEBOOK_CLIENT_ID"),
            client_secret=os.getenv("FACEBOOK_CLIENT_SECRET"),
            authorization_url=os.getenv("FACEBOOK_AUTHORIZATION_URL", ""),
            token_url=os.getenv("FACEBOOK_TOKEN_URL", ""),
            profile_url=os.getenv("FACEBOOK_PROFILE_URL", ""),
            pass_req_to_callback=_env_flag("FACEBOOK_PASS_REQ_TO_CALLBACK"),
            skip_user_profile=_env_flag("FACEBOOK_SKIP_USER_PROFILE"),
            profile_fields=profile_fields,
            enable_proof=_env_flag("FACEBOOK_ENABLE_PROOF"),
        )

    @property
    def is_configured(self) -> bool:
        """Check if the application credentials are present."""
        return bool(self.client_id and self.client_secret)

    def validate(self) -> None:
        """Validate required configuration. Call at startup to fail fast."""
        if not self.client_id:
            raise ValueError("client_id is required (FACEBOOK_CLIENT_ID)")
        if not self.client_secret:
            raise ValueError("client_secret is required (FACEBOOK_CLIENT_SECRET)")


@lru_cache()
def get_strategy_config() -> StrategyConfig:
    """Get strategy configuration singleton."""
    config = StrategyConfig.from_env()
    if not config.is_configured:
        logger.warning("Facebook OAuth not configured (missing credentials)")
    return config
