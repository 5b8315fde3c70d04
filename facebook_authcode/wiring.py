"""
Default wiring of the strategy with its infrastructure adapters.
"""

from facebook_authcode.config import StrategyConfig, get_strategy_config
from facebook_authcode.core.ports import VerifyCallback
from facebook_authcode.core.strategy import FacebookAuthCodeStrategy
from facebook_authcode.infrastructure.oauth_client import (
    DEFAULT_TIMEOUT,
    AuthlibOAuth2Client,
)


def create_strategy(
    verify: VerifyCallback,
    config: StrategyConfig | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> FacebookAuthCodeStrategy:
    """
    Create a strategy backed by the authlib/httpx OAuth2 client.

    Args:
        verify: Application verification callback
        config: Strategy configuration (loaded from the environment if omitted)
        timeout: HTTP timeout in seconds for token and profile requests

    Returns:
        Configured FacebookAuthCodeStrategy
    """
    if config is None:
        config = get_strategy_config()

    client = AuthlibOAuth2Client.from_config(config, timeout=timeout)
    return FacebookAuthCodeStrategy(
        config, verify, token_exchanger=client, fetcher=client
    )
