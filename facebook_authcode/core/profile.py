"""
Facebook profile normalizer.

Fetches the Graph API `/me` resource with an access token and maps the
Facebook-specific payload onto NormalizedProfile.
"""

import hashlib
import hmac
import json
import logging
from typing import Any, Iterable

import httpx
from pydantic import ValidationError

from facebook_authcode.core.domain import NormalizedProfile
from facebook_authcode.core.exceptions import (
    FacebookGraphAPIError,
    InternalOAuthError,
    OAuthRequestError,
    ProfileParseError,
)
from facebook_authcode.core.ports import AuthenticatedFetcher


logger = logging.getLogger(__name__)


def appsecret_proof(access_token: str, client_secret: str) -> str:
    """Compute the Graph API `appsecret_proof` for an access token."""
    return hmac.new(
        client_secret.encode("utf-8"),
        access_token.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


def parse_graph_error(data: str | bytes | None) -> FacebookGraphAPIError | None:
    """
    Extract a Graph API error object from a failed response body.

    Returns None when the body is not a Graph API error payload.
    """
    if not data:
        return None
    try:
        payload = json.loads(data)
    except (TypeError, ValueError):
        return None

    error = payload.get("error") if isinstance(payload, dict) else None
    if not isinstance(error, dict):
        return None

    return FacebookGraphAPIError(
        error.get("message", "Graph API error"),
        type=error.get("type"),
        code=error.get("code"),
        subcode=error.get("error_subcode"),
        trace_id=error.get("fbtrace_id"),
    )


def parse_profile(body: str | bytes) -> NormalizedProfile:
    """
    Parse a Graph API `/me` response body into a NormalizedProfile.

    Raises:
        ProfileParseError: If the body is not a JSON object with an `id`
    """
    try:
        raw = body.decode("utf-8") if isinstance(body, bytes) else body
        payload: Any = json.loads(raw)
    except ValueError as e:
        raise ProfileParseError(f"Invalid profile response: {e}") from e

    if not isinstance(payload, dict):
        raise ProfileParseError(
            f"Invalid profile response: expected an object, got {type(payload).__name__}"
        )

    try:
        return NormalizedProfile.from_graph_payload(raw, payload)
    except ValidationError as e:
        raise ProfileParseError(f"Invalid profile response: {e}") from e


class FacebookProfileLoader:
    """Loads and normalizes the Facebook user profile for an access token."""

    def __init__(
        self,
        fetcher: AuthenticatedFetcher,
        profile_url: str,
        profile_fields: Iterable[str] | None = None,
        enable_proof: bool = False,
        client_secret: str | None = None,
    ):
        if enable_proof and not client_secret:
            raise ValueError("enable_proof requires a client_secret")
        self._fetcher = fetcher
        self._profile_url = profile_url
        self._profile_fields = tuple(profile_fields) if profile_fields else ()
        self._enable_proof = enable_proof
        self._client_secret = client_secret or ""

    def profile_request_url(self, access_token: str) -> str:
        """Build the identity endpoint URL, including optional query parameters."""
        params: dict[str, str] = {}
        if self._profile_fields:
            params["fields"] = ",".join(self._profile_fields)
        if self._enable_proof:
            params["appsecret_proof"] = appsecret_proof(access_token, self._client_secret)

        if not params:
            return self._profile_url
        return str(httpx.URL(self._profile_url).copy_merge_params(params))

    async def load(self, access_token: str) -> NormalizedProfile:
        """
        Fetch the user profile and normalize it.

        Args:
            access_token: Access token issued by the token exchange

        Returns:
            NormalizedProfile built from the Graph API response

        Raises:
            InternalOAuthError: If the profile could not be fetched
            ProfileParseError: If the response could not be parsed
        """
        url = self.profile_request_url(access_token)

        try:
            body, _response = await self._fetcher.get(url, access_token)
        except OAuthRequestError as e:
            cause = parse_graph_error(e.data) or e
            logger.error(
                f"Failed to fetch Facebook profile: {cause}",
                extra={"status_code": e.status_code},
            )
            raise InternalOAuthError("failed to fetch user profile", cause) from e
        except Exception as e:
            logger.error(f"Failed to fetch Facebook profile: {e}")
            raise InternalOAuthError("failed to fetch user profile", e) from e

        profile = parse_profile(body)
        logger.debug("Loaded Facebook profile", extra={"profile_id": profile.id})
        return profile
