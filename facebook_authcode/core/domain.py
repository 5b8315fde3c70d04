"""
Core domain models for the authorization-code flow.

These models describe the inbound request, the token exchange result,
the normalized user profile and the terminal outcome of an attempt.
They are independent of the web framework and of the OAuth client library.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator


FACEBOOK_PROVIDER = "facebook"


@dataclass(frozen=True)
class InboundRequest:
    """
    The parts of an HTTP request read by the strategy.

    `body` is None when the request carries no parsed body payload at all.
    `native` holds the framework request object, if any, so it can be
    forwarded to the verification callback.
    """

    body: Mapping[str, Any] | None
    query: Mapping[str, Any] = field(default_factory=dict)
    native: Any = None

    def __post_init__(self):
        if self.query is None:
            object.__setattr__(self, "query", {})

    def param(self, name: str) -> Any:
        """Look up a parameter, preferring the body over the query string."""
        value = self.body.get(name) if self.body else None
        return value or self.query.get(name)


class ProviderErrorInfo(BaseModel):
    """Error details reported by the provider in the redirect query string."""

    error: str
    error_code: str | None = None
    error_description: str | None = None
    error_reason: str | None = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_query(cls, query: Mapping[str, Any]) -> "ProviderErrorInfo":
        """Build the error info from the query parameters of a failed flow."""

        def _get(key: str) -> str | None:
            value = query.get(key)
            return None if value is None else str(value)

        return cls(
            error=str(query["error"]),
            error_code=_get("error_code"),
            error_description=_get("error_description"),
            error_reason=_get("error_reason"),
        )


class TokenResponse(BaseModel):
    """Result of exchanging an authorization code at the token endpoint."""

    access_token: str = Field(description="OAuth2 access token")
    refresh_token: str | None = Field(
        default=None, description="OAuth2 refresh token, if issued"
    )
    params: dict[str, Any] = Field(
        default_factory=dict,
        description="Remaining token endpoint fields (expires_in, token_type...)",
    )

    @classmethod
    def from_token_endpoint(cls, token_data: Mapping[str, Any]) -> "TokenResponse":
        """
        Create a TokenResponse from a raw token endpoint payload.

        Args:
            token_data: Token dict returned by the OAuth client

        Returns:
            TokenResponse instance
        """
        params = {
            key: value
            for key, value in token_data.items()
            if key not in ("access_token", "refresh_token")
        }
        return cls(
            access_token=token_data["access_token"],
            refresh_token=token_data.get("refresh_token"),
            params=params,
        )


class ProfileName(BaseModel):
    """Best-effort decomposition of the user's name."""

    family_name: str | None = Field(default=None, alias="familyName")
    given_name: str | None = Field(default=None, alias="givenName")

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class ProfileEmail(BaseModel):
    """An email address entry of a profile."""

    value: str | None = None

    model_config = ConfigDict(frozen=True)


class NormalizedProfile(BaseModel):
    """
    Provider-agnostic user profile.

    `provider` and `id` are always present. `raw` and `json_` keep the
    identity endpoint response verbatim for consumers that need fields
    outside the canonical shape.
    """

    provider: str = Field(default=FACEBOOK_PROVIDER, description="Provider identifier")
    id: str = Field(description="Provider-unique subject identifier")
    display_name: str | None = Field(default=None, alias="displayName")
    name: ProfileName = Field(default_factory=ProfileName)
    emails: list[ProfileEmail] = Field(default_factory=list)
    raw: str = Field(alias="_raw", description="Response body as received")
    json_: dict[str, Any] = Field(alias="_json", description="Parsed response body")

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        """Graph API ids are numeric strings, accept integers as well."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @classmethod
    def from_graph_payload(cls, raw: str, payload: dict[str, Any]) -> "NormalizedProfile":
        """
        Map a Graph API `/me` payload onto the canonical profile.

        Args:
            raw: Response body as text
            payload: Parsed response body

        Returns:
            NormalizedProfile for the `facebook` provider
        """
        return cls(
            provider=FACEBOOK_PROVIDER,
            id=payload.get("id"),
            display_name=payload.get("name"),
            name=ProfileName(
                family_name=payload.get("family_name"),
                given_name=payload.get("given_name"),
            ),
            emails=[ProfileEmail(value=payload.get("email"))],
            raw=raw,
            json_=payload,
        )


@dataclass(frozen=True)
class Verified:
    """
    A verify callback result carrying extra info alongside the user.

    Verify callbacks return either the user itself or Verified(user, info).
    Any other return value, tuples included, is taken as the user.
    """

    user: Any
    info: Any = None


@dataclass(frozen=True)
class AuthSuccess:
    """The verification callback accepted the user."""

    user: Any
    info: Any = None


@dataclass(frozen=True)
class AuthFailure:
    """Authentication was rejected; the end user may retry."""

    info: Any = None


@dataclass(frozen=True)
class AuthError:
    """A system fault unrelated to the user's credentials."""

    error: BaseException


AuthOutcome = AuthSuccess | AuthFailure | AuthError
