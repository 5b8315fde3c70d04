"""
Domain exceptions for the authorization-code flow.

The strategy maps these to terminal outcomes: token exchange errors become
authentication failures, everything raised after the exchange becomes an
error outcome.
"""

from typing import Any


class AuthCodeError(Exception):
    """Base exception for facebook_authcode errors."""

    pass


class InternalOAuthError(AuthCodeError):
    """
    Wraps an error reported by an OAuth collaborator.

    Raised when a call that required a valid access token (e.g. fetching the
    user profile) could not be completed.
    """

    def __init__(self, message: str, oauth_error: BaseException | None = None):
        super().__init__(message)
        self.message = message
        self.oauth_error = oauth_error

    def __str__(self) -> str:
        if self.oauth_error is None:
            return self.message
        return f"{self.message}: {self.oauth_error}"


class OAuthRequestError(AuthCodeError):
    """
    Raised when an authenticated request fails at the transport level.

    Carries the HTTP status code (None for network errors) and the raw
    response data so callers can inspect provider error payloads.
    """

    def __init__(self, status_code: int | None, data: str | bytes | None = None):
        super().__init__(f"OAuth request failed with status {status_code}")
        self.status_code = status_code
        self.data = data


class TokenExchangeError(AuthCodeError):
    """Raised when the token endpoint rejects the code or cannot be reached."""

    def __init__(self, message: str, cause: Any = None):
        super().__init__(message)
        self.cause = cause


class FacebookGraphAPIError(AuthCodeError):
    """Error object returned by the Facebook Graph API."""

    def __init__(
        self,
        message: str,
        type: str | None = None,
        code: int | None = None,
        subcode: int | None = None,
        trace_id: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.type = type
        self.code = code
        self.subcode = subcode
        self.trace_id = trace_id


class ProfileParseError(AuthCodeError):
    """Raised when the profile response cannot be turned into a profile."""

    pass
