"""
Authorization-code API endpoints.

Provides the endpoint a client posts the received authorization code to:
- GET/POST {prefix}/token - Authenticate with a Facebook authorization code

Outcomes map to HTTP status codes: success 200, failure 401, error 500.
"""

import logging
from typing import Any, Callable

from fastapi import APIRouter, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from facebook_authcode.core.domain import (
    AuthError,
    AuthFailure,
    AuthOutcome,
    AuthSuccess,
)
from facebook_authcode.core.strategy import FacebookAuthCodeStrategy
from facebook_authcode.web.dependencies import InboundAuthRequest


logger = logging.getLogger(__name__)


def _encode_info(info: Any) -> Any:
    """Make failure/success info JSON-safe; exceptions become their message."""
    if isinstance(info, BaseException):
        return {"message": str(info)}
    return jsonable_encoder(info)


UserSerializer = Callable[[Any], Any]


def _error_response() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"status": "error", "message": "Authentication error"},
    )


def outcome_to_response(
    outcome: AuthOutcome, serialize_user: UserSerializer = jsonable_encoder
) -> JSONResponse:
    """
    Convert a strategy outcome to an HTTP response.

    Error details are logged, never returned to the client.

    Args:
        outcome: Result of FacebookAuthCodeStrategy.authenticate
        serialize_user: Turns the authenticated user into JSON-safe data
    """
    if isinstance(outcome, AuthSuccess):
        try:
            return JSONResponse(
                status_code=status.HTTP_200_OK,
                content={
                    "status": "success",
                    "user": serialize_user(outcome.user),
                    "info": _encode_info(outcome.info),
                },
            )
        except Exception as e:
            logger.error(f"Failed to serialize authenticated user: {e}", exc_info=True)
            return _error_response()

    if isinstance(outcome, AuthFailure):
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"status": "fail", "info": _encode_info(outcome.info)},
        )

    if isinstance(outcome, AuthError):
        logger.error(
            f"Authentication error: {outcome.error}",
            exc_info=(type(outcome.error), outcome.error, outcome.error.__traceback__),
        )
        return _error_response()

    raise TypeError(f"Unknown authentication outcome: {outcome!r}")


def create_auth_router(
    strategy: FacebookAuthCodeStrategy,
    prefix: str = "/auth/facebook",
    serialize_user: UserSerializer = jsonable_encoder,
) -> APIRouter:
    """
    Create the router exposing the authorization-code endpoint.

    Args:
        strategy: Configured strategy used for every request
        prefix: Route prefix
        serialize_user: Turns the authenticated user into JSON-safe data;
            defaults to FastAPI's jsonable_encoder

    Returns:
        APIRouter to include in the application
    """
    router = APIRouter(prefix=prefix, tags=["auth"])

    @router.api_route("/token", methods=["GET", "POST"])
    async def token(inbound: InboundAuthRequest):
        """
        Authenticate with an authorization code.

        The code and optional redirectUri are read from the body
        (JSON or form) or, failing that, from the query string.
        """
        outcome = await strategy.authenticate(inbound)
        return outcome_to_response(outcome, serialize_user)

    return router
