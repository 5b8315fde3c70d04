"""
FastAPI dependencies for the authorization-code endpoints.

Translates a Starlette request into the InboundRequest read by the strategy.
"""

import json
import logging
from typing import Annotated, Any

from fastapi import Depends, Request

from facebook_authcode.core.domain import InboundRequest


logger = logging.getLogger(__name__)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def _read_body(request: Request) -> dict[str, Any] | None:
    """
    Parse the request body into a mapping.

    Returns {} for an empty body and None when the body is present but is
    neither a JSON object nor form data.
    """
    raw = await request.body()
    if not raw:
        return {}

    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()

    if content_type in FORM_CONTENT_TYPES:
        form = await request.form()
        return {key: value for key, value in form.items() if isinstance(value, str)}

    if content_type == "application/json" or content_type.endswith("+json"):
        try:
            payload = json.loads(raw)
        except ValueError:
            logger.warning("Ignoring unparsable JSON body")
            return None
        return payload if isinstance(payload, dict) else None

    return None


async def read_inbound_request(request: Request) -> InboundRequest:
    """Provide the InboundRequest dependency."""
    return InboundRequest(
        body=await _read_body(request),
        query=dict(request.query_params),
        native=request,
    )


InboundAuthRequest = Annotated[InboundRequest, Depends(read_inbound_request)]
