"""Token issuance endpoint."""

import logging

from fastapi import APIRouter, Depends
from pydantic import ValidationError

from retail_api.core.deps import request_body_schema, request_payload
from retail_api.core.errors import InvalidRequestError
from retail_api.core.security import create_access_token
from retail_api.schemas.auth import TokenRequest, TokenResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post(
    "/generateToken",
    response_model=TokenResponse,
    openapi_extra=request_body_schema(TokenRequest),
)
async def generate_token(payload: dict = Depends(request_payload)):
    """Issue a one-hour bearer token for the given username."""
    try:
        body = TokenRequest.model_validate(payload)
    except ValidationError:
        raise InvalidRequestError("Username is required")

    token = create_access_token(body.username)
    logger.info("Issued access token for %s", body.username)
    return TokenResponse(token=token)
