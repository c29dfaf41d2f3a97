"""Dependency injection: bearer-token gate and request payload parsing."""

import logging

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from pydantic import BaseModel

from retail_api.core.errors import APIError, InvalidRequestError
from retail_api.core.security import verify_access_token
from retail_api.schemas.auth import TokenClaims

logger = logging.getLogger(__name__)

# auto_error=False: a missing or non-Bearer header yields None so the gate can
# answer 401 itself instead of FastAPI's default.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/generateToken", auto_error=False)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def require_token(
    request: Request,
    token: str | None = Depends(oauth2_scheme),
) -> TokenClaims:
    """Verify the bearer token and attach its claims to ``request.state.user``.

    Raises 401 when no token is presented and 403 when it does not verify.
    """
    try:
        claims = verify_access_token(token)
    except APIError as exc:
        logger.warning(
            "Rejected %s %s: %s", request.method, request.url.path, exc.message
        )
        raise
    request.state.user = claims
    return claims


async def request_payload(request: Request) -> dict:
    """Read the body as a dict, from JSON or from a submitted form."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        return {key: value for key, value in form.items() if isinstance(value, str)}

    if not (await request.body()).strip():
        return {}
    try:
        payload = await request.json()
    except ValueError:
        raise InvalidRequestError("Malformed request body")
    if not isinstance(payload, dict):
        raise InvalidRequestError("Malformed request body")
    return payload


def request_body_schema(model: type[BaseModel]) -> dict:
    """``openapi_extra`` documenting a body read through ``request_payload``."""
    schema = model.model_json_schema()
    return {
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {"schema": schema},
                "application/x-www-form-urlencoded": {"schema": schema},
            },
        }
    }
