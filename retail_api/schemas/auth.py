"""Auth request/response schemas."""

from pydantic import BaseModel, Field, StrictStr


class TokenRequest(BaseModel):
    username: StrictStr = Field(min_length=1)


class TokenResponse(BaseModel):
    token: str


class TokenClaims(BaseModel):
    """Verified claims of a bearer token."""

    username: str
