"""JWT token management and password hashing."""

import uuid
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext

from retail_api.core.config import settings
from retail_api.core.errors import InvalidTokenError, UnauthenticatedError
from retail_api.schemas.auth import TokenClaims

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(plain: str) -> str:
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def create_access_token(
    username: str,
    expires_delta: timedelta | None = None,
    secret_key: str | None = None,
) -> str:
    """Sign a token carrying the ``username`` claim.

    ``jti`` makes every issuance unique even within the same second.
    """
    now = datetime.now(timezone.utc)
    expire = now + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    payload = {
        "username": username,
        "iat": now,
        "exp": expire,
        "jti": uuid.uuid4().hex,
    }
    return jwt.encode(
        payload, secret_key or settings.JWT_TOKEN, algorithm=settings.ALGORITHM
    )


def decode_access_token(token: str) -> dict:
    """Decode and validate JWT. Raises JWTError on failure."""
    return jwt.decode(token, settings.JWT_TOKEN, algorithms=[settings.ALGORITHM])


def verify_access_token(token: str | None) -> TokenClaims:
    """Return the claims of ``token``.

    Raises UnauthenticatedError when no token is given and InvalidTokenError
    when one is given but does not verify.
    """
    if not token:
        raise UnauthenticatedError()
    try:
        payload = decode_access_token(token)
    except JWTError:
        raise InvalidTokenError()

    username = payload.get("username")
    if not isinstance(username, str) or not username:
        raise InvalidTokenError()
    return TokenClaims(username=username)
