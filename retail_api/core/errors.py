"""Error taxonomy shared by the token service and the customer endpoints.

Every error renders as the failure envelope ``{message, error?, fields?}``
through the exception handler registered in ``retail_api.main``.
"""

from fastapi import status


class APIError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal Server Error"

    def __init__(
        self,
        message: str | None = None,
        *,
        error: str | None = None,
        fields: list[str] | None = None,
    ):
        self.message = message or self.message
        self.error = error
        self.fields = fields
        super().__init__(self.message)

    @property
    def headers(self) -> dict[str, str] | None:
        return None

    def to_body(self) -> dict:
        body: dict = {"message": self.message}
        if self.error is not None:
            body["error"] = self.error
        if self.fields is not None:
            body["fields"] = self.fields
        return body


class InvalidRequestError(APIError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request"


class UnauthenticatedError(APIError):
    """No credentials were presented at all."""

    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Access token required."

    @property
    def headers(self) -> dict[str, str]:
        return {"WWW-Authenticate": "Bearer"}


class InvalidTokenError(APIError):
    """Credentials were presented but failed signature or expiry checks."""

    status_code = status.HTTP_403_FORBIDDEN
    message = "Invalid/expired access token."


class NotFoundError(APIError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class InternalError(APIError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal Server Error"
