from retail_api.schemas.auth import TokenRequest, TokenResponse, TokenClaims
from retail_api.schemas.customer import (
    CustomerIn, CustomerResponse, CustomerCreateResponse, CustomerListResponse,
    CustomerUpdateResponse, CustomerDeleteResponse,
)

__all__ = [
    "TokenRequest", "TokenResponse", "TokenClaims",
    "CustomerIn", "CustomerResponse", "CustomerCreateResponse", "CustomerListResponse",
    "CustomerUpdateResponse", "CustomerDeleteResponse",
]
