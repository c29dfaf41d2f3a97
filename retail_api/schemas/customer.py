"""Customer schemas for API request/response."""

from datetime import datetime
from typing import Any

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

REQUIRED_FIELDS = ["username", "email", "password", "first_name", "last_name"]


class CustomerIn(BaseModel):
    """Body of create and update; update replaces every mutable field."""

    username: StrictStr = Field(min_length=1)
    email: StrictStr = Field(min_length=1)
    password: StrictStr = Field(min_length=1)
    first_name: StrictStr = Field(min_length=1)
    last_name: StrictStr = Field(min_length=1)
    phone: str | None = None
    address: str | dict[str, Any] | None = None


class CustomerResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    username: str
    email: str
    first_name: str
    last_name: str
    phone: str | None = None
    address: str | dict[str, Any] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_object_id(cls, value: Any) -> Any:
        if isinstance(value, ObjectId):
            return str(value)
        return value


# ── Write results (mirror the driver's result objects) ──
class InsertResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    acknowledged: bool
    inserted_id: str = Field(alias="insertedId")


class UpdateResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    acknowledged: bool
    matched_count: int = Field(alias="matchedCount")
    modified_count: int = Field(alias="modifiedCount")


class DeleteResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    acknowledged: bool
    deleted_count: int = Field(alias="deletedCount")


# ── Envelopes ──
class CustomerCreateResponse(BaseModel):
    data: InsertResult
    message: str = "Customer created successfully"


class CustomerListResponse(BaseModel):
    data: list[CustomerResponse]
    message: str = "Customers retrieved successfully"


class CustomerUpdateResponse(BaseModel):
    data: UpdateResult
    message: str = "Customer updated successfully"


class CustomerDeleteResponse(BaseModel):
    data: DeleteResult
    message: str = "Customer deleted successfully"
