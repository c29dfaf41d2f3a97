"""Customer endpoints. Create, update and delete require a bearer token."""

import logging
from datetime import datetime, timezone

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import APIRouter, Depends, status
from pydantic import ValidationError
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError
from starlette.concurrency import run_in_threadpool

from retail_api.core.deps import request_body_schema, request_payload, require_token
from retail_api.core.errors import InternalError, InvalidRequestError, NotFoundError
from retail_api.core.security import hash_password
from retail_api.db.base import get_customers_collection
from retail_api.schemas.auth import TokenClaims
from retail_api.schemas.customer import (
    REQUIRED_FIELDS,
    CustomerCreateResponse,
    CustomerDeleteResponse,
    CustomerIn,
    CustomerListResponse,
    CustomerResponse,
    CustomerUpdateResponse,
    DeleteResult,
    InsertResult,
    UpdateResult,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/customers", tags=["customers"])


def _is_missing(error: dict) -> bool:
    if error["loc"][0] not in REQUIRED_FIELDS:
        return False
    return error["type"] in ("missing", "string_too_short") or error["input"] is None


def _parse_customer(payload: dict) -> CustomerIn:
    try:
        return CustomerIn.model_validate(payload)
    except ValidationError as exc:
        errors = exc.errors()
        if any(_is_missing(error) for error in errors):
            raise InvalidRequestError("Missing required fields", fields=list(REQUIRED_FIELDS))
        detail = "; ".join(f"{error['loc'][0]}: {error['msg']}" for error in errors)
        raise InvalidRequestError("Invalid field values", error=detail)


def _object_id(customer_id: str) -> ObjectId:
    # A malformed id cannot match any stored document.
    try:
        return ObjectId(customer_id)
    except (InvalidId, TypeError):
        raise NotFoundError("Customer not found")


async def _to_document(body: CustomerIn) -> dict:
    """Mutable fields as stored; the password is kept only as a bcrypt hash."""
    return {
        "username": body.username,
        "email": body.email,
        "hashed_password": await run_in_threadpool(hash_password, body.password),
        "first_name": body.first_name,
        "last_name": body.last_name,
        "phone": body.phone,
        "address": body.address,
    }


@router.post(
    "",
    response_model=CustomerCreateResponse,
    status_code=status.HTTP_201_CREATED,
    openapi_extra=request_body_schema(CustomerIn),
)
async def create_customer(
    current_user: TokenClaims = Depends(require_token),
    payload: dict = Depends(request_payload),
    customers: AsyncCollection = Depends(get_customers_collection),
):
    """Create a new customer."""
    body = _parse_customer(payload)
    document = await _to_document(body)
    document["created_at"] = datetime.now(timezone.utc)

    try:
        result = await customers.insert_one(document)
    except PyMongoError as exc:
        logger.error("Insert of customer %s failed: %s", body.username, exc)
        raise InternalError(error=str(exc))

    logger.info("Customer %s created by %s", result.inserted_id, current_user.username)
    return CustomerCreateResponse(
        data=InsertResult(acknowledged=result.acknowledged, inserted_id=str(result.inserted_id)),
    )


@router.get("", response_model=CustomerListResponse)
async def list_customers(
    username: str | None = None,
    email: str | None = None,
    customers: AsyncCollection = Depends(get_customers_collection),
):
    """List customers, optionally filtered by exact username and/or email."""
    query = {}
    if username:
        query["username"] = username
    if email:
        query["email"] = email

    try:
        items = await customers.find(query, {"hashed_password": 0}).to_list(None)
    except PyMongoError as exc:
        logger.error("Customer query failed: %s", exc)
        raise InternalError(error=str(exc))

    try:
        data = [CustomerResponse.model_validate(c) for c in items]
    except ValidationError as exc:
        # Documents written outside this API may not carry every field.
        logger.error("Stored customer document is malformed: %s", exc)
        raise InternalError(error=str(exc))

    return CustomerListResponse(data=data)


@router.put(
    "/{customer_id}",
    response_model=CustomerUpdateResponse,
    openapi_extra=request_body_schema(CustomerIn),
)
async def update_customer(
    customer_id: str,
    current_user: TokenClaims = Depends(require_token),
    payload: dict = Depends(request_payload),
    customers: AsyncCollection = Depends(get_customers_collection),
):
    """Replace every mutable field of a customer."""
    body = _parse_customer(payload)
    oid = _object_id(customer_id)
    document = await _to_document(body)
    document["updated_at"] = datetime.now(timezone.utc)

    try:
        result = await customers.update_one({"_id": oid}, {"$set": document})
    except PyMongoError as exc:
        logger.error("Update of customer %s failed: %s", customer_id, exc)
        raise InternalError(error=str(exc))

    if result.matched_count == 0:
        raise NotFoundError("Customer not found")

    logger.info("Customer %s updated by %s", customer_id, current_user.username)
    return CustomerUpdateResponse(
        data=UpdateResult(
            acknowledged=result.acknowledged,
            matched_count=result.matched_count,
            modified_count=result.modified_count,
        ),
    )


@router.delete("/{customer_id}", response_model=CustomerDeleteResponse)
async def delete_customer(
    customer_id: str,
    current_user: TokenClaims = Depends(require_token),
    customers: AsyncCollection = Depends(get_customers_collection),
):
    """Delete a customer."""
    oid = _object_id(customer_id)

    try:
        result = await customers.delete_one({"_id": oid})
    except PyMongoError as exc:
        logger.error("Delete of customer %s failed: %s", customer_id, exc)
        raise InternalError(error=str(exc))

    if result.deleted_count == 0:
        raise NotFoundError("Customer not found")

    logger.info("Customer %s deleted by %s", customer_id, current_user.username)
    return CustomerDeleteResponse(
        data=DeleteResult(acknowledged=result.acknowledged, deleted_count=result.deleted_count),
    )
