# backoffice/crud.py
from typing import Any, Dict, Iterable, List, Optional, Type

from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from .database import Gateway
from .errors import ApiError, NotFoundError, Result, ValidationError, describe_errors, is_error
from .validators import EntityRules, parse_id, validate_create, validate_update

# error bodies documented on every route
ERROR_RESPONSES = {
    400: {"description": "Invalid request", "content": {"application/json": {"example": {"error": "name is required"}}}},
    404: {"description": "Entity not found", "content": {"application/json": {"example": {"error": "Product not found"}}}},
    500: {"description": "Server error", "content": {"application/json": {"example": {"error": "Internal Server Error"}}}},
}


async def list_rows(gateway: Gateway, rules: EntityRules, include: Iterable[str] = ()) -> List[Any]:
    return await gateway.find_many(rules.model, include=include)


async def get_row(gateway: Gateway, rules: EntityRules, raw_id: str, include: Iterable[str] = ()) -> Result[Any]:
    id = parse_id(raw_id, rules.name)
    if is_error(id):
        return id
    row = await gateway.find_unique(rules.model, id, include=include)
    if row is None:
        return NotFoundError(f"{rules.name} not found")
    return row


async def create_row(gateway: Gateway, rules: EntityRules, fields: Dict[str, Any], include: Iterable[str] = ()) -> Result[Any]:
    error = await validate_create(gateway, rules, fields)
    if error is not None:
        return error
    return await gateway.create(rules.model, fields, include=include)


def update_body(schema: Type[BaseModel]) -> Dict[str, Any]:
    """OpenAPI request body for routes that take the update payload as a raw dict."""
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": schema.model_json_schema(by_alias=True)}},
        }
    }


def parse_update(schema: Type[BaseModel], body: Any) -> Result[Dict[str, Any]]:
    """Validate an update payload into the fields that were actually sent."""
    try:
        payload = schema.model_validate(body)
    except SchemaError as e:
        return ValidationError(describe_errors(e.errors()))
    return payload.model_dump(exclude_unset=True)


async def update_row(gateway: Gateway, rules: EntityRules, raw_id: str, body: Any,
                     schema: Type[BaseModel], include: Iterable[str] = ()) -> Result[Any]:
    """Partial update: only the fields sent are written, everything else is kept.

    The id and the target row are resolved before the body is looked at, so a
    missing row is a 404 whatever the payload holds.
    """
    existing = await get_row(gateway, rules, raw_id)
    if is_error(existing):
        return existing

    fields = parse_update(schema, body)
    if is_error(fields):
        return fields

    error = await validate_update(gateway, rules, fields)
    if error is not None:
        return error

    row = await gateway.update(rules.model, existing.id, fields, include=include)
    if row is None:
        # deleted between the existence check and the write
        return NotFoundError(f"{rules.name} not found")
    return row


async def delete_row(gateway: Gateway, rules: EntityRules, raw_id: str) -> Optional[ApiError]:
    existing = await get_row(gateway, rules, raw_id)
    if is_error(existing):
        return existing
    if not await gateway.delete(rules.model, existing.id):
        return NotFoundError(f"{rules.name} not found")
    return None
