"""Per-entity input rules.

Every check returns ``None`` when the input is acceptable and an
``ApiError`` otherwise; nothing here raises. Foreign key checks issue
read-only lookups against the gateway.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from pydantic.alias_generators import to_camel

from .database import Gateway
from .errors import ApiError, NotFoundError, Result, ValidationError
from .models import Brand, Category, Feedback, Product, User


@dataclass(frozen=True)
class EntityRules:
    name: str
    model: type
    required: Tuple[str, ...]
    # columns with a default: may be omitted, never set to null
    not_null: Tuple[str, ...] = ()
    non_negative: Tuple[str, ...] = ()
    integers: Tuple[str, ...] = ()
    rated: bool = False


USER = EntityRules("User", User, required=("email",))
CATEGORY = EntityRules("Category", Category, required=("name",))
BRAND = EntityRules("Brand", Brand, required=("name",))
PRODUCT = EntityRules("Product", Product, required=("name", "price", "category_id"),
                      not_null=("stock",), non_negative=("price", "stock"), integers=("stock",))
FEEDBACK = EntityRules("Feedback", Feedback, required=("rating", "author_id", "product_id"), rated=True)

# foreign key -> (referenced model, message when the row is missing)
FOREIGN_KEYS = {
    "category_id": (Category, "Category not found"),
    "author_id": (User, "User not found"),
    "product_id": (Product, "Product not found"),
}

RATING_MIN = 0
RATING_MAX = 5

# integer columns are 32-bit on PostgreSQL
MAX_INT = 2**31 - 1


def parse_id(raw: Optional[str], entity: str) -> Result[int]:
    """Turn the ``{id}`` path segment into an integer id."""
    if raw is None or not raw.strip():
        return ValidationError(f"{entity} ID is required")
    try:
        id = int(raw.strip())
    except ValueError:
        return ValidationError(f"Invalid {entity.lower()} ID format")
    if abs(id) > MAX_INT:
        return ValidationError(f"Invalid {entity.lower()} ID format")
    return id


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_required(fields: Dict[str, Any], required: Tuple[str, ...], partial: bool = False) -> Optional[ValidationError]:
    for name in required:
        if partial and name not in fields:
            continue
        if _is_blank(fields.get(name)):
            return ValidationError(f"{to_camel(name)} is required")
    return None


def validate_rating(value: Any) -> Optional[ValidationError]:
    if value is None:
        return None
    if value < RATING_MIN or value > RATING_MAX:
        return ValidationError(f"Rating must be between {RATING_MIN} and {RATING_MAX}")
    return None


def validate_non_negative(fields: Dict[str, Any], names: Tuple[str, ...]) -> Optional[ValidationError]:
    for name in names:
        value = fields.get(name)
        if value is not None and value < 0:
            return ValidationError(f"{name.capitalize()} must be non-negative")
    return None


def validate_int_range(fields: Dict[str, Any], names: Tuple[str, ...]) -> Optional[ValidationError]:
    for name in names:
        value = fields.get(name)
        if value is not None and abs(value) > MAX_INT:
            return ValidationError(f"{name.capitalize()} is too large")
    return None


async def validate_foreign_keys(gateway: Gateway, fields: Dict[str, Any]) -> Optional[NotFoundError]:
    # only keys present in the payload are checked
    for key, (model, message) in FOREIGN_KEYS.items():
        if fields.get(key) is None:
            continue
        # an id outside the column range cannot reference any row
        if abs(fields[key]) > MAX_INT:
            return NotFoundError(message)
        if await gateway.find_unique(model, fields[key]) is None:
            return NotFoundError(message)
    return None


async def _validate(gateway: Gateway, rules: EntityRules, fields: Dict[str, Any], partial: bool) -> Optional[ApiError]:
    error = validate_required(fields, rules.required, partial=partial)
    if error is None:
        error = validate_required(fields, rules.not_null, partial=True)
    if error is None:
        error = validate_non_negative(fields, rules.non_negative)
    if error is None:
        error = validate_int_range(fields, rules.integers)
    if error is None and rules.rated:
        error = validate_rating(fields.get("rating"))
    if error is None:
        error = await validate_foreign_keys(gateway, fields)
    return error


async def validate_create(gateway: Gateway, rules: EntityRules, fields: Dict[str, Any]) -> Optional[ApiError]:
    return await _validate(gateway, rules, fields, partial=False)


async def validate_update(gateway: Gateway, rules: EntityRules, fields: Dict[str, Any]) -> Optional[ApiError]:
    """Same checks as on create, restricted to the fields that were sent."""
    return await _validate(gateway, rules, fields, partial=True)
