# inventory_api/services/masters/attribute_service.py

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func
from sqlalchemy.exc import IntegrityError

from inventory_api.models.masters.attribute_models import Attribute
from inventory_api.schemas.masters.attribute_schemas import (
    AttributeCreate,
    AttributeUpdate,
    AttributeOut,
)
from inventory_api.constants.attribute_type import ATTRIBUTE_TYPES
from inventory_api.constants.error_codes import ErrorCode
from inventory_api.core.exceptions import ValidationError, ConflictError, NotFoundError
from inventory_api.utils.text import clean_str
from inventory_api.utils.logger import get_logger

logger = get_logger(__name__)

INACTIVE_TOKENS = (0, "0", False, "false")


def normalize_status(value: Any) -> int:
    """0 for the inactive tokens, 1 for anything else (including None)."""
    return 0 if value in INACTIVE_TOKENS else 1


def is_truthy_flag(value: str | None) -> bool:
    return value is not None and value.strip().lower() in {"1", "true"}


def _map_attribute(attr: Attribute) -> AttributeOut:
    return AttributeOut(
        id=attr.id,
        type=attr.type,
        name=attr.name,
        color_code=attr.color_code,
        status=attr.status,
    )


# ---------------- LIST ----------------
async def list_attributes(
    db: AsyncSession,
    type: str | None = None,
    only_active: bool = False,
) -> list[AttributeOut]:
    stmt = select(Attribute)

    # Unknown types are ignored rather than rejected
    if type in ATTRIBUTE_TYPES:
        stmt = stmt.where(Attribute.type == type)

    if only_active:
        stmt = stmt.where(Attribute.status == 1)

    stmt = stmt.order_by(Attribute.type, func.lower(Attribute.name), Attribute.id)

    result = await db.execute(stmt)
    return [_map_attribute(a) for a in result.scalars().all()]


# ---------------- CREATE ----------------
async def create_attribute(db: AsyncSession, payload: AttributeCreate) -> AttributeOut:
    attr_type = clean_str(payload.type)
    if attr_type not in ATTRIBUTE_TYPES:
        raise ValidationError(
            "type must be 'color', 'size' or 'category'",
            ErrorCode.ATTRIBUTE_INVALID_TYPE,
        )

    name = clean_str(payload.name)
    if not name:
        raise ValidationError("Attribute name must not be empty")

    attr = Attribute(
        type=attr_type,
        name=name,
        color_code=clean_str(payload.color_code),
        status=normalize_status(payload.status),
    )
    db.add(attr)

    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        logger.warning("Duplicate attribute %s/%s", attr_type, name)
        raise ConflictError(
            "An attribute with this name already exists for this type",
            ErrorCode.ATTRIBUTE_EXISTS,
        )

    await db.refresh(attr)
    logger.info("Created attribute id=%s %s/%s", attr.id, attr.type, attr.name)
    return _map_attribute(attr)


# ---------------- UPDATE ----------------
async def update_attribute(
    db: AsyncSession,
    attribute_id: int,
    payload: AttributeUpdate,
) -> AttributeOut:
    attr = await db.get(Attribute, attribute_id)
    if not attr:
        raise NotFoundError("Attribute not found", ErrorCode.ATTRIBUTE_NOT_FOUND)

    supplied = payload.model_fields_set

    if "name" in supplied:
        name = clean_str(payload.name)
        if not name:
            raise ValidationError("Attribute name must not be empty")
        attr.name = name

    if "color_code" in supplied:
        attr.color_code = clean_str(payload.color_code)

    if "status" in supplied:
        attr.status = normalize_status(payload.status)

    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        logger.warning("Duplicate attribute name on update id=%s", attribute_id)
        raise ConflictError(
            "An attribute with this name already exists for this type",
            ErrorCode.ATTRIBUTE_EXISTS,
        )

    await db.refresh(attr)
    logger.info("Updated attribute id=%s", attr.id)
    return _map_attribute(attr)


# ---------------- DELETE ----------------
async def delete_attribute(db: AsyncSession, attribute_id: int) -> int:
    result = await db.execute(delete(Attribute).where(Attribute.id == attribute_id))

    if result.rowcount == 0:
        await db.rollback()
        raise NotFoundError("Attribute not found", ErrorCode.ATTRIBUTE_NOT_FOUND)

    await db.commit()
    logger.info("Deleted attribute id=%s", attribute_id)
    return result.rowcount
