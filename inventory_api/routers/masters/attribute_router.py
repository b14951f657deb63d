# inventory_api/routers/masters/attribute_router.py

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_api.core.db import get_db
from inventory_api.schemas.masters.attribute_schemas import (
    AttributeCreate,
    AttributeUpdate,
    AttributeOut,
    AttributeDeleteResult,
)
from inventory_api.services.masters.attribute_service import (
    list_attributes,
    create_attribute,
    update_attribute,
    delete_attribute,
    is_truthy_flag,
)

router = APIRouter(prefix="/api/attributes", tags=["Attributes"])


@router.get("", response_model=list[AttributeOut])
async def list_attributes_api(
    db: AsyncSession = Depends(get_db),
    type: str | None = Query(None, description="color | size | category"),
    only_active: str | None = Query(None, alias="onlyActive"),
):
    return await list_attributes(db, type=type, only_active=is_truthy_flag(only_active))


@router.post("", response_model=AttributeOut, status_code=201)
async def create_attribute_api(
    payload: AttributeCreate,
    db: AsyncSession = Depends(get_db),
):
    return await create_attribute(db, payload)


@router.put("/{attribute_id}", response_model=AttributeOut)
async def update_attribute_api(
    attribute_id: int,
    payload: AttributeUpdate,
    db: AsyncSession = Depends(get_db),
):
    return await update_attribute(db, attribute_id, payload)


@router.delete("/{attribute_id}", response_model=AttributeDeleteResult)
async def delete_attribute_api(
    attribute_id: int,
    db: AsyncSession = Depends(get_db),
):
    deleted = await delete_attribute(db, attribute_id)
    return AttributeDeleteResult(deleted=deleted)
