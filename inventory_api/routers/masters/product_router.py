# inventory_api/routers/masters/product_router.py

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_api.core.db import get_db
from inventory_api.schemas.masters.product_schemas import (
    ProductIn,
    ProductOut,
    OkResponse,
)
from inventory_api.services.masters.product_service import (
    list_products,
    get_product,
    create_product,
    update_product,
    delete_product,
)
from inventory_api.utils.logger import get_logger

router = APIRouter(prefix="/api/products", tags=["Products"])
logger = get_logger(__name__)


@router.get("", response_model=list[ProductOut])
async def list_products_api(db: AsyncSession = Depends(get_db)):
    return await list_products(db)


@router.post("", response_model=ProductOut, status_code=201)
async def create_product_api(
    payload: ProductIn,
    db: AsyncSession = Depends(get_db),
):
    logger.debug("Create product", extra={"product_name": payload.name})
    return await create_product(db, payload)


@router.get("/{code}", response_model=ProductOut)
async def get_product_api(code: str, db: AsyncSession = Depends(get_db)):
    return await get_product(db, code)


@router.put("/{code}", response_model=OkResponse)
async def update_product_api(
    code: str,
    payload: ProductIn,
    db: AsyncSession = Depends(get_db),
):
    await update_product(db, code, payload)
    return OkResponse()


@router.delete("/{code}", response_model=OkResponse)
async def delete_product_api(code: str, db: AsyncSession = Depends(get_db)):
    await delete_product(db, code)
    return OkResponse()
