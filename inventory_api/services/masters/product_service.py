# inventory_api/services/masters/product_service.py

import uuid
from collections import defaultdict

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete

from inventory_api.models.masters.product_models import Product, ProductVariant
from inventory_api.models.inventory.movement_models import Movement
from inventory_api.schemas.masters.product_schemas import (
    ProductIn,
    ProductOut,
    VariantIn,
    VariantOut,
)
from inventory_api.core.exceptions import ValidationError, NotFoundError
from inventory_api.constants.error_codes import ErrorCode
from inventory_api.utils.text import clean_str
from inventory_api.utils.logger import get_logger

logger = get_logger(__name__)


def generate_product_code() -> str:
    return str(uuid.uuid4())


def _map_variant(variant: ProductVariant) -> VariantOut:
    return VariantOut(
        id=variant.id,
        product_id=variant.product_id,
        color=variant.color,
        size=variant.size,
        quantity=variant.quantity,
        img=variant.img,
    )


def _map_product(product: Product, variants: list[ProductVariant]) -> ProductOut:
    return ProductOut(
        id=product.id,
        code=product.code,
        name=product.name,
        cost=product.cost,
        note=product.note,
        category=product.category,
        variants=[_map_variant(v) for v in variants],
    )


def _scalar_fields(payload: ProductIn) -> dict:
    name = clean_str(payload.name)
    if not name:
        raise ValidationError("Product name must not be empty")

    return {
        "name": name,
        "cost": payload.cost,
        "note": clean_str(payload.note),
        "category": clean_str(payload.category),
    }


def _build_variant(product_id: int, item: VariantIn) -> ProductVariant:
    return ProductVariant(
        product_id=product_id,
        color=clean_str(item.color),
        size=clean_str(item.size),
        quantity=item.quantity if item.quantity is not None else 0,
        img=clean_str(item.img),
    )


async def _insert_variants(
    db: AsyncSession,
    product_id: int,
    items: list[VariantIn],
) -> list[ProductVariant]:
    variants = [_build_variant(product_id, item) for item in items]
    db.add_all(variants)
    await db.flush()
    return variants


async def _get_by_code(db: AsyncSession, code: str) -> Product:
    product = await db.scalar(select(Product).where(Product.code == code))
    if not product:
        raise NotFoundError("Product not found", ErrorCode.PRODUCT_NOT_FOUND)
    return product


async def _variants_of(db: AsyncSession, product_id: int) -> list[ProductVariant]:
    result = await db.execute(
        select(ProductVariant)
        .where(ProductVariant.product_id == product_id)
        .order_by(ProductVariant.id.asc())
    )
    return list(result.scalars().all())


# ---------------- LIST ----------------
async def list_products(db: AsyncSession) -> list[ProductOut]:
    products = (
        await db.execute(select(Product).order_by(Product.id.desc()))
    ).scalars().all()

    variants = (
        await db.execute(select(ProductVariant).order_by(ProductVariant.id.asc()))
    ).scalars().all()

    by_product: dict[int, list[ProductVariant]] = defaultdict(list)
    for v in variants:
        by_product[v.product_id].append(v)

    return [_map_product(p, by_product.get(p.id, [])) for p in products]


# ---------------- GET ----------------
async def get_product(db: AsyncSession, code: str) -> ProductOut:
    product = await _get_by_code(db, code)
    return _map_product(product, await _variants_of(db, product.id))


# ---------------- CREATE ----------------
async def create_product(db: AsyncSession, payload: ProductIn) -> ProductOut:
    fields = _scalar_fields(payload)

    product = Product(code=generate_product_code(), **fields)
    db.add(product)

    # Product and variants commit together or not at all
    try:
        await db.flush()
        variants = await _insert_variants(db, product.id, payload.variants or [])
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info(
        "Created product code=%s with %d variants", product.code, len(variants)
    )
    return _map_product(product, variants)


# ---------------- UPDATE ----------------
async def update_product(db: AsyncSession, code: str, payload: ProductIn) -> None:
    fields = _scalar_fields(payload)
    product = await _get_by_code(db, code)

    try:
        await db.execute(
            update(Product).where(Product.id == product.id).values(**fields)
        )

        # An empty or missing list keeps the current variants
        if payload.variants:
            await db.execute(
                delete(ProductVariant).where(ProductVariant.product_id == product.id)
            )
            await _insert_variants(db, product.id, payload.variants)

        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info(
        "Updated product code=%s (variants replaced: %s)",
        code,
        bool(payload.variants),
    )


# ---------------- DELETE ----------------
async def delete_product(db: AsyncSession, code: str) -> None:
    product = await _get_by_code(db, code)

    # Children first; not every engine cascades
    try:
        await db.execute(delete(Movement).where(Movement.product_id == product.id))
        await db.execute(
            delete(ProductVariant).where(ProductVariant.product_id == product.id)
        )
        await db.execute(delete(Product).where(Product.id == product.id))
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info("Deleted product code=%s", code)
