# inventory_api/services/inventory/movement_service.py

from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update

from inventory_api.models.inventory.movement_models import Movement
from inventory_api.models.masters.product_models import Product, ProductVariant, variant_label
from inventory_api.schemas.inventory.movement_schemas import MovementCreate, MovementOut
from inventory_api.constants.inventory_movement_type import MovementType
from inventory_api.constants.quantity import MAX_QUANTITY
from inventory_api.constants.error_codes import ErrorCode
from inventory_api.core.exceptions import (
    ValidationError,
    NotFoundError,
    InsufficientStockError,
)
from inventory_api.utils.text import clean_str
from inventory_api.utils.logger import get_logger

logger = get_logger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


# =====================================================
# LIST
# =====================================================
async def list_movements(db: AsyncSession) -> list[MovementOut]:
    stmt = (
        select(
            Movement,
            Product.name.label("product_name"),
            ProductVariant.color,
            ProductVariant.size,
        )
        .outerjoin(Product, Product.id == Movement.product_id)
        .outerjoin(ProductVariant, ProductVariant.id == Movement.variant_id)
        .order_by(Movement.time.desc(), Movement.id.desc())
    )

    rows = (await db.execute(stmt)).all()

    return [
        MovementOut(
            id=m.id,
            product_id=m.product_id,
            variant_id=m.variant_id,
            type=m.type,
            quantity=m.quantity,
            user=m.user,
            time=m.time,
            note=m.note,
            product_name=product_name,
            variant=variant_label(color, size),
        )
        for m, product_name, color, size in rows
    ]


# =====================================================
# RECORD
# =====================================================
async def record_movement(db: AsyncSession, payload: MovementCreate) -> MovementOut:
    """
    Apply one IN/OUT transition to a variant and append it to the ledger.

    The quantity change is a single conditional UPDATE, so two outbound
    requests can never both consume the same stock; the ledger row is written
    in the same transaction.
    """
    # ------------------------------------
    # 0. Basic validations
    # ------------------------------------
    if payload.variant_id is None:
        raise ValidationError("variantId is required")

    movement_type = MovementType.parse(payload.type)
    if movement_type is None:
        raise ValidationError(
            "type must be IN or OUT",
            ErrorCode.INVALID_MOVEMENT_TYPE,
        )

    qty = payload.quantity
    if qty is None or qty <= 0:
        raise ValidationError("quantity must be a positive integer")

    try:
        # ------------------------------------
        # 1. Resolve variant + owning product
        # ------------------------------------
        row = (
            await db.execute(
                select(ProductVariant, Product.name)
                .join(Product, Product.id == ProductVariant.product_id)
                .where(ProductVariant.id == payload.variant_id)
            )
        ).first()

        if not row:
            raise NotFoundError("Variant not found", ErrorCode.VARIANT_NOT_FOUND)

        variant, product_name = row

        # ------------------------------------
        # 2. Atomic quantity change
        # ------------------------------------
        stmt = update(ProductVariant).where(ProductVariant.id == variant.id)

        if movement_type is MovementType.IN:
            stmt = stmt.where(ProductVariant.quantity <= MAX_QUANTITY - qty).values(
                quantity=ProductVariant.quantity + qty
            )
        else:
            stmt = stmt.where(ProductVariant.quantity >= qty).values(
                quantity=ProductVariant.quantity - qty
            )

        new_quantity = await db.scalar(
            stmt.returning(ProductVariant.quantity).execution_options(
                synchronize_session=False
            )
        )

        if new_quantity is None:
            current = await db.scalar(
                select(ProductVariant.quantity)
                .where(ProductVariant.id == variant.id)
            )
            if current is None:
                raise NotFoundError("Variant not found", ErrorCode.VARIANT_NOT_FOUND)

            if movement_type is MovementType.IN:
                raise ValidationError(
                    f"quantity would exceed the maximum of {MAX_QUANTITY}",
                    details={"requested": qty, "available": current},
                )

            logger.warning(
                "Rejected OUT of %s on variant %s (available %s)",
                qty,
                variant.id,
                current,
            )
            raise InsufficientStockError(requested=qty, available=current)

        # ------------------------------------
        # 3. Ledger row
        # ------------------------------------
        movement = Movement(
            product_id=variant.product_id,
            variant_id=variant.id,
            type=movement_type.value,
            quantity=qty,
            user=clean_str(payload.user),
            time=_now(),
            note=clean_str(payload.note),
        )
        db.add(movement)
        await db.flush()

        await db.commit()

    except Exception:
        await db.rollback()
        raise

    logger.info(
        "Recorded %s %s on variant %s -> quantity %s",
        movement_type.value,
        qty,
        variant.id,
        new_quantity,
    )

    return MovementOut(
        id=movement.id,
        product_id=movement.product_id,
        variant_id=movement.variant_id,
        type=movement.type,
        quantity=movement.quantity,
        user=movement.user,
        time=movement.time,
        note=movement.note,
        product_name=product_name,
        variant=variant.label,
    )
