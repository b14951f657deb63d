# tests/test_movement_service.py
import asyncio

import pytest
from sqlalchemy import func, select

from inventory_api.constants.quantity import MAX_QUANTITY
from inventory_api.core.db import AsyncSessionLocal
from inventory_api.core.exceptions import InsufficientStockError, NotFoundError, ValidationError
from inventory_api.models.inventory.movement_models import Movement
from inventory_api.models.masters.product_models import ProductVariant
from inventory_api.schemas.inventory.movement_schemas import MovementCreate
from inventory_api.schemas.masters.product_schemas import ProductIn, VariantIn
from inventory_api.services.inventory.movement_service import record_movement
from inventory_api.services.masters.product_service import create_product

pytestmark = pytest.mark.asyncio


async def _variant_with(quantity: int) -> int:
    async with AsyncSessionLocal() as s:
        product = await create_product(
            s,
            ProductIn(name="Tee", variants=[VariantIn(color="Red", size="M", quantity=quantity)]),
        )
    return product.variants[0].id


async def _quantity(variant_id: int) -> int:
    async with AsyncSessionLocal() as s:
        value = await s.scalar(
            select(ProductVariant.quantity).where(ProductVariant.id == variant_id)
        )
        await s.rollback()
        return value


async def _ledger_count(variant_id: int) -> int:
    async with AsyncSessionLocal() as s:
        value = await s.scalar(
            select(func.count()).select_from(Movement).where(Movement.variant_id == variant_id)
        )
        await s.rollback()
        return value


async def _move(variant_id: int, type_: str, qty: int):
    async with AsyncSessionLocal() as s:
        return await record_movement(
            s, MovementCreate(variantId=variant_id, type=type_, quantity=qty)
        )


async def test_in_then_out_updates_quantity_and_ledger():
    vid = await _variant_with(0)

    inbound = await _move(vid, "IN", 5)
    outbound = await _move(vid, "OUT", 3)

    assert (inbound.type, inbound.quantity) == ("IN", 5)
    assert (outbound.type, outbound.quantity) == ("OUT", 3)
    assert outbound.product_name == "Tee"
    assert outbound.variant == "Red / M"
    assert outbound.time.tzinfo is not None

    assert await _quantity(vid) == 2
    assert await _ledger_count(vid) == 2


async def test_out_beyond_stock_is_rejected_without_side_effects():
    vid = await _variant_with(2)

    with pytest.raises(InsufficientStockError) as excinfo:
        await _move(vid, "OUT", 3)

    assert excinfo.value.status_code == 400
    assert excinfo.value.details == {"requested": 3, "available": 2}
    assert await _quantity(vid) == 2
    assert await _ledger_count(vid) == 0


async def test_out_of_exact_stock_reaches_zero():
    vid = await _variant_with(4)

    await _move(vid, "out", 4)

    assert await _quantity(vid) == 0


async def test_unknown_variant_and_bad_input():
    with pytest.raises(NotFoundError):
        await _move(987654, "IN", 1)

    vid = await _variant_with(1)
    for type_, qty in (("MOVE", 1), (None, 1), ("IN", 0), ("IN", -2), ("IN", None)):
        with pytest.raises(ValidationError):
            await _move(vid, type_, qty)

    assert await _quantity(vid) == 1
    assert await _ledger_count(vid) == 0


async def test_concurrent_outbound_never_oversells():
    vid = await _variant_with(10)

    results = await asyncio.gather(
        _move(vid, "OUT", 6),
        _move(vid, "OUT", 6),
        return_exceptions=True,
    )

    succeeded = [r for r in results if not isinstance(r, Exception)]
    rejected = [r for r in results if isinstance(r, InsufficientStockError)]
    assert len(succeeded) == 1
    assert len(rejected) == 1
    assert rejected[0].details == {"requested": 6, "available": 4}

    assert await _quantity(vid) == 4
    assert await _ledger_count(vid) == 1


async def test_concurrent_inbound_accumulates():
    vid = await _variant_with(0)

    await asyncio.gather(*(_move(vid, "IN", 1) for _ in range(5)))

    assert await _quantity(vid) == 5
    assert await _ledger_count(vid) == 5


async def test_inbound_cannot_push_quantity_past_the_column_limit():
    vid = await _variant_with(MAX_QUANTITY - 1)

    await _move(vid, "IN", 1)
    with pytest.raises(ValidationError) as excinfo:
        await _move(vid, "IN", 1)

    assert excinfo.value.details == {"requested": 1, "available": MAX_QUANTITY}
    assert await _quantity(vid) == MAX_QUANTITY
    assert await _ledger_count(vid) == 1
