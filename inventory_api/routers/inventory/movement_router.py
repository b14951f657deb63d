# inventory_api/routers/inventory/movement_router.py

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_api.core.db import get_db
from inventory_api.schemas.inventory.movement_schemas import MovementCreate, MovementOut
from inventory_api.services.inventory.movement_service import (
    list_movements,
    record_movement,
)

router = APIRouter(prefix="/api/movements", tags=["Movements"])


# =========================
# LEDGER
# =========================
@router.get("", response_model=list[MovementOut])
async def list_movements_api(db: AsyncSession = Depends(get_db)):
    return await list_movements(db)


# =========================
# RECORD IN / OUT
# =========================
@router.post("", response_model=MovementOut, status_code=201)
async def record_movement_api(
    payload: MovementCreate,
    db: AsyncSession = Depends(get_db),
):
    return await record_movement(db, payload)
