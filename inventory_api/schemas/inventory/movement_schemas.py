# inventory_api/schemas/inventory/movement_schemas.py

from pydantic import BaseModel, Field, AliasChoices, field_validator
from typing import Optional
from datetime import datetime

from inventory_api.constants.quantity import MAX_QUANTITY
from inventory_api.utils.text import coerce_text, reject_bool


class MovementCreate(BaseModel):
    variant_id: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("variantId", "variant_id"),
    )
    type: Optional[str] = None
    quantity: Optional[int] = Field(default=None, le=MAX_QUANTITY)
    user: Optional[str] = None
    note: Optional[str] = None
    # A client-sent "time" is accepted and ignored; the server stamps movements

    coerce_text_fields = field_validator("type", "user", "note", mode="before")(coerce_text)
    strict_integers = field_validator("variant_id", "quantity", mode="before")(reject_bool)


class MovementOut(BaseModel):
    id: int
    product_id: Optional[int]
    variant_id: Optional[int]
    type: str
    quantity: int
    user: Optional[str]
    time: datetime
    note: Optional[str]
    product_name: Optional[str] = Field(default=None, serialization_alias="productName")
    variant: str = ""
