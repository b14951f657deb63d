# inventory_api/schemas/masters/product_schemas.py

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List

from inventory_api.constants.quantity import MAX_QUANTITY
from inventory_api.utils.text import coerce_text, reject_bool


class VariantIn(BaseModel):
    color: Optional[str] = None
    size: Optional[str] = None
    quantity: Optional[int] = Field(default=None, ge=0, le=MAX_QUANTITY)
    img: Optional[str] = None

    coerce_text_fields = field_validator("color", "size", "img", mode="before")(coerce_text)
    strict_quantity = field_validator("quantity", mode="before")(reject_bool)


class ProductIn(BaseModel):
    name: Optional[str] = None
    cost: Optional[int] = None
    note: Optional[str] = None
    category: Optional[str] = None
    variants: Optional[List[VariantIn]] = None

    coerce_text_fields = field_validator("name", "note", "category", mode="before")(coerce_text)

    @field_validator("cost", mode="before")
    @classmethod
    def blank_cost_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class VariantOut(BaseModel):
    id: int
    product_id: int
    color: Optional[str]
    size: Optional[str]
    quantity: int
    img: Optional[str]

    class Config:
        from_attributes = True


class ProductOut(BaseModel):
    id: int
    code: str
    name: str
    cost: Optional[int]
    note: Optional[str]
    category: Optional[str]
    variants: List[VariantOut] = []


class OkResponse(BaseModel):
    ok: bool = True
