# inventory_api/schemas/masters/attribute_schemas.py

from pydantic import BaseModel, Field, AliasChoices, field_validator
from typing import Any, Optional

from inventory_api.utils.text import coerce_text


class AttributeCreate(BaseModel):
    type: Optional[str] = None
    name: Optional[str] = None
    color_code: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("color_code", "colorCode"),
    )
    # 0 / "0" / false / "false" mean inactive, anything else active
    status: Any = None

    coerce_text_fields = field_validator("type", "name", "color_code", mode="before")(coerce_text)


class AttributeUpdate(BaseModel):
    name: Optional[str] = None
    color_code: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("color_code", "colorCode"),
    )
    status: Any = None

    coerce_text_fields = field_validator("name", "color_code", mode="before")(coerce_text)


class AttributeOut(BaseModel):
    id: int
    type: str
    name: str
    color_code: Optional[str]
    status: int

    class Config:
        from_attributes = True


class AttributeDeleteResult(BaseModel):
    ok: bool = True
    deleted: int
