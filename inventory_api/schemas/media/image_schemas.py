# inventory_api/schemas/media/image_schemas.py

from pydantic import BaseModel, Field
from typing import Any, List, Optional


class UploadedImage(BaseModel):
    key: str
    url: str
    filename: str


class ImageUploadResult(BaseModel):
    ok: bool = True
    count: int
    files: List[UploadedImage]
    # First uploaded URL, for single-image clients
    url: Optional[str] = None


class ImageOut(BaseModel):
    url: str
    filename: str


class ImageDeleteRequest(BaseModel):
    urls: Optional[List[Any]] = None


class ImageDeleteResult(BaseModel):
    ok: bool = True
    deleted_count: int = Field(serialization_alias="deletedCount")
    deleted: List[Any]
    not_found: List[Any] = Field(serialization_alias="notFound")
