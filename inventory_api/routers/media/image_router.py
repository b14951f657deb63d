# inventory_api/routers/media/image_router.py

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, File, Response, UploadFile

from inventory_api.core.blob_store import get_blob_store
from inventory_api.core.exceptions import ValidationError, NotFoundError
from inventory_api.constants.error_codes import ErrorCode
from inventory_api.storage.base import BlobStore
from inventory_api.schemas.media.image_schemas import (
    ImageUploadResult,
    ImageOut,
    ImageDeleteRequest,
    ImageDeleteResult,
)
from inventory_api.services.media.image_service import (
    CACHE_CONTROL,
    DEFAULT_CONTENT_TYPE,
    store_image,
    list_images,
    delete_images,
    load_image,
)

router = APIRouter(prefix="/api", tags=["Images"])
uploads_router = APIRouter(prefix="/uploads", tags=["Images"])


# =========================
# UPLOAD
# =========================
@router.post("/upload-image", response_model=ImageUploadResult, status_code=201)
async def upload_image_api(
    image: Optional[List[UploadFile]] = File(None),
    store: BlobStore = Depends(get_blob_store),
):
    if not image:
        raise ValidationError("No file uploaded", ErrorCode.NO_FILE_UPLOADED)

    files = []
    for upload in image:
        try:
            data = await upload.read()
        finally:
            await upload.close()
        files.append(
            await store_image(store, upload.filename, data, upload.content_type)
        )

    return ImageUploadResult(count=len(files), files=files, url=files[0].url)


# =========================
# LIST
# =========================
@router.get("/images", response_model=list[ImageOut])
async def list_images_api(store: BlobStore = Depends(get_blob_store)):
    return await list_images(store)


# =========================
# DELETE (BATCH)
# =========================
@router.delete("/images", response_model=ImageDeleteResult)
async def delete_images_api(
    payload: Optional[ImageDeleteRequest] = Body(None),
    store: BlobStore = Depends(get_blob_store),
):
    if payload is None or not payload.urls:
        raise ValidationError("urls must be a non-empty list")
    return await delete_images(store, payload.urls)


# =========================
# SERVE
# =========================
@uploads_router.get("/{key:path}")
async def serve_upload_api(key: str, store: BlobStore = Depends(get_blob_store)):
    blob = await load_image(store, key) if key and "/" not in key else None
    if blob is None:
        raise NotFoundError("Image not found", ErrorCode.IMAGE_NOT_FOUND)

    return Response(
        content=blob.data,
        media_type=blob.content_type or DEFAULT_CONTENT_TYPE,
        headers={"Cache-Control": CACHE_CONTROL},
    )
