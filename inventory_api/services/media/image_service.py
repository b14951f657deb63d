# inventory_api/services/media/image_service.py

import re
import secrets
import time
from typing import Any
from urllib.parse import quote, unquote, urlsplit

from inventory_api.storage.base import BlobStore, StoredBlob
from inventory_api.schemas.media.image_schemas import (
    UploadedImage,
    ImageOut,
    ImageDeleteResult,
)
from inventory_api.utils.logger import get_logger

logger = get_logger(__name__)

URL_PREFIX = "/uploads/"
DEFAULT_CONTENT_TYPE = "image/jpeg"
CACHE_CONTROL = "public, max-age=31536000"

_EXTENSION_RE = re.compile(r"\.[A-Za-z0-9]+$")


def generate_key(filename: str | None) -> str:
    """'<epoch ms>-<random suffix><.ext>', keeping the upload's extension."""
    match = _EXTENSION_RE.search(filename or "")
    ext = match.group(0) if match else ""
    return f"{int(time.time() * 1000)}-{secrets.token_hex(6)}{ext}"


def url_for_key(key: str) -> str:
    return f"{URL_PREFIX}{quote(key)}"


def key_from_url(url: Any) -> str | None:
    """Storage key from an /uploads/ URL (absolute or relative); None if unusable."""
    if not isinstance(url, str) or not url.strip():
        return None
    try:
        path = urlsplit(url.strip()).path
    except ValueError:
        return None
    if path.startswith(URL_PREFIX):
        path = path[len(URL_PREFIX):]
    key = unquote(path).lstrip("/")
    # Only flat keys are ever generated
    if not key or "/" in key:
        return None
    return key


# ---------------- PUT ----------------
async def store_image(
    store: BlobStore,
    filename: str | None,
    data: bytes,
    content_type: str | None = None,
) -> UploadedImage:
    key = generate_key(filename)
    await store.put(key, data, content_type)
    logger.info("Stored image %s (%d bytes)", key, len(data))
    return UploadedImage(key=key, url=url_for_key(key), filename=filename or key)


# ---------------- LIST ----------------
async def list_images(store: BlobStore) -> list[ImageOut]:
    return [ImageOut(url=url_for_key(k), filename=k) for k in await store.list()]


# ---------------- DELETE ----------------
async def delete_images(store: BlobStore, urls: list[Any]) -> ImageDeleteResult:
    deleted: list[Any] = []
    not_found: list[Any] = []

    for url in urls:
        key = key_from_url(url)
        if key is None:
            not_found.append(url)
            continue

        try:
            removed = await store.delete(key)
        except Exception:
            # One bad entry must not abort the batch
            logger.exception("Failed to delete image %s", key)
            removed = False

        (deleted if removed else not_found).append(url)

    logger.info("Deleted %d images, %d not found", len(deleted), len(not_found))
    return ImageDeleteResult(
        deleted_count=len(deleted),
        deleted=deleted,
        not_found=not_found,
    )


# ---------------- SERVE ----------------
async def load_image(store: BlobStore, key: str) -> StoredBlob | None:
    return await store.get(key)
