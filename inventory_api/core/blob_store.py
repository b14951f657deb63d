# inventory_api/core/blob_store.py

from functools import lru_cache

from inventory_api.core.config import (
    STORAGE_BACKEND,
    UPLOAD_DIR,
    S3_BUCKET,
    S3_PREFIX,
    S3_ENDPOINT_URL,
    S3_REGION,
    AWS_ACCESS_KEY_ID,
    AWS_SECRET_ACCESS_KEY,
)
from inventory_api.constants.error_codes import ErrorCode
from inventory_api.core.exceptions import InternalError
from inventory_api.storage.base import BlobStore
from inventory_api.storage.local import LocalBlobStore
from inventory_api.storage.s3 import S3BlobStore


@lru_cache(maxsize=1)
def _build_store() -> BlobStore | None:
    if STORAGE_BACKEND == "s3":
        if not S3_BUCKET:
            return None
        return S3BlobStore(
            bucket=S3_BUCKET,
            prefix=S3_PREFIX,
            endpoint_url=S3_ENDPOINT_URL,
            aws_access_key_id=AWS_ACCESS_KEY_ID,
            aws_secret_access_key=AWS_SECRET_ACCESS_KEY,
            region_name=S3_REGION,
        )
    return LocalBlobStore(UPLOAD_DIR)


# =====================================================
# DEPENDENCY
# =====================================================
def get_blob_store() -> BlobStore:
    store = _build_store()
    if store is None:
        raise InternalError("Bucket is not configured", ErrorCode.BUCKET_NOT_CONFIGURED)
    return store
