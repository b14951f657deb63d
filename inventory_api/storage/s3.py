"""
S3-compatible blob store (AWS S3, R2, MinIO) for the edge deployment.

Usage::

    store = S3BlobStore(
        bucket="product-images",
        endpoint_url="https://<account>.r2.cloudflarestorage.com",
        aws_access_key_id="...",
        aws_secret_access_key="...",
    )
"""

from typing import List, Optional

import boto3
from botocore.exceptions import ClientError
from starlette.concurrency import run_in_threadpool

from inventory_api.storage.base import BlobStore, StoredBlob
from inventory_api.utils.logger import get_logger

logger = get_logger(__name__)

MISSING_KEY_CODES = {"NoSuchKey", "404", "NotFound"}


class S3BlobStore(BlobStore):
    def __init__(
        self,
        bucket: str,
        prefix: str = "uploads/",
        endpoint_url: Optional[str] = None,
        aws_access_key_id: Optional[str] = None,
        aws_secret_access_key: Optional[str] = None,
        region_name: Optional[str] = None,
        client=None,
    ):
        self.bucket = bucket
        self.prefix = prefix
        self._endpoint_url = endpoint_url
        self._aws_access_key_id = aws_access_key_id
        self._aws_secret_access_key = aws_secret_access_key
        self._region_name = region_name
        self._client = client

    def _get_client(self):
        if self._client is None:
            kwargs = {}
            if self._region_name:
                kwargs["region_name"] = self._region_name
            if self._endpoint_url:
                kwargs["endpoint_url"] = self._endpoint_url
            if self._aws_access_key_id:
                kwargs["aws_access_key_id"] = self._aws_access_key_id
            if self._aws_secret_access_key:
                kwargs["aws_secret_access_key"] = self._aws_secret_access_key
            self._client = boto3.client("s3", **kwargs)
        return self._client

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    async def put(self, key: str, data: bytes, content_type: Optional[str] = None) -> None:
        kwargs = {"Bucket": self.bucket, "Key": self._key(key), "Body": data}
        if content_type:
            kwargs["ContentType"] = content_type
        await run_in_threadpool(self._get_client().put_object, **kwargs)
        logger.info("Stored image s3://%s/%s", self.bucket, self._key(key))

    async def get(self, key: str) -> Optional[StoredBlob]:
        try:
            resp = await run_in_threadpool(
                self._get_client().get_object, Bucket=self.bucket, Key=self._key(key)
            )
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") in MISSING_KEY_CODES:
                return None
            raise
        data = await run_in_threadpool(resp["Body"].read)
        return StoredBlob(data=data, content_type=resp.get("ContentType"))

    async def _exists(self, key: str) -> bool:
        try:
            await run_in_threadpool(
                self._get_client().head_object, Bucket=self.bucket, Key=self._key(key)
            )
            return True
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") in MISSING_KEY_CODES:
                return False
            raise

    async def delete(self, key: str) -> bool:
        # delete_object succeeds for absent keys, so check first
        if not await self._exists(key):
            return False
        await run_in_threadpool(
            self._get_client().delete_object, Bucket=self.bucket, Key=self._key(key)
        )
        return True

    async def list(self) -> List[str]:
        paginator = self._get_client().get_paginator("list_objects_v2")

        def _collect() -> List[str]:
            keys: List[str] = []
            for page in paginator.paginate(Bucket=self.bucket, Prefix=self.prefix):
                for obj in page.get("Contents", []):
                    name = obj["Key"][len(self.prefix):]
                    if name:
                        keys.append(name)
            return keys

        return await run_in_threadpool(_collect)
