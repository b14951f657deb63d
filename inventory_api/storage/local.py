"""
Filesystem blob store; the local-server deployment keeps images in UPLOAD_DIR.
"""

import mimetypes
from pathlib import Path
from typing import List, Optional

from starlette.concurrency import run_in_threadpool

from inventory_api.storage.base import BlobStore, StoredBlob


class LocalBlobStore(BlobStore):
    """Store each blob as one file directly under root."""

    def __init__(self, root: str | Path):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Optional[Path]:
        # Keys are bare filenames; anything with a directory part is rejected
        name = Path(key).name
        if not name or name != key or name in {".", ".."}:
            return None
        return self.root / name

    async def put(self, key: str, data: bytes, content_type: Optional[str] = None) -> None:
        path = self._path(key)
        if path is None:
            raise ValueError(f"Invalid blob key: {key!r}")
        await run_in_threadpool(path.write_bytes, data)

    async def get(self, key: str) -> Optional[StoredBlob]:
        path = self._path(key)
        if path is None or not path.is_file():
            return None
        data = await run_in_threadpool(path.read_bytes)
        content_type, _ = mimetypes.guess_type(path.name)
        return StoredBlob(data=data, content_type=content_type)

    async def delete(self, key: str) -> bool:
        path = self._path(key)
        if path is None:
            return False
        return await run_in_threadpool(self._unlink, path)

    async def list(self) -> List[str]:
        return await run_in_threadpool(self._scan)

    @staticmethod
    def _unlink(path: Path) -> bool:
        if not path.is_file():
            return False
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        return True

    def _scan(self) -> List[str]:
        return sorted(
            p.name
            for p in self.root.iterdir()
            if p.is_file() and not p.name.startswith(".")
        )
