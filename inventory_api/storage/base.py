"""
Blob store interface for product images.

Keys are flat generated filenames; each backend decides where they live.
"""

import abc
from dataclasses import dataclass
from typing import List, Optional


@dataclass
class StoredBlob:
    data: bytes
    content_type: Optional[str] = None


class BlobStore(abc.ABC):
    """Abstract base for image storage backends."""

    @abc.abstractmethod
    async def put(self, key: str, data: bytes, content_type: Optional[str] = None) -> None:
        """Store bytes under key, replacing anything already there."""

    @abc.abstractmethod
    async def get(self, key: str) -> Optional[StoredBlob]:
        """Return the stored object, or None if the key is absent."""

    @abc.abstractmethod
    async def delete(self, key: str) -> bool:
        """Remove key; True if an object was removed."""

    @abc.abstractmethod
    async def list(self) -> List[str]:
        """All stored keys."""
