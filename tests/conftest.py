# tests/conftest.py
import os
import tempfile
from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# ============================================================
# Point the config at throwaway storage BEFORE importing the app
# ============================================================
_TMP_ROOT = Path(tempfile.mkdtemp(prefix="inventory-api-tests-"))

os.environ["APP_ENV"] = "development"
os.environ["DB_TYPE"] = "sqlite"
os.environ["SQLITE_PATH"] = str(_TMP_ROOT / "test.db")
os.environ["SQLITE_BUSY_TIMEOUT"] = "15"
os.environ["STORAGE_BACKEND"] = "local"
os.environ["UPLOAD_DIR"] = str(_TMP_ROOT / "uploads")
os.environ["AUTO_INIT_DB"] = "false"

from main import app  # noqa: E402
from inventory_api.core.db import AsyncSessionLocal, Base, engine, init_models  # noqa: E402
from inventory_api.core.blob_store import get_blob_store  # noqa: E402
from inventory_api.storage.local import LocalBlobStore  # noqa: E402


# =========================================
# Fresh schema per test
# =========================================
@pytest_asyncio.fixture(autouse=True)
async def _fresh_schema():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await init_models()
    yield
    await engine.dispose()


@pytest_asyncio.fixture
async def session():
    """
    A plain session. Reads open a write-reserving transaction on SQLite, so
    tests that also hit the API must finish with this session first.
    """
    async with AsyncSessionLocal() as sess:
        try:
            yield sess
        finally:
            if sess.in_transaction():
                await sess.rollback()


@pytest.fixture
def blob_store(tmp_path) -> LocalBlobStore:
    return LocalBlobStore(tmp_path / "uploads")


@pytest_asyncio.fixture
async def client(blob_store) -> AsyncGenerator[AsyncClient, None]:
    app.dependency_overrides[get_blob_store] = lambda: blob_store
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            yield c
    finally:
        app.dependency_overrides.pop(get_blob_store, None)


@pytest_asyncio.fixture
async def make_product(client):
    """POST a product and return the JSON body."""

    async def _make(name: str = "T-Shirt", variants=None, **fields):
        body = {"name": name, "variants": variants or [], **fields}
        resp = await client.post("/api/products", json=body)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make
