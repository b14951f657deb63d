# inventory_api/core/db.py

import ssl
import uuid
from typing import AsyncGenerator

from sqlalchemy import event, inspect, text
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import NullPool

from inventory_api.core.config import (
    DATABASE_URL,
    DB_TYPE,
    DB_POOL_SIZE,
    DB_MAX_OVERFLOW,
    DB_POOL_TIMEOUT,
    DB_SSL,
    DB_SSL_VERIFY,
    DB_ECHO_POOL,
    SQLITE_BUSY_TIMEOUT,
)
from inventory_api.utils.logger import get_logger

logger = get_logger(__name__)

# =====================================================
# BASE
# =====================================================
Base = declarative_base()

# =====================================================
# CONNECTION CONFIG
# =====================================================
connect_args = {}
pool_args = {}

if DB_TYPE == "postgres":
    if DB_SSL:
        ssl_ctx = ssl.create_default_context()

        if not DB_SSL_VERIFY:
            ssl_ctx.check_hostname = False
            ssl_ctx.verify_mode = ssl.CERT_NONE

        connect_args["ssl"] = ssl_ctx

    # Disable prepared statements (asyncpg behind pgbouncer-style poolers)
    connect_args["statement_cache_size"] = 0
    connect_args["prepared_statement_cache_size"] = 0

    pool_args = {
        "pool_size": DB_POOL_SIZE,
        "max_overflow": DB_MAX_OVERFLOW,
        "pool_timeout": DB_POOL_TIMEOUT,
        "pool_pre_ping": True,
    }

elif DB_TYPE == "sqlite":
    connect_args = {
        "check_same_thread": False,
        "timeout": SQLITE_BUSY_TIMEOUT,
    }
    pool_args = {"poolclass": NullPool}

# =====================================================
# ENGINE
# =====================================================
engine = create_async_engine(
    DATABASE_URL,
    echo=False,
    echo_pool=DB_ECHO_POOL,
    future=True,
    connect_args=connect_args,
    **pool_args,
)

# =====================================================
# SESSION
# =====================================================
AsyncSessionLocal = sessionmaker(
    bind=engine,
    class_=AsyncSession,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
)

# =====================================================
# DEPENDENCY
# =====================================================
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session

# =====================================================
# SQLITE: FK ENFORCEMENT + WRITER SERIALISATION
# =====================================================
if DB_TYPE == "sqlite":
    @event.listens_for(engine.sync_engine, "connect")
    def configure_sqlite_connection(dbapi_connection, _):
        # Take over transaction control from the driver
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def begin_immediate(conn):
        # Reserve the write lock up front so read-then-write units cannot interleave
        conn.exec_driver_sql("BEGIN IMMEDIATE")

# =====================================================
# MODEL IMPORT
# =====================================================
import inventory_api.models  # noqa

# =====================================================
# ADDITIVE COLUMN UPGRADE
# =====================================================
# Columns added after the first release; older databases get them on startup.
ADDITIVE_COLUMNS = {
    "products": {
        "code": "VARCHAR(64)",
        "category": "VARCHAR(255)",
    },
    "attributes": {
        "color_code": "VARCHAR(32)",
        "status": "INTEGER NOT NULL DEFAULT 1",
    },
}


def _missing_columns(sync_conn) -> dict[str, list[str]]:
    inspector = inspect(sync_conn)
    missing: dict[str, list[str]] = {}
    for table, columns in ADDITIVE_COLUMNS.items():
        existing = {c["name"] for c in inspector.get_columns(table)}
        absent = [name for name in columns if name not in existing]
        if absent:
            missing[table] = absent
    return missing


async def upgrade_additive_columns(conn) -> list[str]:
    missing = await conn.run_sync(_missing_columns)
    added: list[str] = []

    for table, columns in missing.items():
        for column in columns:
            ddl = ADDITIVE_COLUMNS[table][column]
            await conn.execute(text(f"ALTER TABLE {table} ADD COLUMN {column} {ddl}"))
            added.append(f"{table}.{column}")
            logger.info("Added column %s.%s", table, column)

    if "code" in missing.get("products", []):
        await conn.execute(
            text(
                "CREATE UNIQUE INDEX IF NOT EXISTS ix_products_code "
                "ON products (code)"
            )
        )

    # Products created before codes existed
    rows = (await conn.execute(text("SELECT id FROM products WHERE code IS NULL"))).all()
    for row in rows:
        await conn.execute(
            text("UPDATE products SET code = :code WHERE id = :id"),
            {"code": str(uuid.uuid4()), "id": row.id},
        )
    if rows:
        logger.info("Backfilled product codes for %d products", len(rows))

    return added


async def init_models():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        await upgrade_additive_columns(conn)
