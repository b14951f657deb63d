# main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.exc import IntegrityError

from inventory_api.routers import (
    attribute_router,
    product_router,
    movement_router,
    image_router,
    uploads_router,
)

from inventory_api.core.config import (
    APP_ENV,
    APP_VERSION,
    AUTO_INIT_DB,
    CORS_ORIGINS,
    DB_TYPE,
    STORAGE_BACKEND,
)
from inventory_api.core.db import init_models
from inventory_api.core.exceptions import AppException
from inventory_api.core.logging import setup_logging
from inventory_api.middleware.request_logging import request_logging_middleware
from inventory_api.middleware.cors import preflight_middleware
from inventory_api.core.error_handlers import (
    app_exception_handler,
    validation_exception_handler,
    http_exception_handler,
    integrity_error_handler,
    unhandled_exception_handler,
)

APP_NAME = "Inventory API – Products, Variants & Stock Movements"

# ------------------------------------------------------------------------------
# LOGGING
# ------------------------------------------------------------------------------
setup_logging()
logger = logging.getLogger(__name__)

# ------------------------------------------------------------------------------
# LIFESPAN
# ------------------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "Starting application (env=%s, db=%s, storage=%s)",
        APP_ENV,
        DB_TYPE,
        STORAGE_BACKEND,
    )

    if AUTO_INIT_DB:
        await init_models()
        logger.info("Database schema ensured")
    else:
        logger.info("AUTO_INIT_DB disabled: init_models() skipped")

    yield

    logger.info("Shutting down application")

# ------------------------------------------------------------------------------
# APP INIT
# ------------------------------------------------------------------------------
app = FastAPI(
    title=APP_NAME,
    description="REST backend for product, variant, attribute and stock movement management",
    version=APP_VERSION,
    docs_url="/docs" if APP_ENV != "production" else None,
    redoc_url=None,
    lifespan=lifespan,
)

# ------------------------------------------------------------------------------
# EXCEPTION HANDLERS
# ------------------------------------------------------------------------------
app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(IntegrityError, integrity_error_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# ------------------------------------------------------------------------------
# MIDDLEWARE
# ------------------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type"],
)

app.middleware("http")(request_logging_middleware)
# Outermost: OPTIONS never reaches routing
app.middleware("http")(preflight_middleware)


# ------------------------------------------------------------------------------
# HEALTH CHECK
# ------------------------------------------------------------------------------
@app.get("/", tags=["Health"])
async def health_check():
    return {
        "status": "ok",
        "service": "inventory-api",
        "environment": APP_ENV,
        "version": APP_VERSION,
    }

# ------------------------------------------------------------------------------
# ROUTERS
# ------------------------------------------------------------------------------
app.include_router(attribute_router)
app.include_router(product_router)
app.include_router(movement_router)
app.include_router(image_router)
app.include_router(uploads_router)
