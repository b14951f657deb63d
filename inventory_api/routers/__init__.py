# inventory_api/routers/__init__.py

from .masters.attribute_router import router as attribute_router
from .masters.product_router import router as product_router

from .inventory.movement_router import router as movement_router

from .media.image_router import router as image_router
from .media.image_router import uploads_router


__all__ = [
"attribute_router",
"product_router",

"movement_router",

"image_router",
"uploads_router",
]
