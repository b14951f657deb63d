# inventory_api/constants/error_codes.py

from enum import Enum


class ErrorCode(str, Enum):
    # Generic
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # Attributes
    ATTRIBUTE_NOT_FOUND = "ATTRIBUTE_NOT_FOUND"
    ATTRIBUTE_EXISTS = "ATTRIBUTE_EXISTS"
    ATTRIBUTE_INVALID_TYPE = "ATTRIBUTE_INVALID_TYPE"

    # Products / variants
    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
    VARIANT_NOT_FOUND = "VARIANT_NOT_FOUND"

    # Movements
    INSUFFICIENT_STOCK = "INSUFFICIENT_STOCK"
    INVALID_MOVEMENT_TYPE = "INVALID_MOVEMENT_TYPE"

    # Images
    IMAGE_NOT_FOUND = "IMAGE_NOT_FOUND"
    NO_FILE_UPLOADED = "NO_FILE_UPLOADED"
    BUCKET_NOT_CONFIGURED = "BUCKET_NOT_CONFIGURED"
