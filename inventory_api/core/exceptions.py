from fastapi import HTTPException
from inventory_api.constants.error_codes import ErrorCode


class AppException(HTTPException):
    def __init__(
        self,
        status_code: int,
        message: str,
        error_code: ErrorCode,
        details: dict | None = None,
    ):
        super().__init__(status_code=status_code, detail=message)
        self.error_code = error_code
        self.details = details


class ValidationError(AppException):
    """Malformed or missing input."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: dict | None = None,
    ):
        super().__init__(400, message, error_code, details)


class ConflictError(AppException):
    """Uniqueness violation."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.CONFLICT,
        details: dict | None = None,
    ):
        super().__init__(409, message, error_code, details)


class NotFoundError(AppException):
    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.NOT_FOUND,
        details: dict | None = None,
    ):
        super().__init__(404, message, error_code, details)


class InsufficientStockError(AppException):
    """Outbound movement larger than the variant's current quantity."""

    def __init__(self, requested: int, available: int):
        super().__init__(
            400,
            "Insufficient stock for outbound movement",
            ErrorCode.INSUFFICIENT_STOCK,
            {"requested": requested, "available": available},
        )
        self.requested = requested
        self.available = available


class InternalError(AppException):
    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict | None = None,
    ):
        super().__init__(500, message, error_code, details)
