import logging
import time

from fastapi import Request

from inventory_api.utils.logger import get_logger

logger = get_logger("access")


def _client_addr(request: Request) -> str:
    if not request.client:
        return "unknown"
    return f"{request.client.host}:{request.client.port}"


async def request_logging_middleware(request: Request, call_next):
    """One access line per request; server errors are logged at ERROR."""
    started = time.perf_counter()
    # Stays 500 when the app raises instead of responding
    status_code = 500

    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        logger.log(
            logging.ERROR if status_code >= 500 else logging.INFO,
            "%s %s -> %s",
            request.method,
            request.url.path,
            status_code,
            extra={
                "client_addr": _client_addr(request),
                "method": request.method,
                "path": request.url.path,
                "status_code": status_code,
                "process_time_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )
