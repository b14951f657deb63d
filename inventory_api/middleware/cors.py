from fastapi import Request, Response

from inventory_api.core.config import CORS_ORIGINS

ALLOW_ANY_ORIGIN = "*" in CORS_ORIGINS

PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Methods": "GET,POST,PUT,DELETE,OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def cors_origin_headers(request: Request) -> dict:
    """Allow-Origin for this request; empty when the origin is not allowed."""
    if ALLOW_ANY_ORIGIN:
        return {"Access-Control-Allow-Origin": "*"}
    origin = request.headers.get("origin")
    if origin in CORS_ORIGINS:
        return {"Access-Control-Allow-Origin": origin, "Vary": "Origin"}
    return {}


async def preflight_middleware(request: Request, call_next):
    """Answer every OPTIONS request with an empty 204 carrying the CORS headers."""
    if request.method != "OPTIONS":
        return await call_next(request)

    return Response(
        status_code=204,
        headers={**PREFLIGHT_HEADERS, **cors_origin_headers(request)},
    )
