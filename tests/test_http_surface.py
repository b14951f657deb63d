# tests/test_http_surface.py
import logging

import pytest
from httpx import ASGITransport, AsyncClient

from main import app
from inventory_api.core.blob_store import get_blob_store
from inventory_api.core.logging import QUIET_LOGGERS, build_logging_config

pytestmark = pytest.mark.asyncio


async def test_health_check(client):
    resp = await client.get("/")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


@pytest.mark.parametrize("path", ["/api/products", "/api/movements", "/anything/at/all"])
async def test_preflight_is_204_with_cors_headers(client, path):
    resp = await client.options(path, headers={"Origin": "http://shop.example"})

    assert resp.status_code == 204
    assert resp.content == b""
    assert resp.headers["access-control-allow-origin"] == "*"
    assert "DELETE" in resp.headers["access-control-allow-methods"]
    assert resp.headers["access-control-allow-headers"] == "Content-Type"


async def test_simple_request_carries_cors_header(client):
    resp = await client.get("/api/products", headers={"Origin": "http://shop.example"})
    assert resp.headers["access-control-allow-origin"] == "*"


async def test_unknown_route_is_json_404(client):
    resp = await client.get("/api/nope")
    assert resp.status_code == 404
    body = resp.json()
    assert body["error"]
    assert body["error_code"] == "NOT_FOUND"


async def test_wrong_method_is_405(client):
    resp = await client.patch("/api/products")
    assert resp.status_code == 405
    assert resp.json()["error_code"] == "METHOD_NOT_ALLOWED"


async def test_malformed_json_is_400(client):
    resp = await client.post(
        "/api/attributes",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json()["error_code"] == "VALIDATION_ERROR"


async def test_requests_are_access_logged(client, caplog):
    access = logging.getLogger("access")
    access.addHandler(caplog.handler)
    try:
        with caplog.at_level(logging.INFO, logger="access"):
            await client.get("/api/attributes")
    finally:
        access.removeHandler(caplog.handler)

    records = [r for r in caplog.records if r.name == "access"]
    assert records
    assert records[-1].path == "/api/attributes"
    assert records[-1].status_code == 200


async def test_unexpected_failure_is_500_with_cors_header(caplog):
    def _broken_store():
        raise RuntimeError("disk on fire")

    app.dependency_overrides[get_blob_store] = _broken_store
    access = logging.getLogger("access")
    access.addHandler(caplog.handler)
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            resp = await c.get("/api/images", headers={"Origin": "http://shop.example"})
    finally:
        access.removeHandler(caplog.handler)
        app.dependency_overrides.pop(get_blob_store, None)

    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error", "error_code": "INTERNAL_ERROR"}
    assert resp.headers["access-control-allow-origin"] == "*"

    records = [r for r in caplog.records if r.name == "access"]
    assert records[-1].status_code == 500
    assert records[-1].levelno == logging.ERROR


async def test_logging_config_routes_access_lines_separately():
    config = build_logging_config("WARNING")

    assert config["root"] == {"level": "WARNING", "handlers": ["app"]}
    assert config["loggers"]["access"]["propagate"] is False
    assert config["loggers"]["access"]["handlers"] == ["access"]
    for name, level in QUIET_LOGGERS.items():
        assert config["loggers"][name] == {"level": level}
