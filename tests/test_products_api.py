# tests/test_products_api.py
import uuid

import pytest

pytestmark = pytest.mark.asyncio


async def test_create_generates_code_and_normalizes(make_product):
    body = await make_product(
        name="  Polo  ",
        cost="",
        note="   ",
        category=" Shirts ",
        variants=[
            {"color": " Red ", "size": "M", "quantity": 4, "img": "/uploads/a.jpg"},
            {"color": "", "size": "L"},
        ],
    )

    uuid.UUID(body["code"])
    assert body["name"] == "Polo"
    assert body["cost"] is None
    assert body["note"] is None
    assert body["category"] == "Shirts"

    first, second = body["variants"]
    assert first["id"] > 0 and first["product_id"] == body["id"]
    assert (first["color"], first["size"], first["quantity"], first["img"]) == (
        "Red", "M", 4, "/uploads/a.jpg"
    )
    assert (second["color"], second["size"], second["quantity"], second["img"]) == (
        None, "L", 0, None
    )


async def test_create_requires_name(client):
    for body in ({}, {"name": "   "}, {"name": None, "variants": []}):
        resp = await client.post("/api/products", json=body)
        assert resp.status_code == 400
        assert resp.json()["error"]


async def test_create_is_all_or_nothing(client):
    resp = await client.post(
        "/api/products",
        json={"name": "Broken", "variants": [{"size": "S"}, {"size": "M", "quantity": -1}]},
    )
    assert resp.status_code == 400

    assert (await client.get("/api/products")).json() == []


async def test_list_newest_first_with_variants(client, make_product):
    older = await make_product(name="Old", variants=[{"size": "S"}, {"size": "M"}])
    newer = await make_product(name="New")

    listed = (await client.get("/api/products")).json()

    assert [p["code"] for p in listed] == [newer["code"], older["code"]]
    assert listed[0]["variants"] == []
    assert [v["size"] for v in listed[1]["variants"]] == ["S", "M"]


async def test_get_by_code(client, make_product):
    created = await make_product(name="Hoodie", variants=[{"color": "Black"}])

    resp = await client.get(f"/api/products/{created['code']}")
    assert resp.status_code == 200
    assert resp.json() == created

    assert (await client.get("/api/products/not-a-code")).status_code == 404


async def test_update_without_variants_keeps_them(client, make_product):
    created = await make_product(
        name="Cap", cost=100, note="n", variants=[{"color": "Red", "quantity": 7}]
    )

    resp = await client.put(
        f"/api/products/{created['code']}", json={"name": "Cap v2", "variants": []}
    )
    assert resp.status_code == 200
    assert resp.json() == {"ok": True}

    after = (await client.get(f"/api/products/{created['code']}")).json()
    assert after["name"] == "Cap v2"
    # Scalars are replaced, not merged
    assert after["cost"] is None
    assert after["note"] is None
    assert after["code"] == created["code"]
    assert after["variants"] == created["variants"]


async def test_update_with_variants_replaces_them(client, make_product):
    created = await make_product(
        name="Sock", variants=[{"size": "S", "quantity": 5}, {"size": "M", "quantity": 2}]
    )
    old_ids = {v["id"] for v in created["variants"]}

    resp = await client.put(
        f"/api/products/{created['code']}",
        json={"name": "Sock", "variants": [{"size": "L", "quantity": 1}]},
    )
    assert resp.status_code == 200

    after = (await client.get(f"/api/products/{created['code']}")).json()
    assert len(after["variants"]) == 1
    new_variant = after["variants"][0]
    assert new_variant["id"] not in old_ids
    assert (new_variant["size"], new_variant["quantity"]) == ("L", 1)

    # Old variant ids no longer resolve
    stale = await client.post(
        "/api/movements",
        json={"variantId": created["variants"][0]["id"], "type": "IN", "quantity": 1},
    )
    assert stale.status_code == 404


async def test_update_errors(client, make_product):
    created = await make_product(name="Belt")

    missing = await client.put("/api/products/nope", json={"name": "X"})
    assert missing.status_code == 404

    no_name = await client.put(f"/api/products/{created['code']}", json={"name": ""})
    assert no_name.status_code == 400


async def test_delete_cascades_variants_and_movements(client, make_product):
    doomed = await make_product(name="Doomed", variants=[{"size": "S"}])
    kept = await make_product(name="Kept", variants=[{"size": "M"}])

    for product in (doomed, kept):
        resp = await client.post(
            "/api/movements",
            json={"variantId": product["variants"][0]["id"], "type": "IN", "quantity": 3},
        )
        assert resp.status_code == 201

    resp = await client.delete(f"/api/products/{doomed['code']}")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True}

    assert (await client.get(f"/api/products/{doomed['code']}")).status_code == 404
    assert [p["code"] for p in (await client.get("/api/products")).json()] == [kept["code"]]

    ledger = (await client.get("/api/movements")).json()
    assert [m["product_id"] for m in ledger] == [kept["id"]]

    orphan = await client.post(
        "/api/movements",
        json={"variantId": doomed["variants"][0]["id"], "type": "IN", "quantity": 1},
    )
    assert orphan.status_code == 404

    assert (await client.delete(f"/api/products/{doomed['code']}")).status_code == 404


async def test_replaced_variant_ids_are_never_reused(client, make_product):
    created = await make_product(name="Tank", variants=[{"size": "S", "quantity": 5}])
    old_id = created["variants"][0]["id"]

    moved = await client.post(
        "/api/movements", json={"variantId": old_id, "type": "OUT", "quantity": 2}
    )
    assert moved.status_code == 201
    assert moved.json()["variant"] == "S"

    resp = await client.put(
        f"/api/products/{created['code']}",
        json={"name": "Tank", "variants": [{"size": "XL", "quantity": 1}]},
    )
    assert resp.status_code == 200

    after = (await client.get(f"/api/products/{created['code']}")).json()
    new_id = after["variants"][0]["id"]
    assert new_id > old_id

    # The old ledger row must not pick up the replacement's label
    ledger = (await client.get("/api/movements")).json()
    assert [(m["variant_id"], m["variant"]) for m in ledger] == [(old_id, "")]

    stale = await client.post(
        "/api/movements", json={"variantId": old_id, "type": "IN", "quantity": 1}
    )
    assert stale.status_code == 404

    after = (await client.get(f"/api/products/{created['code']}")).json()
    assert after["variants"][0]["quantity"] == 1


@pytest.mark.parametrize("quantity", [True, 2**31, 10**20])
async def test_variant_quantity_must_be_a_bounded_integer(client, quantity):
    resp = await client.post(
        "/api/products", json={"name": "Bad", "variants": [{"size": "S", "quantity": quantity}]}
    )
    assert resp.status_code == 400
    assert resp.json()["error_code"] == "VALIDATION_ERROR"
    assert (await client.get("/api/products")).json() == []
