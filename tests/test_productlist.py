# tests/test_productlist.py
import asyncio

import httpx
from fastapi.testclient import TestClient

from catalog_service.database import CatalogStore
from catalog_service.main import create_app
from catalog_service.models import decode_envelope


def test_product_list_envelope(client):
    r = client.get("/api/productlist")
    assert r.status_code == 200
    body = r.json()
    assert set(body) == {"products", "totalCount", "timestamp"}
    assert body["totalCount"] == len(body["products"]) == 3
    ids = [p["id"] for p in body["products"]]
    assert ids == [1, 2, 3]
    assert len(set(ids)) == len(ids)


def test_product_wire_fields(client):
    laptop = client.get("/api/productlist").json()["products"][0]
    assert laptop == {
        "id": 1,
        "name": "Laptop",
        "price": 1200.5,
        "stock": 25,
        "category": {"id": 101, "name": "Electronics"},
        "description": "High-performance laptop for professionals",
        "imageUrl": "/images/laptop.jpg",
    }


def test_cached_within_window_is_byte_identical(client, clock):
    r1 = client.get("/api/productlist")
    clock.advance(299)
    r2 = client.get("/api/productlist")
    assert r1.content == r2.content
    assert r1.json()["timestamp"] == r2.json()["timestamp"]
    assert r2.headers["cache-control"] == "public, max-age=300"


def test_cache_ignores_query_string(client, clock):
    r1 = client.get("/api/productlist")
    clock.advance(10)
    r2 = client.get("/api/productlist?page=2")
    assert r1.content == r2.content


def test_cache_expiry_rebuilds_timestamp(client, clock):
    first = decode_envelope(client.get("/api/productlist").content)
    clock.advance(300.5)
    second = decode_envelope(client.get("/api/productlist").content)
    assert second.timestamp > first.timestamp
    assert second.products == first.products


def test_handler_runs_once_per_window(client, clock):
    for _ in range(5):
        client.get("/api/productlist")
    assert clock.now_calls == 1
    clock.advance(301)
    client.get("/api/productlist")
    assert clock.now_calls == 2


def test_concurrent_readers_share_one_body(app, clock):
    async def _fetch_many():
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
            return await asyncio.gather(*[ac.get("/api/productlist") for _ in range(8)])

    responses = asyncio.run(_fetch_many())
    assert all(r.status_code == 200 for r in responses)
    assert len({r.content for r in responses}) == 1
    assert clock.now_calls == 1


def test_empty_store_serves_empty_envelope():
    client = TestClient(create_app(store=CatalogStore([])))
    body = client.get("/api/productlist").json()
    assert body["products"] == []
    assert body["totalCount"] == 0


def test_health_is_never_cached(client, clock):
    r1 = client.get("/health")
    clock.advance(1)
    r2 = client.get("/health")
    assert r1.status_code == 200
    assert r1.json()["status"] == "Healthy"
    assert r1.json()["timestamp"] != r2.json()["timestamp"]
    assert r1.headers["cache-control"] == "no-store"


def test_openapi_names_product_route(client):
    spec = client.get("/openapi.json").json()
    assert spec["paths"]["/api/productlist"]["get"]["operationId"] == "GetProducts"


def test_injected_empty_store_is_kept():
    store = CatalogStore([])
    app = create_app(store=store)
    assert app.state.store is store
