# tests/test_cors.py
ALLOWED_ORIGIN = "http://localhost:5273"


def test_allowed_origin_gets_cors_headers(client):
    r = client.get("/api/productlist", headers={"Origin": ALLOWED_ORIGIN})
    assert r.status_code == 200
    assert r.headers["access-control-allow-origin"] == ALLOWED_ORIGIN


def test_second_allowed_origin(client):
    r = client.get("/health", headers={"Origin": "https://localhost:7299"})
    assert r.status_code == 200
    assert r.headers["access-control-allow-origin"] == "https://localhost:7299"


def test_disallowed_origin_never_reaches_handler(client, clock):
    r = client.get("/api/productlist", headers={"Origin": "https://evil.example"})
    assert r.status_code == 403
    assert r.text == "Disallowed CORS origin"
    assert "access-control-allow-origin" not in r.headers
    assert clock.now_calls == 0


def test_disallowed_origin_does_not_see_cached_body(client):
    client.get("/api/productlist")
    r = client.get("/api/productlist", headers={"Origin": "https://evil.example"})
    assert r.status_code == 403
    assert "products" not in r.text


def test_preflight_allows_any_method_and_header(client):
    r = client.options(
        "/api/productlist",
        headers={
            "Origin": ALLOWED_ORIGIN,
            "Access-Control-Request-Method": "PUT",
            "Access-Control-Request-Headers": "X-Anything",
        },
    )
    assert r.status_code == 200
    assert r.headers["access-control-allow-origin"] == ALLOWED_ORIGIN
    assert "PUT" in r.headers["access-control-allow-methods"]
    assert r.headers["access-control-allow-headers"].lower() == "x-anything"


def test_preflight_from_disallowed_origin(client):
    r = client.options(
        "/api/productlist",
        headers={"Origin": "https://evil.example", "Access-Control-Request-Method": "GET"},
    )
    assert r.status_code == 400


def test_requests_without_origin_pass(client):
    assert client.get("/health").status_code == 200
