"""APOD Routes — end-to-end over ASGI with a mocked NASA upstream.

Tests cover:
    - Success envelope passes upstream data through untouched
    - Upstream key and date forwarded as query params
    - Date validation rejects before any upstream call
    - Upstream timeout / 403 / 500 mapped to the client-facing taxonomy
    - X-Request-ID header matches the envelope's requestId
"""

from datetime import date, timedelta

import httpx


async def test_apod_by_date_returns_success_envelope(client, upstream):
    upstream.reply(200, {"title": "X", "url": "https://apod.nasa.gov/x.jpg"})

    res = await client.get("/api/apod/2024-01-15")

    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["data"] == {"title": "X", "url": "https://apod.nasa.gov/x.jpg"}
    assert body["requestId"]
    assert "error" not in body
    assert res.headers["x-request-id"] == body["requestId"]


async def test_forwards_key_and_date_upstream(client, upstream):
    await client.get("/api/apod/2024-01-15")

    assert len(upstream.requests) == 1
    params = upstream.requests[0].url.params
    assert params["api_key"] == "test-fake-key"
    assert params["date"] == "2024-01-15"


async def test_today_route_sends_no_date(client, upstream):
    res = await client.get("/api/apod")

    assert res.status_code == 200
    assert "date" not in upstream.requests[0].url.params


async def test_today_route_with_trailing_slash_is_served_directly(client, upstream):
    res = await client.get("/api/apod/")

    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["data"]["title"] == "Default"
    assert len(upstream.requests) == 1
    assert "date" not in upstream.requests[0].url.params


async def test_malformed_date_rejected_without_upstream_call(client, upstream):
    res = await client.get("/api/apod/15-01-2024")

    assert res.status_code == 400
    body = res.json()
    assert body["success"] is False
    assert body["error"]["type"] == "VALIDATION_ERROR"
    assert body["error"]["field"] == "date"
    assert body["error"]["status"] == 400
    assert upstream.requests == []


async def test_day_before_first_apod_rejected(client, upstream):
    res = await client.get("/api/apod/1995-06-15")
    assert res.status_code == 400
    assert upstream.requests == []


async def test_first_apod_date_accepted(client, upstream):
    res = await client.get("/api/apod/1995-06-16")
    assert res.status_code == 200


async def test_future_date_rejected(client, upstream):
    future = (date.today() + timedelta(days=2)).isoformat()
    res = await client.get(f"/api/apod/{future}")
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Date cannot be in the future."


async def test_upstream_timeout_returns_408(client, upstream):
    upstream.raise_error(httpx.ReadTimeout)

    res = await client.get("/api/apod/2024-01-15")

    assert res.status_code == 408
    assert res.json()["error"]["type"] == "TIMEOUT_ERROR"


async def test_upstream_connect_failure_returns_503(client, upstream):
    upstream.raise_error(httpx.ConnectError)

    res = await client.get("/api/apod/2024-01-15")

    assert res.status_code == 503
    assert res.json()["error"]["type"] == "NETWORK_ERROR"


async def test_upstream_403_returns_auth_error(client, upstream):
    upstream.reply(403, {"error": {"code": "API_KEY_INVALID", "message": "bad"}})

    res = await client.get("/api/apod/2024-01-15")

    assert res.status_code == 403
    assert res.json()["error"] == {
        "message": "Invalid API key or access denied.",
        "type": "AUTH_ERROR",
        "status": 403,
    }


async def test_upstream_500_returns_503_server_error(client, upstream):
    upstream.reply(500, {"msg": "internal"})

    res = await client.get("/api/apod/2024-01-15")

    assert res.status_code == 503
    assert res.json()["error"]["type"] == "NASA_SERVER_ERROR"


async def test_upstream_400_message_passed_to_client(client, upstream):
    upstream.reply(400, {"code": 400, "msg": "Date must be between Jun 16, 1995 and today."})

    res = await client.get("/api/apod/2024-02-30")

    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Date must be between Jun 16, 1995 and today."


async def test_each_request_gets_distinct_request_id(client):
    first = (await client.get("/api/apod/2024-01-15")).json()["requestId"]
    second = (await client.get("/api/apod/2024-01-15")).json()["requestId"]
    assert first != second
