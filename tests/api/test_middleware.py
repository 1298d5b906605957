"""Tests for the raw ASGI middleware on a minimal app."""

import asyncio

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from orderlookup.middleware import RequestIDMiddleware, TimeoutMiddleware
from orderlookup.shared.context import get_request_id


def _app(timeout_seconds: float) -> FastAPI:
    app = FastAPI()

    @app.get("/slow")
    async def slow() -> dict:
        await asyncio.sleep(5)
        return {"done": True}

    @app.get("/whoami")
    async def whoami() -> dict:
        return {"request_id": get_request_id()}

    app.add_middleware(TimeoutMiddleware, timeout_seconds=timeout_seconds)
    app.add_middleware(RequestIDMiddleware)
    return app


async def test_slow_request_gets_504() -> None:
    transport = ASGITransport(app=_app(0.05))
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/slow")

    assert response.status_code == 504
    assert response.json()["error"] == "GATEWAY_TIMEOUT"
    assert "x-request-id" in response.headers


async def test_request_id_visible_to_handlers() -> None:
    """The id echoed in the header is the one handlers (and log records) see."""
    transport = ASGITransport(app=_app(5))
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/whoami", headers={"X-Request-ID": "trace-42"})

    assert response.json() == {"request_id": "trace-42"}
    assert response.headers["x-request-id"] == "trace-42"
