"""
tests.test_smoke

Minimal smoke tests: the service boots, probes answer, dev tokens work.
"""

from __future__ import annotations

import httpx
import pytest

from provisioning_api.api.app import create_app
from provisioning_api.settings import Settings


@pytest.mark.asyncio
async def test_health_endpoints(client) -> None:
    r = await client.get("/healthz")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"

    r = await client.get("/readyz")
    assert r.status_code == 200
    assert r.json()["status"] == "ready"


@pytest.mark.asyncio
async def test_request_id_is_echoed(client) -> None:
    r = await client.get("/healthz", headers={"x-request-id": "req-123"})
    assert r.headers["x-request-id"] == "req-123"

    r = await client.get("/healthz")
    assert r.headers["x-request-id"]


@pytest.mark.asyncio
async def test_dev_token_authenticates(client) -> None:
    r = await client.post("/v1/dev/token", json={"subject": "alice", "password_confirmed": True})
    assert r.status_code == 200
    headers = {"Authorization": f"Bearer {r.json()['access_token']}"}

    r = await client.post("/v1/groups", json={"groupid": "ops"}, headers=headers)
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_dev_token_disabled_in_prod(tmp_path) -> None:
    settings = Settings(env="prod", database_url=f"sqlite+aiosqlite:///{tmp_path / 'p.db'}")
    app = create_app(settings=settings)
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            r = await client.post("/v1/dev/token", json={"subject": "alice"})
            assert r.status_code == 404
