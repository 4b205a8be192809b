"""API test fixtures — isolated app over a temp data dir + httpx async client.

Invariants:
    - Every test gets a fresh data directory and a fresh SessionRegistry
    - The admin account is provisioned from settings at app creation

Design Decisions:
    - ASGITransport without lifespan: create_app() already loaded the store,
      so no startup hook is needed for requests to work
    - signup fixture returns a factory: tests create as many actors as they need
"""

import pytest
from httpx import ASGITransport, AsyncClient

from gigmarket.config import Settings
from gigmarket.main import create_app

from tests.api.helpers import ADMIN_EMAIL, ADMIN_PASSWORD, auth


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        data_dir=str(tmp_path / "data"),
        admin_email=ADMIN_EMAIL,
        admin_password=ADMIN_PASSWORD,
        log_format="text",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def signup(client):
    """Register + login; returns (user_id, headers)."""
    counter = {"n": 0}

    async def _signup(role: str, name: str | None = None) -> tuple[str, dict]:
        counter["n"] += 1
        name = name or f"{role}{counter['n']}"
        email = f"{name}@example.com"
        res = await client.post("/api/register", json={
            "username": name, "email": email, "password": "pw", "role": role,
        })
        assert res.status_code == 201, res.text
        res = await client.post("/api/login", json={"email": email, "password": "pw"})
        assert res.status_code == 200, res.text
        body = res.json()
        return body["userId"], auth(body["token"])

    return _signup


@pytest.fixture
async def admin_headers(client) -> dict:
    res = await client.post(
        "/api/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )
    assert res.status_code == 200, res.text
    assert res.json()["role"] == "admin"
    return auth(res.json()["token"])


@pytest.fixture
async def gig_order(client, signup):
    """Seller with a 50.0 gig, buyer with an in-progress order on it."""
    seller_id, seller_h = await signup("seller")
    buyer_id, buyer_h = await signup("buyer")
    res = await client.post("/api/gigs", headers=seller_h, json={
        "title": "Logo", "description": "Vector logo", "price": 50,
    })
    gig = res.json()["gig"]
    res = await client.post("/api/orders", headers=buyer_h, json={"gigId": gig["id"]})
    order = res.json()["order"]
    return {
        "seller_id": seller_id, "seller_h": seller_h,
        "buyer_id": buyer_id, "buyer_h": buyer_h,
        "gig": gig, "order": order,
    }
