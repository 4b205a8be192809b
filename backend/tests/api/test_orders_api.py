"""Order API — placement, escrow release and completion guards.

Tests cover:
    - placing an order escrows the gig price; completing releases it to the seller
    - a second completion → 400 STATE_CONFLICT with the wallet unchanged
    - only buyers place orders; only participants complete them
    - listing returns the caller's own orders only
    - concurrent completion requests settle the order exactly once
"""

import asyncio

from tests.api.helpers import auth


async def _wallet(client, headers) -> float:
    res = await client.get("/api/me", headers=headers)
    return res.json()["user"]["wallet"]


async def test_place_order_holds_price_in_escrow(gig_order):
    order = gig_order["order"]
    assert order["status"] == "in_progress"
    assert order["amount"] == 50
    assert order["escrow"] == 50
    assert order["sellerId"] == gig_order["seller_id"]
    assert order["buyerId"] == gig_order["buyer_id"]
    assert order["completedAt"] is None


async def test_complete_releases_escrow_to_seller(client, gig_order):
    res = await client.post(
        "/api/complete-order", headers=gig_order["buyer_h"],
        json={"orderId": gig_order["order"]["id"]},
    )
    assert res.status_code == 200
    order = res.json()["order"]
    assert order["status"] == "completed"
    assert order["escrow"] == 0
    assert order["completedAt"] is not None
    assert await _wallet(client, gig_order["seller_h"]) == 50


async def test_second_completion_conflicts_without_double_credit(client, gig_order):
    body = {"orderId": gig_order["order"]["id"]}
    first = await client.post(
        "/api/complete-order", headers=gig_order["seller_h"], json=body,
    )
    assert first.status_code == 200

    second = await client.post(
        "/api/complete-order", headers=gig_order["buyer_h"], json=body,
    )
    assert second.status_code == 400
    assert second.json()["error"]["code"] == "STATE_CONFLICT"
    assert await _wallet(client, gig_order["seller_h"]) == 50


async def test_non_participant_cannot_complete(client, gig_order, signup):
    _, outsider_h = await signup("buyer")
    res = await client.post(
        "/api/complete-order", headers=outsider_h,
        json={"orderId": gig_order["order"]["id"]},
    )
    assert res.status_code == 403
    assert res.json()["error"]["code"] == "FORBIDDEN"
    assert await _wallet(client, gig_order["seller_h"]) == 0


async def test_admin_cannot_complete_someone_elses_order(client, gig_order, admin_headers):
    res = await client.post(
        "/api/complete-order", headers=admin_headers,
        json={"orderId": gig_order["order"]["id"]},
    )
    assert res.status_code == 403


async def test_seller_cannot_place_order(client, gig_order):
    res = await client.post(
        "/api/orders", headers=gig_order["seller_h"],
        json={"gigId": gig_order["gig"]["id"]},
    )
    assert res.status_code == 403
    assert res.json()["error"]["message"] == "Only buyers can place orders"


async def test_unknown_gig_or_order_returns_404(client, gig_order):
    res = await client.post(
        "/api/orders", headers=gig_order["buyer_h"], json={"gigId": "999"},
    )
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"

    res = await client.post(
        "/api/complete-order", headers=gig_order["buyer_h"], json={"orderId": "999"},
    )
    assert res.status_code == 404


async def test_missing_fields_return_400(client, gig_order):
    res = await client.post("/api/orders", headers=gig_order["buyer_h"], json={})
    assert res.status_code == 400
    res = await client.post("/api/complete-order", headers=gig_order["buyer_h"], json={})
    assert res.status_code == 400


async def test_list_orders_shows_only_own(client, gig_order, signup):
    _, other_h = await signup("buyer")
    await client.post(
        "/api/orders", headers=other_h, json={"gigId": gig_order["gig"]["id"]},
    )

    buyer_orders = (await client.get("/api/orders", headers=gig_order["buyer_h"])).json()
    assert [o["id"] for o in buyer_orders["orders"]] == [gig_order["order"]["id"]]

    seller_orders = (await client.get("/api/orders", headers=gig_order["seller_h"])).json()
    assert len(seller_orders["orders"]) == 2


async def test_order_keeps_price_after_gig_deleted(client, gig_order):
    res = await client.delete(
        f"/api/gigs/{gig_order['gig']['id']}", headers=gig_order["seller_h"],
    )
    assert res.status_code == 200
    res = await client.post(
        "/api/complete-order", headers=gig_order["buyer_h"],
        json={"orderId": gig_order["order"]["id"]},
    )
    assert res.status_code == 200
    assert await _wallet(client, gig_order["seller_h"]) == 50


async def test_forged_token_cannot_place_order(client, gig_order):
    res = await client.post(
        "/api/orders", headers=auth("nope"), json={"gigId": gig_order["gig"]["id"]},
    )
    assert res.status_code == 401


async def test_concurrent_completions_credit_once(client, gig_order):
    body = {"orderId": gig_order["order"]["id"]}
    responses = await asyncio.gather(*[
        client.post("/api/complete-order", headers=gig_order["buyer_h"], json=body)
        for _ in range(6)
    ])
    assert sorted(r.status_code for r in responses) == [200] + [400] * 5
    assert await _wallet(client, gig_order["seller_h"]) == 50
