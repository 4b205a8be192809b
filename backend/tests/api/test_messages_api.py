"""Message API — per-order conversation access.

Tests cover:
    - participants and admin can post and read, in arrival order
    - outsiders → 403; missing orderId → 400; unknown order → 404
    - posting leaves order status and escrow untouched
"""


async def _post(client, headers, order_id, text):
    return await client.post(
        "/api/messages", headers=headers, json={"orderId": order_id, "text": text},
    )


async def test_participants_and_admin_converse(client, gig_order, admin_headers):
    order_id = gig_order["order"]["id"]
    assert (await _post(client, gig_order["buyer_h"], order_id, "hi")).status_code == 201
    assert (await _post(client, gig_order["seller_h"], order_id, "hello")).status_code == 201
    assert (await _post(client, admin_headers, order_id, "watching")).status_code == 201

    res = await client.get(
        "/api/messages", headers=gig_order["buyer_h"], params={"orderId": order_id},
    )
    assert res.status_code == 200
    messages = res.json()["messages"]
    assert [m["text"] for m in messages] == ["hi", "hello", "watching"]
    assert messages[0]["senderId"] == gig_order["buyer_id"]
    assert messages[1]["senderId"] == gig_order["seller_id"]


async def test_outsider_forbidden(client, gig_order, signup):
    _, outsider_h = await signup("buyer")
    order_id = gig_order["order"]["id"]
    res = await _post(client, outsider_h, order_id, "let me in")
    assert res.status_code == 403
    res = await client.get(
        "/api/messages", headers=outsider_h, params={"orderId": order_id},
    )
    assert res.status_code == 403


async def test_missing_order_id_returns_400(client, gig_order):
    res = await client.get("/api/messages", headers=gig_order["buyer_h"])
    assert res.status_code == 400
    res = await client.post(
        "/api/messages", headers=gig_order["buyer_h"], json={"text": "hi"},
    )
    assert res.status_code == 400


async def test_blank_text_returns_400(client, gig_order):
    res = await _post(client, gig_order["buyer_h"], gig_order["order"]["id"], "  ")
    assert res.status_code == 400


async def test_unknown_order_returns_404(client, gig_order):
    res = await client.get(
        "/api/messages", headers=gig_order["buyer_h"], params={"orderId": "999"},
    )
    assert res.status_code == 404


async def test_posting_keeps_order_state(client, gig_order):
    order_id = gig_order["order"]["id"]
    await _post(client, gig_order["buyer_h"], order_id, "status?")
    orders = (await client.get("/api/orders", headers=gig_order["buyer_h"])).json()
    order = orders["orders"][0]
    assert order["status"] == "in_progress"
    assert order["escrow"] == 50
    assert len(order["messages"]) == 1
