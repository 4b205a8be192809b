"""Health API, storage failure handling and route execution model."""

import inspect
import os

from fastapi.routing import APIRoute


async def test_health_reports_counts(client, gig_order):
    res = await client.get("/api/health")
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "healthy"
    assert body["records"] == {"users": 3, "gigs": 1, "orders": 1, "disputes": 0}


async def test_failed_write_returns_500_and_keeps_state(client, signup, monkeypatch):
    _, headers = await signup("seller")

    def broken_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", broken_replace)
    res = await client.post(
        "/api/gigs", headers=headers,
        json={"title": "Logo", "description": "Vector logo", "price": 10},
    )
    assert res.status_code == 500
    assert res.json()["error"]["code"] == "STORAGE_ERROR"
    assert "disk full" not in res.text

    monkeypatch.undo()
    assert (await client.get("/api/gigs")).json()["gigs"] == []


async def test_unknown_route_uses_error_envelope(client):
    res = await client.get("/api/nowhere")
    assert res.status_code == 404
    assert res.json()["error"] == {
        "code": "RESOURCE_NOT_FOUND", "message": "Not found",
        "category": "resource_not_found", "severity": "warning",
    }


async def test_validation_error_names_camel_case_field(client, signup):
    _, headers = await signup("buyer")
    res = await client.post("/api/orders", headers=headers, json={})
    assert res.status_code == 400
    assert [d["field"] for d in res.json()["error"]["details"]] == ["gigId"]


def test_routes_are_sync_so_store_io_runs_in_threadpool(app):
    routes = [r for r in app.routes if isinstance(r, APIRoute)]
    assert routes
    for route in routes:
        assert not inspect.iscoroutinefunction(route.endpoint), route.path
