"""Shared constants and header helpers for API tests."""

ADMIN_EMAIL = "admin@test.local"
ADMIN_PASSWORD = "admin-secret"


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
