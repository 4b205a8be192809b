"""Health Probe — liveness endpoint for container orchestration.

Invariants:
    - GET /health always returns 200 if the process is up
    - Reports record counts from the in-memory store (no disk access)
"""

import logging

from fastapi import APIRouter, Depends, status

from gigmarket.api.dependencies import get_marketplace
from gigmarket.services.marketplace import Marketplace

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_check(marketplace: Marketplace = Depends(get_marketplace)):
    """Basic liveness probe."""
    with marketplace.store.read() as store:
        counts = {
            "users": len(store.users),
            "gigs": len(store.gigs),
            "orders": len(store.orders),
            "disputes": len(store.disputes),
        }
    return {"status": "healthy", "service": "gigmarket-api", "records": counts}
