"""Dispute Resolution — OPEN → RESOLVED, settling the disputed order's escrow.

Invariants:
    - All functions are PURE: no IO, mutate only the objects passed in
    - Filing a dispute never touches order status or escrow
    - Resolving requires OPEN: a second resolution raises and changes nothing
    - Resolution forces the order to COMPLETED with escrow 0; the seller is credited
      only when release_to_seller is true, otherwise the escrow is discarded

Design Decisions:
    - Multiple disputes per order, and disputes on completed orders, are allowed:
      resolving one on a completed order credits 0 because its escrow is already 0
"""

from datetime import datetime

from gigmarket.core.domain_types import DisputeId, DisputeStatus
from gigmarket.core.errors import ErrorContext, InvalidInputError, StateConflictError
from gigmarket.core.order_lifecycle import settle
from gigmarket.models.dispute import Dispute
from gigmarket.models.order import Order
from gigmarket.models.user import User


def open_dispute(
    dispute_id: DisputeId, order: Order, initiator: User, reason: str,
    now: datetime,
) -> Dispute:
    """File a dispute on order. Caller has already checked participation."""
    reason = (reason or "").strip()
    if not reason:
        raise InvalidInputError(
            "Dispute reason is required", "reason", ErrorContext(order_id=order.id),
        )
    return Dispute(
        id=dispute_id,
        order_id=order.id,
        initiator_id=initiator.id,
        reason=reason,
        status=DisputeStatus.OPEN,
        created_at=now,
    )


def check_resolvable(dispute: Dispute) -> None:
    if dispute.status != DisputeStatus.OPEN:
        raise StateConflictError(
            "Dispute already resolved", ErrorContext(dispute_id=dispute.id),
        )


def resolve_dispute(
    dispute: Dispute,
    order: Order,
    seller: User | None,
    resolution: str,
    release_to_seller: bool,
    now: datetime,
) -> float:
    """Close dispute and settle order. Returns the amount credited to the seller."""
    check_resolvable(dispute)
    credited = settle(order, seller, credit_seller=release_to_seller, now=now)
    dispute.status = DisputeStatus.RESOLVED
    dispute.resolution = resolution
    dispute.resolved_at = now
    return credited
