"""Order & Escrow State Machine — IN_PROGRESS → COMPLETED with a single escrow release.

Invariants:
    - All functions are PURE: no IO, no locking, mutate only the objects passed in
    - A new order holds its full amount in escrow (escrow == amount)
    - settle() is the only place escrow moves: status flip, completed_at, optional
      seller credit and escrow zeroing happen together, in that one call
    - complete_order refuses an already COMPLETED order, so a second call can never credit twice

Design Decisions:
    - Callers hold the record store transaction around these calls: atomicity is
      the caller's lock plus the absence of any early return between the four assignments
    - seller may be None (deleted account): the order still settles, the credit is lost
      and reported back through the return value
"""

import logging
from datetime import datetime

from gigmarket.core.domain_types import OrderId, OrderStatus, Role
from gigmarket.core.errors import ErrorContext, ForbiddenError, StateConflictError
from gigmarket.models.gig import Gig
from gigmarket.models.order import Order
from gigmarket.models.user import User

logger = logging.getLogger(__name__)


def open_order(order_id: OrderId, buyer: User, gig: Gig, now: datetime) -> Order:
    """Create an IN_PROGRESS order for gig, escrowing its current price."""
    if buyer.role != Role.BUYER:
        raise ForbiddenError(
            "Only buyers can place orders", ErrorContext(user_id=buyer.id),
        )
    return Order(
        id=order_id,
        buyer_id=buyer.id,
        seller_id=gig.seller_id,
        gig_id=gig.id,
        amount=gig.price,
        escrow=gig.price,
        status=OrderStatus.IN_PROGRESS,
        created_at=now,
    )


def settle(
    order: Order, seller: User | None, credit_seller: bool, now: datetime,
) -> float:
    """Force order to COMPLETED and zero its escrow. Returns the amount credited."""
    credited = 0.0
    if credit_seller and seller is not None:
        credited = order.escrow
        seller.wallet += credited
    order.escrow = 0
    order.status = OrderStatus.COMPLETED
    if order.completed_at is None:
        order.completed_at = now
    return credited


def complete_order(order: Order, seller: User | None, now: datetime) -> float:
    """Buyer/seller completion: release the full escrow to the seller."""
    if order.status == OrderStatus.COMPLETED:
        raise StateConflictError(
            "Order already completed", ErrorContext(order_id=order.id),
        )
    if seller is None:
        logger.warning(
            f"Seller {order.seller_id} missing, escrow of order {order.id} not credited",
            extra={"order_id": order.id},
        )
    return settle(order, seller, credit_seller=True, now=now)
