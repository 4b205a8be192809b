"""Dispute Handlers — participants file disputes; resolution lives in AdminHandlers.

Invariants:
    - Only the order's buyer or seller may file (admin included only if a participant)
    - Filing leaves order status and escrow untouched
"""

import logging

from gigmarket.core.authorization import Operation, authorize
from gigmarket.core.dispute_resolution import open_dispute
from gigmarket.core.domain_types import Collection, DisputeId
from gigmarket.core.errors import ErrorContext
from gigmarket.infrastructure.record_store import RecordStore
from gigmarket.models.base import utc_now
from gigmarket.models.dispute import Dispute
from gigmarket.models.user import User
from gigmarket.services.lookup_helpers import detached, get_or_404, live_actor

logger = logging.getLogger(__name__)


class DisputeHandlers:
    """Dispute filing."""

    def __init__(self, store: RecordStore):
        self.store = store

    def file(self, actor: User, order_id: str, reason: str) -> Dispute:
        with self.store.transaction() as store:
            user = live_actor(store, actor)
            order = get_or_404(store.orders, order_id, "Order")
            authorize(
                user, Operation.FILE_DISPUTE, owners=order.participants,
                context=ErrorContext(order_id=order.id),
            )
            dispute = open_dispute(
                DisputeId(store.next_id(Collection.DISPUTES)),
                order, user, reason, utc_now(),
            )
            store.disputes[dispute.id] = dispute
        logger.info(
            "Dispute filed",
            extra={"user_id": user.id, "order_id": order.id, "dispute_id": dispute.id},
        )
        return detached(dispute)
