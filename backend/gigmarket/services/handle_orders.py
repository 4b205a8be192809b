"""Order Handlers — placement, listing and completion with escrow release.

Invariants:
    - place copies seller_id and price from the gig at that instant
    - complete runs authorize + transition + seller credit in one store transaction,
      so no reader can observe COMPLETED with escrow > 0 or a credit without the flip
    - list_for returns only orders where the caller is buyer or seller
"""

import logging

from gigmarket.core.authorization import Operation, authorize
from gigmarket.core.domain_types import Collection, OrderId
from gigmarket.core.errors import ErrorContext
from gigmarket.core.order_lifecycle import complete_order, open_order
from gigmarket.infrastructure.record_store import RecordStore
from gigmarket.models.base import utc_now
from gigmarket.models.order import Order
from gigmarket.models.user import User
from gigmarket.services.lookup_helpers import detached, get_or_404, live_actor

logger = logging.getLogger(__name__)


class OrderHandlers:
    """Order lifecycle operations."""

    def __init__(self, store: RecordStore):
        self.store = store

    def list_for(self, actor: User) -> list[Order]:
        with self.store.read() as store:
            return detached([
                o for o in store.orders.values() if o.involves(actor.id)
            ])

    def place(self, actor: User, gig_id: str) -> Order:
        with self.store.transaction() as store:
            buyer = live_actor(store, actor)
            authorize(buyer, Operation.PLACE_ORDER)
            gig = get_or_404(store.gigs, gig_id, "Gig")
            order = open_order(
                OrderId(store.next_id(Collection.ORDERS)), buyer, gig, utc_now(),
            )
            store.orders[order.id] = order
        logger.info(
            f"Order placed, {order.escrow} held in escrow",
            extra={"user_id": buyer.id, "order_id": order.id, "gig_id": gig.id},
        )
        return detached(order)

    def complete(self, actor: User, order_id: str) -> Order:
        with self.store.transaction() as store:
            user = live_actor(store, actor)
            order = get_or_404(store.orders, order_id, "Order")
            authorize(
                user, Operation.COMPLETE_ORDER, owners=order.participants,
                context=ErrorContext(order_id=order.id),
            )
            seller = store.users.get(order.seller_id)
            credited = complete_order(order, seller, utc_now())
        logger.info(
            f"Order completed, released {credited} to seller {order.seller_id}",
            extra={"user_id": user.id, "order_id": order.id, "amount": credited},
        )
        return detached(order)
