"""Message Handlers — per-order conversation between participants (and admin).

Invariants:
    - Read and write share one permission: participant or admin
    - Messages are appended in arrival order under the store lock
"""

import logging

from gigmarket.core.authorization import Operation, authorize
from gigmarket.core.errors import ErrorContext
from gigmarket.core.messaging import append_message, list_messages
from gigmarket.infrastructure.record_store import RecordStore
from gigmarket.models.base import utc_now
from gigmarket.models.order import Message
from gigmarket.models.user import User
from gigmarket.services.lookup_helpers import detached, get_or_404, live_actor

logger = logging.getLogger(__name__)


class MessageHandlers:
    """Order messaging."""

    def __init__(self, store: RecordStore):
        self.store = store

    def history(self, actor: User, order_id: str) -> list[Message]:
        with self.store.read() as store:
            user = live_actor(store, actor)
            order = get_or_404(store.orders, order_id, "Order")
            authorize(
                user, Operation.LIST_MESSAGES, owners=order.participants,
                context=ErrorContext(order_id=order.id),
            )
            return detached(list_messages(order))

    def post(self, actor: User, order_id: str, text: str) -> Message:
        with self.store.transaction() as store:
            user = live_actor(store, actor)
            order = get_or_404(store.orders, order_id, "Order")
            authorize(
                user, Operation.POST_MESSAGE, owners=order.participants,
                context=ErrorContext(order_id=order.id),
            )
            message = append_message(order, user.id, text, utc_now())
        logger.info("Message posted", extra={"user_id": user.id, "order_id": order.id})
        return detached(message)
