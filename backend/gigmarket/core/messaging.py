"""Order Messaging — append-only conversation attached to each order.

Invariants:
    - All functions are PURE: no IO
    - Messages are only appended; no edit, no delete
    - list_messages returns a new list in insertion order (safe to re-fetch)
"""

from datetime import datetime

from gigmarket.core.domain_types import UserId
from gigmarket.core.errors import ErrorContext, InvalidInputError
from gigmarket.models.order import Message, Order


def append_message(
    order: Order, sender_id: UserId, text: str, now: datetime,
) -> Message:
    if not text or not text.strip():
        raise InvalidInputError(
            "Message text is required", "text", ErrorContext(order_id=order.id),
        )
    message = Message(sender_id=sender_id, text=text, timestamp=now)
    order.messages.append(message)
    return message


def list_messages(order: Order) -> list[Message]:
    return list(order.messages)
