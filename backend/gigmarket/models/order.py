"""Order entity — a buyer's purchase of a gig, holding the price in escrow.

Invariants:
    - seller_id and amount are copied from the gig at creation (never re-read)
    - escrow == amount while IN_PROGRESS; escrow == 0 once COMPLETED
    - messages are append-only and kept in insertion order

Design Decisions:
    - Messages embedded in the order record: they are owned by exactly one order
      and never queried across orders
"""

from dataclasses import dataclass, field
from datetime import datetime

from gigmarket.core.domain_types import GigId, OrderId, OrderStatus, UserId
from gigmarket.models.base import dump_ts, load_ts, utc_now


@dataclass
class Message:
    """One entry of an order's conversation."""
    sender_id: UserId
    text: str
    timestamp: datetime = field(default_factory=utc_now)

    def to_record(self) -> dict:
        return {
            "senderId": self.sender_id,
            "text": self.text,
            "timestamp": dump_ts(self.timestamp),
        }

    @classmethod
    def from_record(cls, record: dict) -> "Message":
        return cls(
            sender_id=UserId(str(record["senderId"])),
            text=record["text"],
            timestamp=load_ts(record["timestamp"]),
        )


@dataclass
class Order:
    """Order with escrow and embedded message log."""
    id: OrderId
    buyer_id: UserId
    seller_id: UserId
    gig_id: GigId
    amount: float
    escrow: float
    status: OrderStatus = OrderStatus.IN_PROGRESS
    created_at: datetime = field(default_factory=utc_now)
    completed_at: datetime | None = None
    messages: list[Message] = field(default_factory=list)

    @property
    def participants(self) -> tuple[UserId, UserId]:
        return (self.buyer_id, self.seller_id)

    def involves(self, user_id: str) -> bool:
        return user_id in self.participants

    def to_record(self) -> dict:
        return {
            "id": self.id,
            "buyerId": self.buyer_id,
            "sellerId": self.seller_id,
            "gigId": self.gig_id,
            "amount": self.amount,
            "escrow": self.escrow,
            "status": self.status.value,
            "createdAt": dump_ts(self.created_at),
            "completedAt": dump_ts(self.completed_at),
            "messages": [m.to_record() for m in self.messages],
        }

    @classmethod
    def from_record(cls, record: dict) -> "Order":
        return cls(
            id=OrderId(str(record["id"])),
            buyer_id=UserId(str(record["buyerId"])),
            seller_id=UserId(str(record["sellerId"])),
            gig_id=GigId(str(record["gigId"])),
            amount=float(record["amount"]),
            escrow=float(record["escrow"]),
            status=OrderStatus(record["status"]),
            created_at=load_ts(record["createdAt"]),
            completed_at=load_ts(record.get("completedAt")),
            messages=[Message.from_record(m) for m in record.get("messages") or []],
        )
