"""Dispute entity — a participant's complaint about an order, settled by admin.

Invariants:
    - order_id referenced an existing order at filing time
    - initiator_id was a participant of that order
    - resolution and resolved_at are None while OPEN, set once on RESOLVED
"""

from dataclasses import dataclass, field
from datetime import datetime

from gigmarket.core.domain_types import DisputeId, DisputeStatus, OrderId, UserId
from gigmarket.models.base import dump_ts, load_ts, utc_now


@dataclass
class Dispute:
    """Dispute record."""
    id: DisputeId
    order_id: OrderId
    initiator_id: UserId
    reason: str
    status: DisputeStatus = DisputeStatus.OPEN
    resolution: str | None = None
    created_at: datetime = field(default_factory=utc_now)
    resolved_at: datetime | None = None

    def to_record(self) -> dict:
        return {
            "id": self.id,
            "orderId": self.order_id,
            "initiatorId": self.initiator_id,
            "reason": self.reason,
            "status": self.status.value,
            "resolution": self.resolution,
            "createdAt": dump_ts(self.created_at),
            "resolvedAt": dump_ts(self.resolved_at),
        }

    @classmethod
    def from_record(cls, record: dict) -> "Dispute":
        return cls(
            id=DisputeId(str(record["id"])),
            order_id=OrderId(str(record["orderId"])),
            initiator_id=UserId(str(record["initiatorId"])),
            reason=record["reason"],
            status=DisputeStatus(record["status"]),
            resolution=record.get("resolution"),
            created_at=load_ts(record["createdAt"]),
            resolved_at=load_ts(record.get("resolvedAt")),
        )
