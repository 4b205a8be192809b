"""Gig entity — a priced service offered by a seller.

Invariants:
    - seller_id is immutable and referenced a seller at creation time
    - price > 0
"""

from dataclasses import dataclass, field
from datetime import datetime

from gigmarket.core.domain_types import DEFAULT_GIG_CATEGORY, GigId, UserId
from gigmarket.models.base import dump_ts, load_ts, utc_now


@dataclass
class Gig:
    """Service listing."""
    id: GigId
    seller_id: UserId
    title: str
    description: str
    price: float
    category: str = DEFAULT_GIG_CATEGORY
    created_at: datetime = field(default_factory=utc_now)

    def to_record(self) -> dict:
        return {
            "id": self.id,
            "sellerId": self.seller_id,
            "title": self.title,
            "description": self.description,
            "price": self.price,
            "category": self.category,
            "createdAt": dump_ts(self.created_at),
        }

    @classmethod
    def from_record(cls, record: dict) -> "Gig":
        return cls(
            id=GigId(str(record["id"])),
            seller_id=UserId(str(record["sellerId"])),
            title=record["title"],
            description=record["description"],
            price=float(record["price"]),
            category=record.get("category") or DEFAULT_GIG_CATEGORY,
            created_at=load_ts(record["createdAt"]),
        )
