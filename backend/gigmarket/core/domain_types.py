"""Domain Types — identity aliases and state enums shared across the marketplace.

Invariants:
    - UserId, GigId, OrderId, DisputeId wrap decimal strings — never reused after deletion
    - All lifecycle states encoded as Enums — no raw string matching in core logic
    - OrderStatus and DisputeStatus each have a single forward transition

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)
GigId = NewType("GigId", str)
OrderId = NewType("OrderId", str)
DisputeId = NewType("DisputeId", str)


# ─── Enums ───────────────────────────────────────────────────────

class Role(str, Enum):
    """Account roles. Exactly one admin exists at any time."""
    BUYER = "buyer"
    SELLER = "seller"
    ADMIN = "admin"


class OrderStatus(str, Enum):
    """Order lifecycle: IN_PROGRESS → COMPLETED (terminal)."""
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class DisputeStatus(str, Enum):
    """Dispute lifecycle: OPEN → RESOLVED (terminal)."""
    OPEN = "open"
    RESOLVED = "resolved"


class VerificationLevel(str, Enum):
    """Informational trust badge shown on profiles."""
    BASIC = "basic"
    TRUSTED = "trusted"


class Collection(str, Enum):
    """Record store collections — one JSON file each."""
    USERS = "users"
    GIGS = "gigs"
    ORDERS = "orders"
    DISPUTES = "disputes"


DEFAULT_GIG_CATEGORY = "General"
