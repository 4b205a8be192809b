"""Entity Models — plain dataclasses persisted as JSON records by the record store.

Invariants:
    - Every entity converts to/from a camelCase record (to_record/from_record)
    - Entities carry no IO; mutation happens only in core transition functions

Design Decisions:
    - One file per entity for locality (ADR: ExMA max 3-4 files to understand a feature)
    - Re-exported here so callers import from one place
"""

from gigmarket.models.user import User  # noqa: F401
from gigmarket.models.gig import Gig  # noqa: F401
from gigmarket.models.order import Message, Order  # noqa: F401
from gigmarket.models.dispute import Dispute  # noqa: F401
