"""Lookup Helpers — store reads shared by all handlers.

Invariants:
    - get_or_404 raises ResourceNotFoundError, never returns None
    - live_actor re-reads the caller inside the current lock; a user deleted since
      token resolution is treated as unauthenticated
    - detached() returns deep copies so callers never hold live store objects
"""

import copy
from typing import TypeVar

from gigmarket.core.errors import ErrorContext, ResourceNotFoundError, UnauthenticatedError
from gigmarket.infrastructure.record_store import RecordStore
from gigmarket.models.user import User

T = TypeVar("T")


def get_or_404(records: dict, record_id: str, resource_type: str):
    record = records.get(record_id)
    if record is None:
        raise ResourceNotFoundError(resource_type, record_id)
    return record


def live_actor(store: RecordStore, actor: User) -> User:
    user = store.users.get(actor.id)
    if user is None:
        raise UnauthenticatedError(ErrorContext(user_id=actor.id))
    return user


def detached(value: T) -> T:
    return copy.deepcopy(value)
