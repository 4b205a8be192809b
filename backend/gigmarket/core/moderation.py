"""Admin Moderation — cascade rules for removing accounts.

Invariants:
    - All functions are PURE: operate on the collections passed in
    - The admin account can never be deleted (exactly one admin at all times)
    - Removing a user removes their gigs and every order where they are buyer or seller
    - Disputes and messages of removed orders are left as they are
"""

from gigmarket.core.domain_types import GigId, OrderId, Role
from gigmarket.core.errors import ErrorContext, StateConflictError
from gigmarket.models.gig import Gig
from gigmarket.models.order import Order
from gigmarket.models.user import User


def check_user_deletable(user: User) -> None:
    if user.role == Role.ADMIN:
        raise StateConflictError(
            "The admin account cannot be deleted", ErrorContext(user_id=user.id),
        )


def cascade_user_removal(
    user: User, gigs: dict[GigId, Gig], orders: dict[OrderId, Order],
) -> tuple[list[GigId], list[OrderId]]:
    """Delete user's gigs and orders in place. Returns the removed ids."""
    gig_ids = [gid for gid, g in gigs.items() if g.seller_id == user.id]
    order_ids = [oid for oid, o in orders.items() if o.involves(user.id)]
    for gid in gig_ids:
        del gigs[gid]
    for oid in order_ids:
        del orders[oid]
    return gig_ids, order_ids
