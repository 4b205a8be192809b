"""Authorization Guard — identity resolution and one declarative permission per operation.

Invariants:
    - resolve_user raises UnauthenticatedError for missing/unknown tokens and for
      tokens whose user has since been deleted
    - Role checks are exact-match: admin does NOT satisfy role_in(BUYER) or role_in(SELLER)
    - Ownership checks compare the user id against the resource's owner ids;
      admin bypasses them only where the permission says admin_bypass
    - Every operation has exactly one entry in PERMISSIONS

Design Decisions:
    - Permissions as frozen dataclasses in a table: every rule visible in one place
      (ADR: ExMA no convention-over-config)
    - Raises instead of returning error dicts: HTTP handlers map MarketplaceError
      to responses uniformly
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable

from gigmarket.core.domain_types import Role, UserId
from gigmarket.core.errors import ErrorContext, ForbiddenError, UnauthenticatedError
from gigmarket.core.session_registry import SessionRegistry
from gigmarket.models.user import User


@dataclass(frozen=True)
class Permission:
    """Declarative predicate evaluated by authorize()."""
    denial: str
    roles: frozenset[Role] | None = None
    requires_ownership: bool = False
    admin_bypass: bool = False


def authenticated() -> Permission:
    return Permission(denial="Unauthorized")


def role_in(*roles: Role, denial: str) -> Permission:
    return Permission(denial=denial, roles=frozenset(roles))


def admin_only() -> Permission:
    return role_in(Role.ADMIN, denial="Admin only")


def participant_of(denial: str) -> Permission:
    return Permission(denial=denial, requires_ownership=True)


def participant_or_admin(denial: str) -> Permission:
    return Permission(denial=denial, requires_ownership=True, admin_bypass=True)


def owner_or_admin(denial: str) -> Permission:
    # Same predicate shape; owners are the gig's seller instead of order participants
    return participant_or_admin(denial)


class Operation(str, Enum):
    """Every guarded marketplace operation."""
    ME = "me"
    LOGOUT = "logout"
    CREATE_GIG = "create_gig"
    DELETE_GIG = "delete_gig"
    LIST_ORDERS = "list_orders"
    PLACE_ORDER = "place_order"
    COMPLETE_ORDER = "complete_order"
    LIST_MESSAGES = "list_messages"
    POST_MESSAGE = "post_message"
    FILE_DISPUTE = "file_dispute"
    ADMIN_LIST = "admin_list"
    ADMIN_DELETE_GIG = "admin_delete_gig"
    ADMIN_DELETE_USER = "admin_delete_user"
    ADMIN_RESOLVE_DISPUTE = "admin_resolve_dispute"
    ADMIN_UNKNOWN_ENDPOINT = "admin_unknown_endpoint"


PERMISSIONS: dict[Operation, Permission] = {
    Operation.ME: authenticated(),
    Operation.LOGOUT: authenticated(),
    Operation.CREATE_GIG: role_in(Role.SELLER, denial="Only sellers can create gigs"),
    Operation.DELETE_GIG: owner_or_admin("Only the gig's seller can delete it"),
    Operation.LIST_ORDERS: authenticated(),
    Operation.PLACE_ORDER: role_in(Role.BUYER, denial="Only buyers can place orders"),
    Operation.COMPLETE_ORDER: participant_of("Not authorized for this order"),
    Operation.LIST_MESSAGES: participant_or_admin("Not authorised to view messages"),
    Operation.POST_MESSAGE: participant_or_admin("Not authorised to send message"),
    Operation.FILE_DISPUTE: participant_of("Not authorised to dispute"),
    Operation.ADMIN_LIST: admin_only(),
    Operation.ADMIN_DELETE_GIG: admin_only(),
    Operation.ADMIN_DELETE_USER: admin_only(),
    Operation.ADMIN_RESOLVE_DISPUTE: admin_only(),
    Operation.ADMIN_UNKNOWN_ENDPOINT: admin_only(),
}


def resolve_user(
    token: str | None,
    sessions: SessionRegistry,
    find_user: Callable[[UserId], User | None],
) -> User:
    """Map a bearer token to a live user or raise UnauthenticatedError."""
    user_id = sessions.resolve(token)
    if user_id is None:
        raise UnauthenticatedError()
    user = find_user(user_id)
    if user is None:
        raise UnauthenticatedError(ErrorContext(user_id=user_id))
    return user


def is_permitted(
    user: User, permission: Permission, owners: Iterable[str] = (),
) -> bool:
    """Pure predicate: does user satisfy permission for a resource owned by owners?"""
    if permission.roles is not None and user.role not in permission.roles:
        return False
    if permission.requires_ownership and user.id not in set(owners):
        return permission.admin_bypass and user.role == Role.ADMIN
    return True


def authorize(
    user: User, operation: Operation, owners: Iterable[str] = (),
    context: ErrorContext | None = None,
) -> None:
    """Raise ForbiddenError unless user may perform operation."""
    permission = PERMISSIONS[operation]
    if not is_permitted(user, permission, owners):
        ctx = context or ErrorContext()
        ctx.user_id = user.id
        raise ForbiddenError(permission.denial, ctx)
