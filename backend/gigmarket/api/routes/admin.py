"""Admin Routes — moderation listings, deletions and dispute resolution.

Invariants:
    - Every route depends on require(admin op): non-admins get 403 before the body is read
    - User listings go through UserOut, so credentials never leave the server
    - Unmatched /adm/* paths are admin-checked too: non-admins get 403, admins 404
"""

from fastapi import APIRouter, Depends

from gigmarket.api.dependencies import get_marketplace, require
from gigmarket.core.authorization import Operation
from gigmarket.core.domain_types import Collection
from gigmarket.core.errors import ErrorContext, ResourceNotFoundError
from gigmarket.models.user import User
from gigmarket.schemas.accounts import DeletedUserResponse, UserListResponse, UserOut
from gigmarket.schemas.marketplace import (
    DeleteGigRequest, DeleteUserRequest, DisputeEnvelope, DisputeListResponse,
    DisputeOut, GigListResponse, GigOut, OrderListResponse, OrderOut,
    ResolveDisputeRequest, StatusMessage,
)
from gigmarket.services.marketplace import Marketplace

router = APIRouter(prefix="/adm", tags=["admin"])

require_admin_list = require(Operation.ADMIN_LIST)


@router.get("/users", response_model=UserListResponse)
def list_users(
    admin: User = Depends(require_admin_list),
    marketplace: Marketplace = Depends(get_marketplace),
):
    users = marketplace.admin.list_collection(admin, Collection.USERS)
    return UserListResponse(users=[UserOut.model_validate(u) for u in users])


@router.get("/gigs", response_model=GigListResponse)
def list_all_gigs(
    admin: User = Depends(require_admin_list),
    marketplace: Marketplace = Depends(get_marketplace),
):
    gigs = marketplace.admin.list_collection(admin, Collection.GIGS)
    return GigListResponse(gigs=[GigOut.model_validate(g) for g in gigs])


@router.get("/orders", response_model=OrderListResponse)
def list_all_orders(
    admin: User = Depends(require_admin_list),
    marketplace: Marketplace = Depends(get_marketplace),
):
    orders = marketplace.admin.list_collection(admin, Collection.ORDERS)
    return OrderListResponse(orders=[OrderOut.model_validate(o) for o in orders])


@router.get("/disputes", response_model=DisputeListResponse)
def list_all_disputes(
    admin: User = Depends(require_admin_list),
    marketplace: Marketplace = Depends(get_marketplace),
):
    disputes = marketplace.admin.list_collection(admin, Collection.DISPUTES)
    return DisputeListResponse(
        disputes=[DisputeOut.model_validate(d) for d in disputes],
    )


@router.post("/delete-gig", response_model=StatusMessage)
def delete_gig(
    body: DeleteGigRequest,
    admin: User = Depends(require(Operation.ADMIN_DELETE_GIG)),
    marketplace: Marketplace = Depends(get_marketplace),
):
    marketplace.admin.delete_gig(admin, body.gig_id)
    return StatusMessage(message="Gig deleted")


@router.post("/delete-user", response_model=DeletedUserResponse)
def delete_user(
    body: DeleteUserRequest,
    admin: User = Depends(require(Operation.ADMIN_DELETE_USER)),
    marketplace: Marketplace = Depends(get_marketplace),
):
    """Remove a user together with their gigs and orders."""
    removed = marketplace.admin.delete_user(admin, body.user_id)
    return DeletedUserResponse(user=UserOut.model_validate(removed))


@router.post("/resolve-dispute", response_model=DisputeEnvelope)
def resolve_dispute(
    body: ResolveDisputeRequest,
    admin: User = Depends(require(Operation.ADMIN_RESOLVE_DISPUTE)),
    marketplace: Marketplace = Depends(get_marketplace),
):
    """Close a dispute; releaseToSeller decides whether escrow is paid out."""
    dispute = marketplace.admin.resolve_dispute(
        admin, body.dispute_id, body.resolution, body.release_to_seller,
    )
    return DisputeEnvelope(
        message="Dispute resolved", dispute=DisputeOut.model_validate(dispute),
    )


# Must stay last: it matches every path under /adm
@router.api_route(
    "/{path:path}", methods=["GET", "POST", "DELETE"], include_in_schema=False,
)
def unknown_admin_endpoint(
    path: str,
    admin: User = Depends(require(Operation.ADMIN_UNKNOWN_ENDPOINT)),
):
    raise ResourceNotFoundError(
        "Admin endpoint", path, ErrorContext(user_id=admin.id),
    )
