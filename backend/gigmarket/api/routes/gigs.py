"""Gig Routes — public catalogue, seller creation, owner deletion."""

from fastapi import APIRouter, Depends, status

from gigmarket.api.dependencies import current_user, get_marketplace, require
from gigmarket.core.authorization import Operation
from gigmarket.models.user import User
from gigmarket.schemas.marketplace import (
    GigCreate, GigEnvelope, GigListResponse, GigOut, StatusMessage,
)
from gigmarket.services.marketplace import Marketplace

router = APIRouter(prefix="/gigs", tags=["gigs"])


@router.get("", response_model=GigListResponse)
def list_gigs(marketplace: Marketplace = Depends(get_marketplace)):
    gigs = marketplace.gigs.list_gigs()
    return GigListResponse(gigs=[GigOut.model_validate(g) for g in gigs])


@router.post(
    "", response_model=GigEnvelope, status_code=status.HTTP_201_CREATED,
)
def create_gig(
    body: GigCreate,
    user: User = Depends(require(Operation.CREATE_GIG)),
    marketplace: Marketplace = Depends(get_marketplace),
):
    """Sellers publish a new gig."""
    gig = marketplace.gigs.create_gig(
        user, body.title, body.description, body.price, body.category,
    )
    return GigEnvelope(message="Gig created", gig=GigOut.model_validate(gig))


@router.get("/{gig_id}", response_model=GigEnvelope)
def get_gig(
    gig_id: str, marketplace: Marketplace = Depends(get_marketplace),
):
    gig = marketplace.gigs.get_gig(gig_id)
    return GigEnvelope(gig=GigOut.model_validate(gig))


@router.delete("/{gig_id}", response_model=StatusMessage)
def delete_gig(
    gig_id: str,
    user: User = Depends(current_user),
    marketplace: Marketplace = Depends(get_marketplace),
):
    """The owning seller (or admin) withdraws a gig."""
    marketplace.gigs.delete_own_gig(user, gig_id)
    return StatusMessage(message="Gig deleted")
