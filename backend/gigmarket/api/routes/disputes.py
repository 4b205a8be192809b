"""Dispute Routes — participants open disputes on their orders."""

from fastapi import APIRouter, Depends, status

from gigmarket.api.dependencies import current_user, get_marketplace
from gigmarket.models.user import User
from gigmarket.schemas.marketplace import DisputeCreate, DisputeEnvelope, DisputeOut
from gigmarket.services.marketplace import Marketplace

router = APIRouter(prefix="/disputes", tags=["disputes"])


@router.post(
    "", response_model=DisputeEnvelope, status_code=status.HTTP_201_CREATED,
)
def file_dispute(
    body: DisputeCreate,
    user: User = Depends(current_user),
    marketplace: Marketplace = Depends(get_marketplace),
):
    dispute = marketplace.disputes.file(user, body.order_id, body.reason)
    return DisputeEnvelope(
        message="Dispute created", dispute=DisputeOut.model_validate(dispute),
    )
