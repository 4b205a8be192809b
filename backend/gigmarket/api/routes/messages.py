"""Message Routes — read and append an order's conversation."""

from fastapi import APIRouter, Depends, Query, status

from gigmarket.api.dependencies import current_user, get_marketplace
from gigmarket.models.user import User
from gigmarket.schemas.marketplace import (
    MessageCreate, MessageListResponse, MessageOut, StatusMessage,
)
from gigmarket.services.marketplace import Marketplace

router = APIRouter(prefix="/messages", tags=["messages"])


@router.get("", response_model=MessageListResponse)
def list_messages(
    order_id: str = Query(..., alias="orderId", min_length=1),
    user: User = Depends(current_user),
    marketplace: Marketplace = Depends(get_marketplace),
):
    messages = marketplace.messages.history(user, order_id)
    return MessageListResponse(
        messages=[MessageOut.model_validate(m) for m in messages],
    )


@router.post(
    "", response_model=StatusMessage, status_code=status.HTTP_201_CREATED,
)
def post_message(
    body: MessageCreate,
    user: User = Depends(current_user),
    marketplace: Marketplace = Depends(get_marketplace),
):
    marketplace.messages.post(user, body.order_id, body.text)
    return StatusMessage(message="Message sent")
