"""Order Routes — list, place and complete orders.

Invariants:
    - Placement is buyer-only (403 before the body is inspected)
    - Completion is participant-only; checked by the handler once the order is loaded
"""

from fastapi import APIRouter, Depends, status

from gigmarket.api.dependencies import current_user, get_marketplace, require
from gigmarket.core.authorization import Operation
from gigmarket.models.user import User
from gigmarket.schemas.marketplace import (
    CompleteOrderRequest, OrderEnvelope, OrderListResponse, OrderOut,
    PlaceOrderRequest,
)
from gigmarket.services.marketplace import Marketplace

router = APIRouter(tags=["orders"])


@router.get("/orders", response_model=OrderListResponse)
def list_orders(
    user: User = Depends(require(Operation.LIST_ORDERS)),
    marketplace: Marketplace = Depends(get_marketplace),
):
    """Orders where the caller is buyer or seller."""
    orders = marketplace.orders.list_for(user)
    return OrderListResponse(orders=[OrderOut.model_validate(o) for o in orders])


@router.post(
    "/orders", response_model=OrderEnvelope,
    status_code=status.HTTP_201_CREATED,
)
def place_order(
    body: PlaceOrderRequest,
    user: User = Depends(require(Operation.PLACE_ORDER)),
    marketplace: Marketplace = Depends(get_marketplace),
):
    order = marketplace.orders.place(user, body.gig_id)
    return OrderEnvelope(message="Order placed", order=OrderOut.model_validate(order))


@router.post("/complete-order", response_model=OrderEnvelope)
def complete_order(
    body: CompleteOrderRequest,
    user: User = Depends(current_user),
    marketplace: Marketplace = Depends(get_marketplace),
):
    """Buyer or seller marks the order done; escrow goes to the seller."""
    order = marketplace.orders.complete(user, body.order_id)
    return OrderEnvelope(message="Order completed", order=OrderOut.model_validate(order))
