"""Marketplace Schemas — gigs, orders, messages and disputes at the API boundary.

Invariants:
    - Gig price must be > 0; category defaults to "General" downstream when omitted
    - Message text, dispute reason and resolution are non-empty after stripping
    - releaseToSeller defaults to false (refund outcome) when omitted
"""

from datetime import datetime

from pydantic import Field

from gigmarket.core.domain_types import DisputeStatus, OrderStatus
from gigmarket.schemas.base import CamelModel, EntityId, NonEmptyStr


class StatusMessage(CamelModel):
    message: str


# --- Gigs --------------------------------------------------------------------

class GigCreate(CamelModel):
    title: NonEmptyStr = Field(max_length=200)
    description: NonEmptyStr = Field(max_length=5000)
    price: float = Field(gt=0, allow_inf_nan=False)
    category: str | None = Field(None, max_length=100)


class GigOut(CamelModel):
    id: str
    seller_id: str
    title: str
    description: str
    price: float
    category: str
    created_at: datetime


class GigEnvelope(CamelModel):
    message: str | None = None
    gig: GigOut


class GigListResponse(CamelModel):
    gigs: list[GigOut]


# --- Orders ------------------------------------------------------------------

class PlaceOrderRequest(CamelModel):
    gig_id: EntityId


class CompleteOrderRequest(CamelModel):
    order_id: EntityId


class MessageOut(CamelModel):
    sender_id: str
    text: str
    timestamp: datetime


class OrderOut(CamelModel):
    id: str
    buyer_id: str
    seller_id: str
    gig_id: str
    amount: float
    escrow: float
    status: OrderStatus
    created_at: datetime
    completed_at: datetime | None = None
    messages: list[MessageOut] = []


class OrderEnvelope(CamelModel):
    message: str
    order: OrderOut


class OrderListResponse(CamelModel):
    orders: list[OrderOut]


# --- Messages ----------------------------------------------------------------

class MessageCreate(CamelModel):
    order_id: EntityId
    text: NonEmptyStr = Field(max_length=5000)


class MessageListResponse(CamelModel):
    messages: list[MessageOut]


# --- Disputes ----------------------------------------------------------------

class DisputeCreate(CamelModel):
    order_id: EntityId
    reason: NonEmptyStr = Field(max_length=5000)


class DisputeOut(CamelModel):
    id: str
    order_id: str
    initiator_id: str
    reason: str
    status: DisputeStatus
    resolution: str | None = None
    created_at: datetime
    resolved_at: datetime | None = None


class DisputeEnvelope(CamelModel):
    message: str
    dispute: DisputeOut


class DisputeListResponse(CamelModel):
    disputes: list[DisputeOut]


# --- Admin -------------------------------------------------------------------

class DeleteGigRequest(CamelModel):
    gig_id: EntityId


class DeleteUserRequest(CamelModel):
    user_id: EntityId


class ResolveDisputeRequest(CamelModel):
    dispute_id: EntityId
    resolution: NonEmptyStr = Field(max_length=5000)
    release_to_seller: bool = False
