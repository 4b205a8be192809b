"""Entity factories shared by core and infrastructure tests."""

from datetime import datetime, timezone

from gigmarket.core.domain_types import GigId, OrderId, OrderStatus, Role, UserId
from gigmarket.models import Gig, Order, User

NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


def make_user(user_id: str, role: Role, wallet: float = 0.0) -> User:
    return User(
        id=UserId(user_id), username=f"user{user_id}",
        email=f"user{user_id}@example.com", password="pw",
        role=role, wallet=wallet, created_at=NOW,
    )


def make_gig(gig_id: str = "1", seller_id: str = "2", price: float = 50.0) -> Gig:
    return Gig(
        id=GigId(gig_id), seller_id=UserId(seller_id), title="Logo design",
        description="A vector logo", price=price, created_at=NOW,
    )


def make_order(
    order_id: str = "1", buyer_id: str = "3", seller_id: str = "2",
    amount: float = 50.0,
) -> Order:
    return Order(
        id=OrderId(order_id), buyer_id=UserId(buyer_id),
        seller_id=UserId(seller_id), gig_id=GigId("1"),
        amount=amount, escrow=amount, created_at=NOW,
    )


def escrow_consistent(order: Order) -> bool:
    """status == COMPLETED ⇔ escrow == 0."""
    return (order.status == OrderStatus.COMPLETED) == (order.escrow == 0)
