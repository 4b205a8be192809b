"""Schema boundary — camelCase aliasing and field constraints."""

import pytest
from pydantic import ValidationError

from gigmarket.core.domain_types import Role
from gigmarket.schemas.accounts import RegisterRequest, UserOut
from gigmarket.schemas.marketplace import (
    GigCreate, MessageCreate, PlaceOrderRequest, ResolveDisputeRequest,
)
from tests.factories import make_user


def test_camel_case_and_snake_case_both_accepted():
    assert PlaceOrderRequest.model_validate({"gigId": "4"}).gig_id == "4"
    assert PlaceOrderRequest(gig_id="4").gig_id == "4"


def test_numeric_ids_coerced_to_strings():
    assert PlaceOrderRequest.model_validate({"gigId": 4}).gig_id == "4"


@pytest.mark.parametrize("price", [0, -1, float("inf")])
def test_gig_price_must_be_positive_and_finite(price):
    with pytest.raises(ValidationError):
        GigCreate(title="t", description="d", price=price)


def test_message_text_stripped_and_required():
    assert MessageCreate(order_id="1", text="  hi ").text == "hi"
    with pytest.raises(ValidationError):
        MessageCreate(order_id="1", text="   ")


def test_release_to_seller_defaults_to_refund():
    body = ResolveDisputeRequest.model_validate({"disputeId": "1", "resolution": "ok"})
    assert body.release_to_seller is False


def test_register_rejects_admin_role_and_lowercases_email():
    body = RegisterRequest(username="a", email="A@Example.com", password="pw", role="seller")
    assert body.email == "a@example.com"
    with pytest.raises(ValidationError):
        RegisterRequest(username="a", email="a@example.com", password="pw", role="admin")


def test_user_out_hides_password_and_dumps_camel_case():
    out = UserOut.model_validate(make_user("7", Role.SELLER, wallet=12.5))
    dumped = out.model_dump(by_alias=True, mode="json")
    assert "password" not in dumped
    assert dumped["verificationLevel"] == "basic"
    assert dumped["wallet"] == 12.5
