"""Account Routes — register, login, logout and the caller's profile.

Invariants:
    - register/login are public; logout/me require a valid bearer token
    - Responses never include the stored credential
"""

from fastapi import APIRouter, Depends, status

from gigmarket.api.dependencies import get_marketplace, get_token, require
from gigmarket.core.authorization import Operation
from gigmarket.models.user import User
from gigmarket.schemas.accounts import (
    LoginRequest, LoginResponse, RegisterRequest, RegisterResponse,
    UserEnvelope, UserOut,
)
from gigmarket.schemas.marketplace import StatusMessage
from gigmarket.services.marketplace import Marketplace

router = APIRouter(tags=["accounts"])


@router.post(
    "/register", response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
def register(
    body: RegisterRequest, marketplace: Marketplace = Depends(get_marketplace),
):
    """Create a buyer or seller account."""
    user = marketplace.accounts.register(
        body.username, body.email, body.password, body.role,
    )
    return RegisterResponse(user_id=user.id)


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest, marketplace: Marketplace = Depends(get_marketplace),
):
    """Exchange email + password for a bearer token."""
    token, user = marketplace.accounts.login(body.email, body.password)
    return LoginResponse(token=token, role=user.role, user_id=user.id)


@router.post("/logout", response_model=StatusMessage)
def logout(
    user: User = Depends(require(Operation.LOGOUT)),
    token: str | None = Depends(get_token),
    marketplace: Marketplace = Depends(get_marketplace),
):
    marketplace.accounts.logout(token)
    return StatusMessage(message="Logged out")


@router.get("/me", response_model=UserEnvelope)
def me(user: User = Depends(require(Operation.ME))):
    return UserEnvelope(user=UserOut.model_validate(user))
