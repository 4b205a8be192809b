"""Account Schemas — registration, login and public user views.

Invariants:
    - Registration accepts only buyer/seller roles (admin is provisioned, never registered)
    - Emails are stripped and lowercased before reaching the service layer
    - UserOut never carries the stored credential
"""

from datetime import datetime
from typing import Literal

from pydantic import Field, field_validator

from gigmarket.core.domain_types import Role, VerificationLevel
from gigmarket.schemas.base import CamelModel, NonEmptyStr

_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+$"


class RegisterRequest(CamelModel):
    username: NonEmptyStr = Field(max_length=100)
    email: str = Field(min_length=3, max_length=254, pattern=_EMAIL_PATTERN)
    password: str = Field(min_length=1, max_length=256)
    role: Literal["buyer", "seller"]

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class LoginRequest(CamelModel):
    email: NonEmptyStr
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.lower()


class RegisterResponse(CamelModel):
    message: str = "User registered"
    user_id: str


class LoginResponse(CamelModel):
    message: str = "Logged in"
    token: str
    role: Role
    user_id: str


class UserOut(CamelModel):
    """Public view of a user — no credential field."""
    id: str
    username: str
    email: str
    role: Role
    wallet: float
    verification_level: VerificationLevel
    created_at: datetime


class UserEnvelope(CamelModel):
    user: UserOut


class UserListResponse(CamelModel):
    users: list[UserOut]


class DeletedUserResponse(CamelModel):
    message: str = "User and related data deleted"
    user: UserOut
