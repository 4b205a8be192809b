"""User entity — an account holder with a role and a wallet.

Invariants:
    - email is stored lowercased and unique across the users collection
    - wallet is non-negative and only increases (escrow release)
    - password holds whatever the CredentialVerifier produced; never serialized to API responses
"""

from dataclasses import dataclass, field
from datetime import datetime

from gigmarket.core.domain_types import Role, UserId, VerificationLevel
from gigmarket.models.base import dump_ts, load_ts, utc_now


@dataclass
class User:
    """Marketplace account."""
    id: UserId
    username: str
    email: str
    password: str
    role: Role
    wallet: float = 0.0
    verification_level: VerificationLevel = VerificationLevel.BASIC
    created_at: datetime = field(default_factory=utc_now)

    def to_record(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "password": self.password,
            "role": self.role.value,
            "wallet": self.wallet,
            "verificationLevel": self.verification_level.value,
            "createdAt": dump_ts(self.created_at),
        }

    @classmethod
    def from_record(cls, record: dict) -> "User":
        return cls(
            id=UserId(str(record["id"])),
            username=record["username"],
            email=record["email"],
            password=record["password"],
            role=Role(record["role"]),
            wallet=float(record.get("wallet", 0)),
            verification_level=VerificationLevel(
                record.get("verificationLevel", VerificationLevel.BASIC.value),
            ),
            created_at=load_ts(record["createdAt"]),
        )
