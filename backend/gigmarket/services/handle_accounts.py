"""Account Handlers — register, login, logout, profile, admin bootstrap.

Invariants:
    - Emails are unique (compared lowercased)
    - Registration never creates an admin; provision_admin creates one only when none exists
    - Login issues a fresh token per call; tokens live only in the SessionRegistry
    - Passwords pass through the CredentialVerifier, never compared directly
"""

import logging

from gigmarket.core.domain_types import Collection, Role, UserId, VerificationLevel
from gigmarket.core.errors import (
    DuplicateEmailError, ErrorContext, InvalidCredentialsError,
)
from gigmarket.core.protocols import CredentialVerifier
from gigmarket.core.session_registry import SessionRegistry
from gigmarket.infrastructure.record_store import RecordStore
from gigmarket.models.base import utc_now
from gigmarket.models.user import User
from gigmarket.services.lookup_helpers import detached

logger = logging.getLogger(__name__)


class AccountHandlers:
    """Identity lifecycle."""

    def __init__(
        self, store: RecordStore, sessions: SessionRegistry,
        verifier: CredentialVerifier,
    ):
        self.store = store
        self.sessions = sessions
        self.verifier = verifier

    def find_user(self, user_id: UserId) -> User | None:
        with self.store.read() as store:
            user = store.users.get(user_id)
            return detached(user) if user else None

    def register(self, username: str, email: str, password: str, role: Role) -> User:
        email = email.strip().lower()
        with self.store.transaction() as store:
            if any(u.email == email for u in store.users.values()):
                raise DuplicateEmailError(email)
            user = User(
                id=UserId(store.next_id(Collection.USERS)),
                username=username,
                email=email,
                password=self.verifier.encode(password),
                role=Role(role),
                wallet=0.0,
                verification_level=VerificationLevel.BASIC,
                created_at=utc_now(),
            )
            store.users[user.id] = user
        logger.info(f"User registered as {user.role.value}", extra={"user_id": user.id})
        return detached(user)

    def login(self, email: str, password: str) -> tuple[str, User]:
        email = email.strip().lower()
        with self.store.read() as store:
            user = next((u for u in store.users.values() if u.email == email), None)
            if user is None or not self.verifier.verify(password, user.password):
                raise InvalidCredentialsError(ErrorContext(
                    user_id=user.id if user else None,
                ))
            user = detached(user)
        token = self.sessions.issue(user.id)
        logger.info("User logged in", extra={"user_id": user.id})
        return token, user

    def logout(self, token: str) -> bool:
        return self.sessions.revoke(token)

    def provision_admin(self, username: str, email: str, password: str) -> User | None:
        """Create the admin account if none exists. Returns it when created."""
        with self.store.transaction() as store:
            if any(u.role == Role.ADMIN for u in store.users.values()):
                return None
            email = email.strip().lower()
            if any(u.email == email for u in store.users.values()):
                raise DuplicateEmailError(email)
            admin = User(
                id=UserId(store.next_id(Collection.USERS)),
                username=username,
                email=email,
                password=self.verifier.encode(password),
                role=Role.ADMIN,
                wallet=0.0,
                verification_level=VerificationLevel.TRUSTED,
                created_at=utc_now(),
            )
            store.users[admin.id] = admin
        logger.warning(
            f"No admin found; provisioned admin account {email}",
            extra={"user_id": admin.id},
        )
        return detached(admin)
