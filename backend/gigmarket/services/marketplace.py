"""Marketplace — wires store, sessions and verifier into the handler groups.

Invariants:
    - One Marketplace per app instance; routes reach it through app.state
    - Every handler group shares the same RecordStore and SessionRegistry
    - bootstrap() loads the store and guarantees an admin exists before serving

Design Decisions:
    - Explicit attributes per handler group over getattr dispatch: every
      operation visible in one place (ADR: ExMA no convention-over-config)
"""

import logging

from gigmarket.config import Settings
from gigmarket.core.protocols import CredentialVerifier
from gigmarket.core.session_registry import SessionRegistry
from gigmarket.infrastructure.record_store import RecordStore
from gigmarket.services.handle_accounts import AccountHandlers
from gigmarket.services.handle_admin import AdminHandlers
from gigmarket.services.handle_disputes import DisputeHandlers
from gigmarket.services.handle_gigs import GigHandlers
from gigmarket.services.handle_messages import MessageHandlers
from gigmarket.services.handle_orders import OrderHandlers

logger = logging.getLogger(__name__)


class Marketplace:
    """Facade over all marketplace operations."""

    def __init__(
        self, store: RecordStore, sessions: SessionRegistry,
        verifier: CredentialVerifier,
    ):
        self.store = store
        self.sessions = sessions
        self.accounts = AccountHandlers(store, sessions, verifier)
        self.gigs = GigHandlers(store)
        self.orders = OrderHandlers(store)
        self.messages = MessageHandlers(store)
        self.disputes = DisputeHandlers(store)
        self.admin = AdminHandlers(store, sessions)

    def bootstrap(self, settings: Settings) -> None:
        self.store.load()
        self.accounts.provision_admin(
            settings.admin_username, settings.admin_email, settings.admin_password,
        )

    def shutdown(self) -> None:
        self.store.flush_all()
        logger.info("Record store flushed on shutdown")
