"""Gig Handlers — public catalogue plus seller-owned creation and deletion.

Invariants:
    - Only sellers create gigs; seller_id is the creator and never changes
    - Deletion by the owning seller or admin (ownership bypass); others get Forbidden
    - Catalogue reads are public and return detached copies
"""

import logging

from gigmarket.core.authorization import Operation, authorize
from gigmarket.core.domain_types import Collection, DEFAULT_GIG_CATEGORY, GigId
from gigmarket.infrastructure.record_store import RecordStore
from gigmarket.models.base import utc_now
from gigmarket.models.gig import Gig
from gigmarket.models.user import User
from gigmarket.services.lookup_helpers import detached, get_or_404, live_actor

logger = logging.getLogger(__name__)


class GigHandlers:
    """Gig catalogue operations."""

    def __init__(self, store: RecordStore):
        self.store = store

    def list_gigs(self) -> list[Gig]:
        with self.store.read() as store:
            return detached(list(store.gigs.values()))

    def get_gig(self, gig_id: str) -> Gig:
        with self.store.read() as store:
            return detached(get_or_404(store.gigs, gig_id, "Gig"))

    def create_gig(
        self, actor: User, title: str, description: str, price: float,
        category: str | None = None,
    ) -> Gig:
        with self.store.transaction() as store:
            seller = live_actor(store, actor)
            authorize(seller, Operation.CREATE_GIG)
            gig = Gig(
                id=GigId(store.next_id(Collection.GIGS)),
                seller_id=seller.id,
                title=title,
                description=description,
                price=float(price),
                category=(category or "").strip() or DEFAULT_GIG_CATEGORY,
                created_at=utc_now(),
            )
            store.gigs[gig.id] = gig
        logger.info(
            f"Gig created at price {gig.price}",
            extra={"user_id": gig.seller_id, "gig_id": gig.id},
        )
        return detached(gig)

    def delete_own_gig(self, actor: User, gig_id: str) -> Gig:
        """Owner (or admin) removes a gig. Existing orders keep their copied terms."""
        with self.store.transaction() as store:
            user = live_actor(store, actor)
            gig = get_or_404(store.gigs, gig_id, "Gig")
            authorize(user, Operation.DELETE_GIG, owners=(gig.seller_id,))
            del store.gigs[gig.id]
        logger.info("Gig deleted", extra={"user_id": user.id, "gig_id": gig.id})
        return detached(gig)
