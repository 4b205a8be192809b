"""Admin Handlers — moderation listings, deletions and dispute resolution.

Invariants:
    - Every method authorizes admin_only before reading or mutating
    - delete_user cascades to the user's gigs and orders and revokes their tokens
    - resolve_dispute settles the order in the same transaction that closes the dispute;
      a dispute whose order is gone cannot be resolved (NotFound) and stays OPEN
"""

import logging

from gigmarket.core.authorization import Operation, authorize
from gigmarket.core.dispute_resolution import check_resolvable, resolve_dispute
from gigmarket.core.domain_types import Collection
from gigmarket.core.errors import ErrorContext, ResourceNotFoundError
from gigmarket.core.moderation import cascade_user_removal, check_user_deletable
from gigmarket.core.session_registry import SessionRegistry
from gigmarket.infrastructure.record_store import RecordStore
from gigmarket.models.base import utc_now
from gigmarket.models.dispute import Dispute
from gigmarket.models.gig import Gig
from gigmarket.models.user import User
from gigmarket.services.lookup_helpers import detached, get_or_404, live_actor

logger = logging.getLogger(__name__)


class AdminHandlers:
    """Admin moderation surface."""

    def __init__(self, store: RecordStore, sessions: SessionRegistry):
        self.store = store
        self.sessions = sessions

    def list_collection(self, actor: User, collection: Collection) -> list:
        with self.store.read() as store:
            authorize(live_actor(store, actor), Operation.ADMIN_LIST)
            records = {
                Collection.USERS: store.users,
                Collection.GIGS: store.gigs,
                Collection.ORDERS: store.orders,
                Collection.DISPUTES: store.disputes,
            }[collection]
            return detached(list(records.values()))

    def delete_gig(self, actor: User, gig_id: str) -> Gig:
        with self.store.transaction() as store:
            admin = live_actor(store, actor)
            authorize(admin, Operation.ADMIN_DELETE_GIG)
            gig = get_or_404(store.gigs, gig_id, "Gig")
            del store.gigs[gig.id]
        logger.info("Gig removed by admin", extra={"user_id": admin.id, "gig_id": gig.id})
        return detached(gig)

    def delete_user(self, actor: User, user_id: str) -> User:
        with self.store.transaction() as store:
            admin = live_actor(store, actor)
            authorize(admin, Operation.ADMIN_DELETE_USER)
            target = get_or_404(store.users, user_id, "User")
            check_user_deletable(target)
            gig_ids, order_ids = cascade_user_removal(target, store.gigs, store.orders)
            del store.users[target.id]
        revoked = self.sessions.revoke_user(target.id)
        logger.info(
            f"User deleted with {len(gig_ids)} gigs, {len(order_ids)} orders, "
            f"{revoked} sessions",
            extra={"user_id": target.id},
        )
        return detached(target)

    def resolve_dispute(
        self, actor: User, dispute_id: str, resolution: str,
        release_to_seller: bool,
    ) -> Dispute:
        with self.store.transaction() as store:
            admin = live_actor(store, actor)
            authorize(admin, Operation.ADMIN_RESOLVE_DISPUTE)
            dispute = get_or_404(store.disputes, dispute_id, "Dispute")
            check_resolvable(dispute)
            order = store.orders.get(dispute.order_id)
            if order is None:
                raise ResourceNotFoundError(
                    "Order", dispute.order_id, ErrorContext(dispute_id=dispute.id),
                )
            seller = store.users.get(order.seller_id)
            credited = resolve_dispute(
                dispute, order, seller, resolution, release_to_seller, utc_now(),
            )
        logger.info(
            f"Dispute resolved ({'released' if release_to_seller else 'refunded'}), "
            f"credited {credited}",
            extra={
                "user_id": admin.id, "dispute_id": dispute.id,
                "order_id": order.id, "amount": credited,
            },
        )
        return detached(dispute)
