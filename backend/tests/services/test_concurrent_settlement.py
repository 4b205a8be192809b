"""Concurrent mutations — the store lock serializes writers across threads.

Tests cover:
    - many threads completing one order: exactly one credit, the rest conflict
    - concurrent placements get distinct ids and all persist
"""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from gigmarket.core.domain_types import OrderStatus, Role
from gigmarket.core.errors import StateConflictError
from gigmarket.core.session_registry import SessionRegistry
from gigmarket.infrastructure.credentials import PlaintextCredentialVerifier
from gigmarket.infrastructure.record_store import RecordStore
from gigmarket.services.marketplace import Marketplace
from tests.factories import escrow_consistent

WORKERS = 8


@pytest.fixture
def marketplace(tmp_path) -> Marketplace:
    store = RecordStore(tmp_path)
    store.load()
    return Marketplace(store, SessionRegistry(), PlaintextCredentialVerifier())


@pytest.fixture
def listing(marketplace):
    seller = marketplace.accounts.register("sam", "sam@example.com", "pw", Role.SELLER)
    buyer = marketplace.accounts.register("bea", "bea@example.com", "pw", Role.BUYER)
    gig = marketplace.gigs.create_gig(seller, "Logo", "Vector logo", 50.0)
    return seller, buyer, gig


def _run_together(fn, count: int) -> list:
    """Start count calls behind a barrier; return each result or raised exception."""
    barrier = threading.Barrier(count)

    def call():
        barrier.wait()
        try:
            return fn()
        except Exception as e:  # collected for assertions
            return e

    with ThreadPoolExecutor(max_workers=count) as pool:
        futures = [pool.submit(call) for _ in range(count)]
        return [f.result() for f in futures]


def test_parallel_completion_credits_once(marketplace, listing):
    seller, buyer, gig = listing
    order = marketplace.orders.place(buyer, gig.id)

    results = _run_together(lambda: marketplace.orders.complete(buyer, order.id), WORKERS)

    conflicts = [r for r in results if isinstance(r, StateConflictError)]
    completed = [r for r in results if not isinstance(r, Exception)]
    assert len(completed) == 1
    assert len(conflicts) == WORKERS - 1

    stored = marketplace.store.orders[order.id]
    assert stored.status == OrderStatus.COMPLETED
    assert stored.escrow == 0
    assert escrow_consistent(stored)
    assert marketplace.accounts.find_user(seller.id).wallet == 50.0


def test_parallel_placements_get_distinct_ids(marketplace, listing, tmp_path):
    _, buyer, gig = listing

    results = _run_together(lambda: marketplace.orders.place(buyer, gig.id), WORKERS)

    assert not [r for r in results if isinstance(r, Exception)]
    assert len({o.id for o in results}) == WORKERS

    reloaded = RecordStore(tmp_path)
    reloaded.load()
    assert sorted(reloaded.orders, key=int) == sorted((o.id for o in results), key=int)
