"""Record Store — flat JSON collections with serialized, all-or-nothing transactions.

Invariants:
    - One JSON array file per collection: users.json, gigs.json, orders.json, disputes.json
    - Missing or unreadable files load as empty collections (logged, never raised);
      an unreadable file is copied to <name>.json.bak before anything overwrites it
    - Records that fail to parse are kept verbatim and written back on every flush
    - Every mutation runs inside transaction(): one process-wide RLock, a snapshot taken
      on entry, changed collections flushed on exit, snapshot restored on any exception
    - Files are replaced atomically (temp file + os.replace); a failed flush raises StorageError
    - Ids are decimal strings from per-collection counters; never reused within a data dir

Design Decisions:
    - Global store mutex over per-collection locks: operations like delete-user touch
      three collections and must not interleave (ADR: single-writer discipline)
    - Dirty detection by comparing against the snapshot: callers cannot forget to flush
    - deepcopy snapshot: collections are small flat files, not a database
"""

import copy
import json
import logging
import os
import shutil
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from gigmarket.core.domain_types import (
    Collection, DisputeId, GigId, OrderId, UserId,
)
from gigmarket.core.errors import ErrorContext, StorageError
from gigmarket.models import Dispute, Gig, Order, User

logger = logging.getLogger(__name__)

_ENTITY_TYPES = {
    Collection.USERS: User,
    Collection.GIGS: Gig,
    Collection.ORDERS: Order,
    Collection.DISPUTES: Dispute,
}


class RecordStore:
    """In-memory collections backed by JSON files in data_dir."""

    def __init__(self, data_dir: str | Path):
        self.data_dir = Path(data_dir)
        self._lock = threading.RLock()
        self.users: dict[UserId, User] = {}
        self.gigs: dict[GigId, Gig] = {}
        self.orders: dict[OrderId, Order] = {}
        self.disputes: dict[DisputeId, Dispute] = {}
        self._counters: dict[Collection, int] = {c: 0 for c in Collection}
        self._unparsed: dict[Collection, list] = {c: [] for c in Collection}

    # ─── Loading ─────────────────────────────────────────────────

    def load(self) -> None:
        """Read every collection from disk, replacing in-memory state."""
        with self._lock:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            for collection in Collection:
                records, unparsed = self._read(collection)
                self._set(collection, records)
                self._unparsed[collection] = unparsed
            self._seed_counters()
            logger.info(
                f"Record store loaded from {self.data_dir}: "
                f"{len(self.users)} users, {len(self.gigs)} gigs, "
                f"{len(self.orders)} orders, {len(self.disputes)} disputes",
            )

    def _read(self, collection: Collection) -> tuple[dict, list]:
        path = self._path(collection)
        if not path.exists():
            return {}, []
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(
                f"Could not read {path.name}, starting empty: {e}",
                extra={"collection": collection.value},
            )
            self._back_up(path)
            return {}, []
        if not isinstance(raw, list):
            logger.warning(
                f"{path.name} is not a JSON array, starting empty",
                extra={"collection": collection.value},
            )
            self._back_up(path)
            return {}, []

        entity_type = _ENTITY_TYPES[collection]
        records, unparsed = {}, []
        for item in raw:
            try:
                entity = entity_type.from_record(item)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(
                    f"Keeping unparsed record in {path.name} as-is: {e}",
                    extra={"collection": collection.value},
                )
                unparsed.append(item)
                continue
            records[entity.id] = entity
        return records, unparsed

    def _back_up(self, path: Path) -> None:
        backup = path.with_name(f"{path.name}.bak")
        try:
            shutil.copyfile(path, backup)
        except OSError as e:
            logger.error(
                f"Could not back up unreadable {path.name}: {e}",
                extra={"collection": path.stem},
            )
            return
        logger.warning(
            f"Unreadable {path.name} copied to {backup.name}",
            extra={"collection": path.stem},
        )

    def _seed_counters(self) -> None:
        # Orphaned disputes still reference deleted orders/users; keep those ids retired
        referenced = {
            Collection.USERS: list(self.users) + [d.initiator_id for d in self.disputes.values()],
            Collection.GIGS: list(self.gigs) + [o.gig_id for o in self.orders.values()],
            Collection.ORDERS: list(self.orders) + [d.order_id for d in self.disputes.values()],
            Collection.DISPUTES: list(self.disputes),
        }
        for collection, raw in self._unparsed.items():
            referenced[collection] += [
                item["id"] for item in raw if isinstance(item, dict) and "id" in item
            ]
        for collection, ids in referenced.items():
            numeric = [int(i) for i in ids if str(i).isdigit()]
            self._counters[collection] = max(numeric, default=0)

    # ─── Access ──────────────────────────────────────────────────

    def next_id(self, collection: Collection) -> str:
        """Allocate the next id. Call inside a transaction (rolled back with it)."""
        with self._lock:
            self._counters[collection] += 1
            return str(self._counters[collection])

    @contextmanager
    def read(self) -> Iterator["RecordStore"]:
        """Consistent view for readers; excludes concurrent writers."""
        with self._lock:
            yield self

    @contextmanager
    def transaction(self) -> Iterator["RecordStore"]:
        """Serialized read-modify-write. Commits to disk on success, restores on failure."""
        with self._lock:
            snapshot = self._snapshot()
            try:
                yield self
                self._flush_changed(snapshot)
            except BaseException:
                self._restore(snapshot)
                raise

    def flush_all(self) -> None:
        """Write every collection (graceful shutdown)."""
        with self._lock:
            for collection in Collection:
                self._write(collection)

    # ─── Internals ───────────────────────────────────────────────

    def _path(self, collection: Collection) -> Path:
        return self.data_dir / f"{collection.value}.json"

    def _get(self, collection: Collection) -> dict:
        return getattr(self, collection.value)

    def _set(self, collection: Collection, records: dict) -> None:
        setattr(self, collection.value, records)

    def _snapshot(self) -> dict:
        return {
            "collections": {c: copy.deepcopy(self._get(c)) for c in Collection},
            "counters": dict(self._counters),
        }

    def _restore(self, snapshot: dict) -> None:
        for collection, records in snapshot["collections"].items():
            self._set(collection, records)
        self._counters = snapshot["counters"]

    def _flush_changed(self, snapshot: dict) -> None:
        before = snapshot["collections"]
        changed = [c for c in Collection if self._get(c) != before[c]]
        written: list[Collection] = []
        try:
            for collection in changed:
                self._write(collection)
                written.append(collection)
        except StorageError:
            self._rewrite_previous(written, before)
            raise

    def _rewrite_previous(self, written: list[Collection], before: dict) -> None:
        """Put already-flushed files back to their pre-transaction content."""
        for collection in written:
            try:
                self._write_records(collection, before[collection])
            except StorageError:
                logger.error(
                    f"Could not restore {collection.value}.json after failed commit",
                    extra={"collection": collection.value},
                )

    def _write(self, collection: Collection) -> None:
        self._write_records(collection, self._get(collection))

    def _write_records(self, collection: Collection, records: dict) -> None:
        payload = [entity.to_record() for entity in records.values()]
        payload += self._unparsed[collection]
        path = self._path(collection)
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.data_dir, prefix=f".{collection.value}.", suffix=".tmp",
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(payload, fh, indent=2, ensure_ascii=False)
                os.replace(tmp_name, path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            logger.error(
                f"Failed to write {path.name}: {e}",
                extra={"collection": collection.value},
            )
            raise StorageError(
                collection.value,
                ErrorContext(debug_info={"path": str(path), "reason": str(e)}),
            )
