"""Record Codec Helpers — shared conversions between entities and JSON records.

Invariants:
    - Timestamps are timezone-aware UTC; serialized as ISO-8601 strings
    - load_ts also reads epoch milliseconds (numbers), the format older data files use
    - None round-trips as JSON null (completedAt, resolvedAt, resolution)

Design Decisions:
    - Plain dataclasses + explicit to_record/from_record over an ORM: the store is
      flat JSON files, one array per collection
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def dump_ts(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def load_ts(value: str | int | float | None) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value / 1000, timezone.utc)
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
