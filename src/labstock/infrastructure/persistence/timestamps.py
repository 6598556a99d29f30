"""ISO-8601 helpers shared by the JSON repositories."""

from __future__ import annotations

from datetime import datetime, timezone


def to_iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def from_iso(raw: str | None) -> datetime | None:
    if not raw:
        return None
    # Older records were written with a trailing "Z".
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    parsed = datetime.fromisoformat(raw)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
