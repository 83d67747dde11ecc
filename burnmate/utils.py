# burnmate/utils.py
from datetime import datetime, timezone
from typing import Any, Optional


def parse_iso_datetime(value: Any) -> datetime:
    """
    Parse an ISO-8601 string ("2025-01-31", "2025-01-31T10:00:00",
    "2025-01-31T10:00:00.000Z", ...) into a naive datetime.

    Aware values are converted to UTC before the tzinfo is dropped.
    Raises ValueError for anything else.
    """
    if isinstance(value, datetime):
        dt = value
    else:
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"invalid datetime: {value!r}")
        raw = value.strip()
        if raw.endswith("Z") or raw.endswith("z"):
            raw = raw[:-1] + "+00:00"
        dt = datetime.fromisoformat(raw)

    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def parse_optional_datetime(value: Any) -> Optional[datetime]:
    if value in (None, ""):
        return None
    return parse_iso_datetime(value)


def to_number(value: Any) -> float:
    # bool is an int subclass, reject it explicitly
    if value is None or isinstance(value, bool):
        raise ValueError(f"not a number: {value!r}")
    return float(value)


def to_optional_int(value: Any) -> Optional[int]:
    if value in (None, ""):
        return None
    if isinstance(value, bool):
        raise ValueError(f"not an integer: {value!r}")
    return int(value)


def to_utc_iso(value: Optional[datetime]) -> Optional[str]:
    """Stored datetimes are naive UTC; emit them with an explicit offset."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()
