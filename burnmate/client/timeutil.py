"""
Client-side timestamps are always aware and in local time.

Naive values created on this machine are read as local wall-clock time;
naive values coming from the API are UTC (the server stores UTC).
"""
from datetime import date, datetime, timezone
from typing import Any, Optional

from ..utils import parse_iso_datetime


def local_time(when: datetime) -> datetime:
    return when.astimezone()


def now_local() -> datetime:
    return datetime.now().astimezone()


def calendar_day(when: datetime) -> date:
    return local_time(when).date()


def parse_server_timestamp(value: Any) -> Optional[datetime]:
    if value in (None, ""):
        return None
    # parse_iso_datetime yields naive UTC
    return parse_iso_datetime(value).replace(tzinfo=timezone.utc).astimezone()
