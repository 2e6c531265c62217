from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional


def format_iso_date(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None


def parse_iso_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    return date.fromisoformat(value)


def format_iso_time(value: Optional[time]) -> Optional[str]:
    return value.isoformat(timespec="seconds") if value is not None else None


def parse_iso_time(value: Optional[str]) -> Optional[time]:
    if not value:
        return None
    return time.fromisoformat(value)


def format_iso_datetime(value: datetime) -> str:
    return value.isoformat(sep=" ", timespec="seconds")


def parse_iso_datetime(value: datetime | str) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))
