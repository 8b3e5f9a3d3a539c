"""
Small helpers shared by models, services and routes.

- utcnow / as_utc: timezone-aware timestamps. SQLite hands back naive values,
  so anything read from the database is normalised with as_utc before it is
  compared with "now".
- normalize_email: the single place emails are trimmed and lower-cased.
"""
from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


# Largest value an Integer column holds on PostgreSQL
MAX_INT_COLUMN = 2**31 - 1
