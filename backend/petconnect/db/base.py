"""Module: base."""

from datetime import UTC, datetime

from sqlalchemy.orm import DeclarativeBase


# Declarative base for profiles, pets and found_reports.
class Base(DeclarativeBase):
    pass


# Timestamps are stored as naive UTC.
def utcnow() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)
