"""Module: found_report."""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from petconnect.db.base import Base, utcnow


# Append-only record left by a finder on a pet's public profile page.
class FoundReport(Base):
    __tablename__ = "found_reports"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    pet_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("pets.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    finder_name: Mapped[str] = mapped_column(String, nullable=False)
    finder_phone: Mapped[str] = mapped_column(String, nullable=False)
    finder_email: Mapped[str] = mapped_column(String, nullable=True)
    location_found: Mapped[str] = mapped_column(String, nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
