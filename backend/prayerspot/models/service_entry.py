"""
PrayerSpot Backend — ServiceEntry SQLAlchemy Model
====================================================

What:  ORM model for the `services` collection (one row per mosque/location).
Why:   Maps directory entries to the store for type-safe queries.
Who:   Used by DirectoryService for inserts and lookups, and by Alembic.

Table Design:
    - name / pincode / address: required plain strings
    - pincode is the exact-match lookup key; it is NOT unique (several
      mosques share a postal code)
    - gmap_link: optional map URL
    - prayer_timings: the schema-flexible part of the document, stored as
      JSON (JSONB on PostgreSQL). NULL when the entry carries no schedule.
    - created_at: UTC, set on insert

Records are inserted once and never updated or deleted through the API.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import JSON, DateTime, Integer, String, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from prayerspot.database import Base


class ServiceEntry(Base):
    """A prayer-service location listed in the directory."""

    __tablename__ = "services"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    pincode: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        comment="Postal code used as an exact-match lookup key (not unique)",
    )

    address: Mapped[str] = mapped_column(String(1024), nullable=False)

    gmap_link: Mapped[Optional[str]] = mapped_column(String(2048), nullable=True)

    # Same column type on every backend, JSONB where PostgreSQL is available
    prayer_timings: Mapped[Optional[Dict[str, Any]]] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=True,
        comment="Prayer schedule document: six azan/iqamah slots plus optional extras",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<ServiceEntry(id={self.id}, name='{self.name}', pincode='{self.pincode}')>"
