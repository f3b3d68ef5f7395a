"""
PrayerSpot Backend — UserAccount SQLAlchemy Model
===================================================

What:  ORM model for the `users` collection.
Who:   Used by AccountService for registration and login.

Table Design:
    - name: unique across all accounts. The unique constraint (not the
      service-level existence check) is what guarantees uniqueness when two
      registrations race.
    - email: required but deliberately NOT unique
    - password_hash: "pbkdf2_sha256$<iterations>$<salt hex>$<digest hex>";
      the raw password is never stored
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column

from prayerspot.database import Base


class UserAccount(Base):
    """A registered user of the directory."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    mobile_number: Mapped[str] = mapped_column(String(32), nullable=False)

    email: Mapped[str] = mapped_column(String(320), nullable=False)

    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        UniqueConstraint("name", name="uq_users_name"),
    )

    def __repr__(self) -> str:
        # No credentials in debug output
        return f"<UserAccount(id={self.id}, name='{self.name}')>"
