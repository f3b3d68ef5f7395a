"""
PrayerSpot Backend — ORM Models
================================

Importing this package registers every table on `Base.metadata`
(used by `Database.create_all()` and Alembic).
"""

from prayerspot.models.service_entry import ServiceEntry
from prayerspot.models.user_account import UserAccount

__all__ = ["ServiceEntry", "UserAccount"]
