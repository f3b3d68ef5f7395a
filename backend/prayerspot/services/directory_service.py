"""
PrayerSpot Backend — Directory Service
========================================

What:  Create/read operations over the `services` collection.
Who:   Called by the routes in prayerspot.routes.services.

Operations:
    list_services()      → every entry, in insertion order
    add_service()        → validate, insert, echo the stored entry
    find_by_pincode()    → exact-match filter, zero or more entries

Error Handling Strategy:
    ValidationError is raised before the store is touched. Any store failure
    is logged with its driver detail and re-raised as a generic DatabaseError.
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from prayerspot.exceptions import DatabaseError
from prayerspot.models.service_entry import ServiceEntry
from prayerspot.schemas.service import (
    PincodeLookupRequest,
    ServiceCreateRequest,
    ServiceCreatedResponse,
    ServiceResponse,
)
from prayerspot.validation import require_fields, validate_prayer_timings

logger = logging.getLogger(__name__)


class DirectoryService:
    """Stateless business logic for prayer-service entries."""

    async def list_services(self, db: AsyncSession) -> List[ServiceResponse]:
        """Return every entry, unfiltered and unpaginated."""
        try:
            result = await db.execute(select(ServiceEntry).order_by(ServiceEntry.id))
            entries = list(result.scalars().all())
        except Exception as e:
            logger.error("Database error listing services: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Error fetching services.",
                context={"error_type": type(e).__name__},
            )

        return [ServiceResponse.model_validate(entry) for entry in entries]

    async def add_service(
        self,
        db: AsyncSession,
        payload: ServiceCreateRequest,
    ) -> ServiceCreatedResponse:
        """
        Validate and insert a new entry.

        Validation order:
            1. name, address, pincode, gmapLink must all be present
            2. prayerTimings, when given, must carry azan and iqamah for each
               of the six core prayers

        Raises:
            ValidationError: missing field or incomplete schedule (→ 400)
            DatabaseError: insert failed (→ 500)
        """
        require_fields(
            {
                "name": payload.name,
                "address": payload.address,
                "pincode": payload.pincode,
                "gmapLink": payload.gmap_link,
            },
            message="All fields are required.",
        )

        prayer_timings = None
        if payload.prayer_timings is not None:
            prayer_timings = validate_prayer_timings(payload.prayer_timings)

        entry = ServiceEntry(
            name=payload.name.strip(),
            pincode=payload.pincode.strip(),
            address=payload.address.strip(),
            gmap_link=payload.gmap_link.strip(),
            prayer_timings=prayer_timings,
        )

        try:
            db.add(entry)
            # Flush assigns id and created_at; the commit happens in get_db_session
            await db.flush()
        except Exception as e:
            logger.error("Database error adding service: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to add service.",
                context={"error_type": type(e).__name__},
            )

        logger.info(
            "Service %s added (pincode=%s, schedule=%s)",
            entry.id,
            entry.pincode,
            "yes" if prayer_timings else "no",
        )
        return ServiceCreatedResponse(service=ServiceResponse.model_validate(entry))

    async def find_by_pincode(
        self,
        db: AsyncSession,
        payload: PincodeLookupRequest,
    ) -> List[ServiceResponse]:
        """
        Return every entry whose pincode equals the given one exactly.

        An unknown pincode is not an error: the result is simply empty.
        """
        require_fields({"pincode": payload.pincode}, message="Pincode field is required.")
        pincode = payload.pincode.strip()

        try:
            result = await db.execute(
                select(ServiceEntry)
                .where(ServiceEntry.pincode == pincode)
                .order_by(ServiceEntry.id)
            )
            entries = list(result.scalars().all())
        except Exception as e:
            logger.error("Database error looking up pincode %s: %s", pincode, str(e), exc_info=True)
            raise DatabaseError(
                message="Error processing request.",
                context={"pincode": pincode, "error_type": type(e).__name__},
            )

        logger.debug("Pincode %s matched %d services", pincode, len(entries))
        return [ServiceResponse.model_validate(entry) for entry in entries]


directory_service = DirectoryService()
