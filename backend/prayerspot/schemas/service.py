"""
PrayerSpot Backend — Service Directory Schemas
===============================================

What:  Request and response contracts for the service directory endpoints.
Who:   /api/servicedetails, /api/addservice, /api/getservice.

PrayerSchedule shape:
    Six core slots (fajar, zuhar, asar, magrib, isha, jumuah), each
    {azan, iqamah}, plus five optional single strings
    (ishraq, taraveeh, sahar, ifthar, eid).
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import ConfigDict, Field

from prayerspot.schemas.common import CamelModel

CORE_PRAYERS = ("fajar", "zuhar", "asar", "magrib", "isha", "jumuah")
EXTRA_TIMINGS = ("ishraq", "taraveeh", "sahar", "ifthar", "eid")


class PrayerSlot(CamelModel):
    azan: str
    iqamah: str


class PrayerSchedule(CamelModel):
    """A validated prayer schedule as stored on a ServiceEntry."""

    fajar: PrayerSlot
    zuhar: PrayerSlot
    asar: PrayerSlot
    magrib: PrayerSlot
    isha: PrayerSlot
    jumuah: PrayerSlot
    ishraq: Optional[str] = None
    taraveeh: Optional[str] = None
    sahar: Optional[str] = None
    ifthar: Optional[str] = None
    eid: Optional[str] = None


class ServiceCreateRequest(CamelModel):
    """
    Body of POST /api/addservice.

    prayer_timings stays a raw mapping here; `validate_prayer_timings` checks
    it slot by slot so the error can name the incomplete prayer.
    """
    name: Optional[str] = None
    address: Optional[str] = None
    pincode: Optional[str] = None
    gmap_link: Optional[str] = None
    prayer_timings: Optional[Dict[str, Any]] = None


class PincodeLookupRequest(CamelModel):
    """Body of POST /api/getservice."""
    pincode: Optional[str] = None


class ServiceResponse(CamelModel):
    """A stored ServiceEntry as returned to clients."""

    id: int
    name: str
    pincode: str
    address: str
    gmap_link: Optional[str] = None
    prayer_timings: Optional[Dict[str, Any]] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ServiceCreatedResponse(CamelModel):
    message: str = Field(default="Service added successfully.")
    service: ServiceResponse


class PincodeLookupResponse(CamelModel):
    filtered_services: List[ServiceResponse] = Field(
        description="Every entry whose pincode matches exactly (possibly empty)"
    )
