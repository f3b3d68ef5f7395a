"""
PrayerSpot Backend — Service Directory Route Handlers
=======================================================

What:  HTTP surface of the prayer-service directory.
How:   Each handler parses the JSON body, delegates to DirectoryService and
       returns the response model (camelCase on the wire).
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from prayerspot.database import get_db_session
from prayerspot.schemas.common import ErrorResponse
from prayerspot.schemas.service import (
    PincodeLookupRequest,
    PincodeLookupResponse,
    ServiceCreateRequest,
    ServiceCreatedResponse,
    ServiceResponse,
)
from prayerspot.services.directory_service import directory_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Services"])


@router.get(
    "/servicedetails",
    response_model=List[ServiceResponse],
    responses={500: {"description": "Store error", "model": ErrorResponse}},
    summary="List every prayer-service entry",
)
async def list_services(
    db: AsyncSession = Depends(get_db_session),
) -> List[ServiceResponse]:
    return await directory_service.list_services(db)


@router.post(
    "/addservice",
    status_code=201,
    response_model=ServiceCreatedResponse,
    responses={
        400: {"description": "Missing field or incomplete prayer schedule", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Add a prayer-service entry",
    description=(
        "Creates an entry from name, address, pincode and gmapLink. An optional "
        "prayerTimings object must carry azan and iqamah for fajar, zuhar, asar, "
        "magrib, isha and jumuah."
    ),
)
async def add_service(
    payload: ServiceCreateRequest,
    db: AsyncSession = Depends(get_db_session),
) -> ServiceCreatedResponse:
    return await directory_service.add_service(db, payload)


@router.post(
    "/getservice",
    response_model=PincodeLookupResponse,
    responses={
        400: {"description": "Pincode missing", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Find entries by exact pincode",
)
async def get_service_by_pincode(
    payload: PincodeLookupRequest,
    db: AsyncSession = Depends(get_db_session),
) -> PincodeLookupResponse:
    """An unknown pincode returns 200 with an empty list."""
    services = await directory_service.find_by_pincode(db, payload)
    return PincodeLookupResponse(filtered_services=services)
