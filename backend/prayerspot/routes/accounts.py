"""
PrayerSpot Backend — Account Route Handlers
=============================================

What:  Registration and login endpoints.

Request bodies are never logged: they carry passwords.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from prayerspot.database import get_db_session
from prayerspot.schemas.account import LoginRequest, LoginResponse, RegisterRequest
from prayerspot.schemas.common import ErrorResponse, MessageResponse
from prayerspot.services.account_service import account_service

router = APIRouter(prefix="/api", tags=["Accounts"])


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"description": "Email or password missing", "model": ErrorResponse},
        401: {"description": "Unknown email or wrong password", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Verify an email/password pair",
)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
) -> LoginResponse:
    return await account_service.login(db, payload)


@router.post(
    "/register",
    status_code=201,
    response_model=MessageResponse,
    responses={
        400: {"description": "Required field missing", "model": ErrorResponse},
        409: {"description": "Name already taken", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Register a user account",
)
async def register(
    payload: RegisterRequest,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await account_service.register(db, payload)
