"""
PrayerSpot Backend — Account Service
======================================

What:  Registration and login over the `users` collection.
Who:   Called by the routes in prayerspot.routes.accounts.

Credential handling:
    Passwords are hashed with PBKDF2 (prayerspot.security) before storage
    and verified in constant time. Hashing runs in the thread pool so the
    event loop keeps serving other requests.

Lookup handling:
    The login lookup returns zero or one account. The "no account" branch
    is taken explicitly and answered with the same 401 as a bad password.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from prayerspot.exceptions import AuthenticationError, ConflictError, DatabaseError
from prayerspot.models.user_account import UserAccount
from prayerspot.schemas.account import (
    LoggedInUser,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
)
from prayerspot.schemas.common import MessageResponse
from prayerspot.security import hash_password, verify_password
from prayerspot.validation import require_fields

logger = logging.getLogger(__name__)

NAME_TAKEN_MESSAGE = "Failed to add user: Username already exists."


class AccountService:
    """Stateless business logic for user accounts."""

    async def register(self, db: AsyncSession, payload: RegisterRequest) -> MessageResponse:
        """
        Create a new account.

        Raises:
            ValidationError: a required field is missing (→ 400)
            ConflictError: the name is already taken (→ 409)
            DatabaseError: store failure (→ 500)
        """
        require_fields(
            {
                "name": payload.name,
                "mobileNumber": payload.mobile_number,
                "email": payload.email,
                "password": payload.password,
            }
        )
        name = payload.name.strip()

        if await self._find_by_name(db, name) is not None:
            logger.info("Registration rejected: name %r already taken", name)
            raise ConflictError(message=NAME_TAKEN_MESSAGE, context={"name": name})

        password_hash = await run_in_threadpool(hash_password, payload.password)
        account = UserAccount(
            name=name,
            mobile_number=payload.mobile_number.strip(),
            email=payload.email.strip(),
            password_hash=password_hash,
        )

        try:
            db.add(account)
            await db.flush()
        except IntegrityError:
            # Lost a race with a concurrent registration of the same name
            await db.rollback()
            logger.info("Registration rejected at insert: name %r already taken", name)
            raise ConflictError(message=NAME_TAKEN_MESSAGE, context={"name": name})
        except Exception as e:
            logger.error("Database error registering %r: %s", name, str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to add user: An unexpected error occurred.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Account %s registered", account.id)
        return MessageResponse(message="User added successfully.")

    async def login(self, db: AsyncSession, payload: LoginRequest) -> LoginResponse:
        """
        Verify an email/password pair.

        No session or token is issued; success only confirms the pair.

        Raises:
            ValidationError: email or password missing (→ 400)
            AuthenticationError: unknown email or wrong password (→ 401)
            DatabaseError: store failure (→ 500)
        """
        require_fields(
            {"email": payload.email, "password": payload.password},
            message="Email and password are required.",
        )
        email = payload.email.strip()

        account = await self._find_by_email(db, email)
        if account is None:
            logger.info("Login failed: no account for the given email")
            raise AuthenticationError()

        if not await run_in_threadpool(verify_password, payload.password, account.password_hash):
            logger.info("Login failed: password mismatch for account %s", account.id)
            raise AuthenticationError()

        logger.info("Login succeeded for account %s", account.id)
        return LoginResponse(user=LoggedInUser(email=email))

    async def _find_by_name(self, db: AsyncSession, name: str) -> Optional[UserAccount]:
        try:
            result = await db.execute(
                select(UserAccount).where(UserAccount.name == name).limit(1)
            )
            return result.scalars().first()
        except Exception as e:
            logger.error("Database error looking up account name: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to add user: An unexpected error occurred.",
                context={"error_type": type(e).__name__},
            )

    async def _find_by_email(self, db: AsyncSession, email: str) -> Optional[UserAccount]:
        """First account registered with this email, or None. Emails are not unique."""
        try:
            result = await db.execute(
                select(UserAccount)
                .where(UserAccount.email == email)
                .order_by(UserAccount.id)
                .limit(1)
            )
            return result.scalars().first()
        except Exception as e:
            logger.error("Database error looking up account email: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Error processing request.",
                context={"error_type": type(e).__name__},
            )


account_service = AccountService()
