"""
PrayerSpot Backend — Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the error scenarios of the API.
Why:   Services raise domain errors; global handlers registered in main.py
       turn them into JSON responses with the right HTTP status code.
How:   Each exception carries a client-safe message and an optional context
       dict. The context is logged server-side and never returned for 5xx.

Exception Hierarchy:
    PrayerSpotError (base)
    ├── ValidationError        → 400 Bad Request (missing/malformed input)
    ├── AuthenticationError    → 401 Unauthorized (unknown email or bad password)
    ├── ConflictError          → 409 Conflict (account name already taken)
    └── DatabaseError          → 500 Internal Server Error (store failure)
"""

from typing import Any, Dict, List, Optional


class PrayerSpotError(Exception):
    """
    Base exception for all PrayerSpot application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PrayerSpotError):
    """
    Raised when client input fails validation.

    When:    Missing required field, incomplete prayer schedule, malformed body.
    HTTP:    400 Bad Request

    No store access happens once this is raised.

    Example response:
        {
            "error": "validation_error",
            "message": "Missing prayer timing data for asar.",
            "details": {"field": "prayerTimings.asar"}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        missing: Optional[List[str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        if missing:
            ctx["missing"] = list(missing)
        super().__init__(message=message, context=ctx)
        self.field = field
        self.missing = list(missing or [])


class AuthenticationError(PrayerSpotError):
    """
    Raised when a login attempt cannot be verified.

    HTTP:    401 Unauthorized

    The message is identical for "no such email" and "wrong password" so the
    response does not reveal which accounts exist.
    """

    def __init__(
        self,
        message: str = "Invalid email or password.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ConflictError(PrayerSpotError):
    """
    Raised when a write would violate a uniqueness rule.

    When:    Registering an account whose name is already taken.
    HTTP:    409 Conflict
    """

    def __init__(
        self,
        message: str = "The resource already exists.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(PrayerSpotError):
    """
    Raised when store operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. Driver error text
    goes into `context` and is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
