"""Request and response contracts for /api/register and /api/login."""

from typing import Optional

from pydantic import Field

from prayerspot.schemas.common import CamelModel


class RegisterRequest(CamelModel):
    name: Optional[str] = None
    mobile_number: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None


class LoggedInUser(CamelModel):
    email: str


class LoginResponse(CamelModel):
    message: str = Field(default="Login successful")
    user: LoggedInUser
