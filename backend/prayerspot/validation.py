"""
PrayerSpot Backend — Write Validation
=======================================

What:  Presence checks for request payloads and the prayer schedule shape.
Why:   Malformed writes are rejected here, before any store access.
How:   Plain functions raising `ValidationError` (→ HTTP 400).

A value counts as missing when it is None or a blank string.
"""

from typing import Any, Dict, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError

from prayerspot.exceptions import ValidationError
from prayerspot.schemas.service import CORE_PRAYERS, PrayerSchedule


def is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def require_fields(fields: Mapping[str, Any], message: Optional[str] = None) -> None:
    """
    Raise ValidationError if any of `fields` (wire name → value) is missing.

    The error lists every missing field, in the order given.
    """
    missing = [name for name, value in fields.items() if is_missing(value)]
    if not missing:
        return
    if message is None:
        message = f"Missing required fields: {', '.join(missing)}."
    raise ValidationError(
        message=message,
        field=missing[0] if len(missing) == 1 else None,
        missing=missing,
    )


def validate_prayer_timings(raw: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Check a prayer schedule and return its normalized stored form.

    Every core slot must be an object carrying both `azan` and `iqamah`.
    The first failing slot, in canonical prayer order, is named in the error.
    Optional extras (ishraq, taraveeh, sahar, ifthar, eid) are kept when
    given; unknown keys are dropped.
    """
    for prayer in CORE_PRAYERS:
        slot = raw.get(prayer)
        if (
            not isinstance(slot, Mapping)
            or is_missing(_as_text(slot.get("azan")))
            or is_missing(_as_text(slot.get("iqamah")))
        ):
            raise ValidationError(
                message=f"Missing prayer timing data for {prayer}.",
                field=f"prayerTimings.{prayer}",
            )

    try:
        schedule = PrayerSchedule.model_validate(raw)
    except PydanticValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        raise ValidationError(
            message=f"Invalid prayer timing data for {location or 'prayerTimings'}.",
            field=f"prayerTimings.{location}" if location else "prayerTimings",
        )

    return schedule.model_dump(by_alias=True, exclude_none=True)


def _as_text(value: Any) -> Any:
    # Numbers are accepted as times, matching the body-level coercion
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value
