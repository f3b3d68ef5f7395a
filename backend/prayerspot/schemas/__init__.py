"""
PrayerSpot Backend — Pydantic Request/Response Schemas
=======================================================

Wire names are camelCase (gmapLink, prayerTimings, mobileNumber); Python
attributes are snake_case. Request fields are all optional at the schema
level: presence rules live in `prayerspot.validation` so that every missing
field yields a 400 with a readable message.
"""
