"""
PrayerSpot Backend — Services Layer
=====================================

What:  Business logic between routes (HTTP) and the store (persistence).
How:   Services receive the per-request session as an argument, apply the
       validation rules, and translate store failures into DatabaseError.

Service Inventory:
    - DirectoryService: list, add and look up prayer-service entries
    - AccountService: register and log in user accounts
"""
