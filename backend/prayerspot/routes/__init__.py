"""
PrayerSpot Backend — API Routes Package
=========================================

Route Inventory:
    - services.py:  GET  /api/servicedetails   (list every entry)
                    POST /api/addservice       (create an entry)
                    POST /api/getservice       (look up by pincode)
    - accounts.py:  POST /api/register         (create an account)
                    POST /api/login            (verify email/password)
    - health.py:    GET  /health               (store connectivity probe)

Routes stay thin: parse the body, call the service, return the model.
Errors propagate to the global handlers in main.py.
"""
