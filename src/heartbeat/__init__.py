"""
Heartbeat - Check-in Safety Service

This package provides the backend for the Heartbeat check-in app.
Users check in once a day; when a user stays silent for two or more
days, their emergency contacts receive an automated phone call.

IMPORTANT: Alert dispatch is best-effort. A missed call is reported,
never retried silently in a way that could ring a contact twice.
"""

__version__ = "0.1.0"
__author__ = "Heartbeat Engineering Team"
