"""
Availability domain - Slot enumeration and booking conflict detection.

- engine.py  : pure interval arithmetic (no database access)
- service.py : AvailabilityService, fetches schedule/booking rows and runs the engine
"""

from .engine import SlotListing
from .service import AvailabilityService

__all__ = ["AvailabilityService", "SlotListing"]
