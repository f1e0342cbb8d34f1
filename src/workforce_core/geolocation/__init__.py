"""Geolocation domain module.

- ``transform``: clean raw pings (silver layer)
- ``roster``: staff roster with department headcounts
- ``deliveries``: missed supplier delivery detection
"""

from workforce_core.geolocation.deliveries import detect_missed_deliveries
from workforce_core.geolocation.roster import build_department_roster
from workforce_core.geolocation.transform import clean_pings, load_pings

__all__ = [
    "build_department_roster",
    "clean_pings",
    "detect_missed_deliveries",
    "load_pings",
]
