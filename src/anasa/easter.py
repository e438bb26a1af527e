"""Orthodox Easter computation.

The Meeus Julian algorithm gives Easter Sunday in the Julian calendar; the
result is then shifted onto the Gregorian calendar.  The shift formula is
valid for 1800-2199.
"""

from __future__ import annotations

import datetime


def julian_gregorian_offset(year: int) -> int:
    """Days between the Julian and Gregorian calendars in *year*.

    12 for the 1800s, 13 for 1900-2099, 14 for the 2100s.
    """
    century = year // 100
    return century - century // 4 - 2


def orthodox_easter(year: int) -> datetime.date:
    """Return Orthodox Easter Sunday of *year* as a Gregorian date."""
    a = year % 4
    b = year % 7
    c = year % 19
    d = (19 * c + 15) % 30
    e = (2 * a + 4 * b - d + 34) % 7
    month = (d + e + 114) // 31  # 3 = March, 4 = April
    day = (d + e + 114) % 31 + 1

    julian = datetime.date(year, month, day)
    return julian + datetime.timedelta(days=julian_gregorian_offset(year))
