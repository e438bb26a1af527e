"""Greek public holidays for a given year.

Eight holidays sit on fixed dates; the rest move with Orthodox Easter.
Callers may add their own holidays (patron-saint feasts, company days) as
:class:`CustomHoliday` rules, which are resolved to a concrete date for the
requested year.  Holidays that fall on a weekend are kept: they still count
as holidays, they just don't add a day off.
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Iterable
from typing import NamedTuple

from anasa.easter import orthodox_easter

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Data types
# ---------------------------------------------------------------------------


class Holiday(NamedTuple):
    """A single calendar observance."""

    date: datetime.date
    name: str
    local_name: str
    is_movable: bool = False
    is_custom: bool = False


class CustomHoliday(NamedTuple):
    """A user-supplied holiday rule.

    Exactly one of the date rules applies, checked in this order:

    * ``is_movable`` with ``easter_offset`` -- Easter Sunday plus the offset.
    * ``moves_if_before_easter`` with ``recurring_date`` -- the fixed
      ``"MM-DD"`` date, or Easter Monday when that date falls on or before
      Easter Sunday (feasts that may not land in Holy Week).
    * ``is_recurring`` with ``recurring_date`` -- the same ``"MM-DD"`` every year.
    * ``date`` -- a one-time date.
    """

    name: str
    date: datetime.date | None = None
    recurring_date: str | None = None
    is_recurring: bool = False
    is_movable: bool = False
    easter_offset: int | None = None
    moves_if_before_easter: bool = False


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

HOLY_SPIRIT_OFFSET = 50

# (month, day, name, local name)
_FIXED: list[tuple[int, int, str, str]] = [
    (1, 1, "New Year's Day", "Πρωτοχρονιά"),
    (1, 6, "Epiphany", "Θεοφάνια"),
    (3, 25, "Independence Day", "Εικοστή Πέμπτη Μαρτίου"),
    (5, 1, "Labour Day", "Πρωτομαγιά"),
    (8, 15, "Assumption of Mary", "Κοίμηση της Θεοτόκου"),
    (10, 28, "Ohi Day", "Επέτειος του Όχι"),
    (12, 25, "Christmas Day", "Χριστούγεννα"),
    (12, 26, "Glorifying Mother of God", "Σύναξη της Θεοτόκου"),
]

# (offset from Easter Sunday, name, local name)
_MOVABLE: list[tuple[int, str, str]] = [
    (-48, "Clean Monday", "Καθαρά Δευτέρα"),
    (-2, "Good Friday", "Μεγάλη Παρασκευή"),
    (0, "Easter Sunday", "Κυριακή του Πάσχα"),
    (1, "Easter Monday", "Δευτέρα του Πάσχα"),
    (HOLY_SPIRIT_OFFSET, "Whit Monday (Holy Spirit)", "Αγίου Πνεύματος"),
]


def _month_day(value: str, year: int) -> datetime.date | None:
    """Parse ``"MM-DD"`` into a date in *year*, or ``None`` if impossible."""
    try:
        month, day = (int(part) for part in value.split("-"))
        return datetime.date(year, month, day)
    except ValueError:
        return None


def _resolve_date(
    custom: CustomHoliday, year: int, easter: datetime.date
) -> datetime.date | None:
    if custom.is_movable and custom.easter_offset is not None:
        return easter + datetime.timedelta(days=custom.easter_offset)

    if custom.moves_if_before_easter and custom.recurring_date:
        fixed = _month_day(custom.recurring_date, year)
        if fixed is None:
            return None
        if fixed <= easter:
            return easter + datetime.timedelta(days=1)
        return fixed

    if custom.is_recurring and custom.recurring_date:
        return _month_day(custom.recurring_date, year)

    return custom.date


# ---------------------------------------------------------------------------
# Holiday tables
# ---------------------------------------------------------------------------


def fixed_holidays(year: int) -> list[Holiday]:
    """The eight fixed-date national holidays of *year*."""
    return [
        Holiday(datetime.date(year, month, day), name, local)
        for month, day, name, local in _FIXED
    ]


def movable_holidays(
    easter: datetime.date, include_holy_spirit: bool = True
) -> list[Holiday]:
    """Easter-relative national holidays for the year of *easter*."""
    return [
        Holiday(easter + datetime.timedelta(days=offset), name, local, is_movable=True)
        for offset, name, local in _MOVABLE
        if include_holy_spirit or offset != HOLY_SPIRIT_OFFSET
    ]


def resolve_custom_holidays(
    custom: Iterable[CustomHoliday],
    year: int,
    easter: datetime.date | None = None,
) -> list[Holiday]:
    """Resolve custom holiday rules to concrete holidays in *year*.

    Rules without a name or without a resolvable date are dropped.
    """
    if easter is None:
        easter = orthodox_easter(year)

    resolved: list[Holiday] = []
    for ch in custom:
        d = _resolve_date(ch, year, easter) if ch.name else None
        if d is None:
            logger.debug("Dropping custom holiday %r: no name or date", ch)
            continue
        resolved.append(Holiday(d, ch.name, ch.name, is_movable=ch.is_movable, is_custom=True))
    return resolved


def greek_holidays(
    year: int,
    include_holy_spirit: bool = True,
    custom: Iterable[CustomHoliday] = (),
) -> list[Holiday]:
    """All holidays of *year*, sorted by date.

    Holidays sharing a date are all kept, fixed ones first.
    """
    easter = orthodox_easter(year)
    return sorted(
        [
            *fixed_holidays(year),
            *movable_holidays(easter, include_holy_spirit),
            *resolve_custom_holidays(custom, year, easter),
        ],
        key=lambda h: h.date,
    )


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def find_holiday(day: datetime.date, holidays: Iterable[Holiday]) -> Holiday | None:
    """Return the first holiday on *day*, if any."""
    return next((h for h in holidays if h.date == day), None)


def is_holiday_on_weekend(holiday: Holiday) -> bool:
    return holiday.date.weekday() >= 5


def effective_holidays(holidays: Iterable[Holiday]) -> list[Holiday]:
    """Holidays on weekdays, i.e. the ones that actually save a leave day."""
    return [h for h in holidays if not is_holiday_on_weekend(h)]


def weekend_holidays(holidays: Iterable[Holiday]) -> list[Holiday]:
    return [h for h in holidays if is_holiday_on_weekend(h)]


def movable_feast_dates(year: int) -> dict[str, datetime.date]:
    """Easter Sunday and the Easter-relative holidays of *year*, by name."""
    return {h.name: h.date for h in movable_holidays(orthodox_easter(year))}


# ---------------------------------------------------------------------------
# Country presets
# ---------------------------------------------------------------------------

PRESETS: dict[str, str] = {
    "gr": "Greek public holidays",
}

_PRESET_FNS = {
    "gr": greek_holidays,
}


def get_holidays(
    country: str,
    year: int,
    include_holy_spirit: bool = True,
    custom: Iterable[CustomHoliday] = (),
) -> list[Holiday]:
    """Return the holidays of the given *country* preset for *year*.

    Raises ``KeyError`` if the country is not supported.
    """
    fn = _PRESET_FNS.get(country)
    if fn is None:
        supported = ", ".join(sorted(PRESETS))
        msg = f"Unknown country preset {country!r}. Supported: {supported}"
        raise KeyError(msg)
    return fn(year, include_holy_spirit, custom)
