"""Holiday-anchored leave optimizer.

Finds short vacation windows that turn a few leave days into a long run of
days off by attaching them to public holidays and weekends.

Every day gets a binary cost: 0 when it is already free (weekend or
holiday), 1 when it needs a leave day.  For each holiday in the calendar
the search grows a window greedily, one day at a time, while the running
cost stays within the leave budget:

  1. Both directions - left first, then right
  2. Left only       - reach back to the previous weekend / holiday
  3. Right only      - reach forward to the next weekend / holiday

Pairs of consecutive holidays are also *bridged*: if the days between them
fit the budget, the bridged span is grown outward with what is left.

This is a local heuristic, not an exhaustive search.  Holidays cluster
around weekends, so greedy expansion from a holiday finds the same windows a
full scan over all start/end pairs would, at a fraction of the cost.
"""

from __future__ import annotations

import calendar
import datetime
import logging
from collections.abc import Iterable, Sequence
from functools import cached_property
from typing import NamedTuple

from anasa.holidays import Holiday
from anasa.labels import efficiency, efficiency_label

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Data types
# ---------------------------------------------------------------------------


class DayInfo(NamedTuple):
    """One calendar day and whether it costs a leave day."""

    date: datetime.date
    cost: int  # 0 = free (weekend/holiday), 1 = workday
    is_weekend: bool
    is_holiday: bool
    holiday_name: str | None = None


class DateRange(NamedTuple):
    """An inclusive date range."""

    start_date: datetime.date
    end_date: datetime.date

    def overlaps(self, other: DateRange) -> bool:
        return not (self.end_date < other.start_date or self.start_date > other.end_date)


class OptimizationResult(NamedTuple):
    """A vacation window and what it costs."""

    range: DateRange
    total_days: int
    leave_days_required: int
    free_days: int
    efficiency: float
    efficiency_label: str
    days: list[DayInfo]


class CalendarStats(NamedTuple):
    total_days: int
    weekend_days: int
    holiday_days: int  # holidays on weekdays only
    workdays: int
    free_days: int


MIN_WINDOW_DAYS = 3

# ---------------------------------------------------------------------------
# Day-cost calendar
# ---------------------------------------------------------------------------


def generate_calendar(
    start_date: datetime.date,
    end_date: datetime.date,
    holidays: Iterable[Holiday],
) -> list[DayInfo]:
    """Return one :class:`DayInfo` per day from *start_date* to *end_date*.

    A day is a holiday if *any* holiday matches it; its ``holiday_name`` is
    the first match.  Ranges spanning several years need holidays for all of
    them.
    """
    names: dict[datetime.date, str] = {}
    for h in holidays:
        names.setdefault(h.date, h.name)

    days: list[DayInfo] = []
    num_days = (end_date - start_date).days + 1
    for offset in range(num_days):
        d = start_date + datetime.timedelta(days=offset)
        weekend = d.weekday() >= 5
        holiday = d in names
        days.append(
            DayInfo(
                date=d,
                cost=0 if weekend or holiday else 1,
                is_weekend=weekend,
                is_holiday=holiday,
                holiday_name=names.get(d),
            )
        )
    return days


def compute_year_calendar(
    year: int,
    holidays: Iterable[Holiday],
    from_date: datetime.date | None = None,
) -> list[DayInfo]:
    """Day-cost calendar for *year*.

    With *from_date* inside the year (after January 1) the calendar starts
    there instead, e.g. to skip days that have already passed.
    """
    start = datetime.date(year, 1, 1)
    end = datetime.date(year, 12, 31)
    if from_date is not None and start < from_date <= end:
        start = from_date
    return generate_calendar(start, end, holidays)


def calendar_stats(days: Sequence[DayInfo]) -> CalendarStats:
    weekend_days = sum(1 for d in days if d.is_weekend)
    holiday_days = sum(1 for d in days if d.is_holiday and not d.is_weekend)
    return CalendarStats(
        total_days=len(days),
        weekend_days=weekend_days,
        holiday_days=holiday_days,
        workdays=sum(1 for d in days if d.cost == 1),
        free_days=weekend_days + holiday_days,
    )


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


def _build_result(days: list[DayInfo], leave: int, locale: str) -> OptimizationResult:
    total = len(days)
    return OptimizationResult(
        range=DateRange(days[0].date, days[-1].date),
        total_days=total,
        leave_days_required=leave,
        free_days=sum(1 for d in days if d.cost == 0),
        efficiency=efficiency(total, leave),
        efficiency_label=efficiency_label(leave, total, locale),
        days=days,
    )


def make_result(
    days: Sequence[DayInfo],
    left: int,
    right: int,
    cost: int,
    *,
    locale: str = "en",
) -> OptimizationResult | None:
    """Turn the span ``days[left:right + 1]`` into a result.

    Returns ``None`` unless the span contains a holiday, needs at least one
    leave day and is at least :data:`MIN_WINDOW_DAYS` long.
    """
    window = list(days[left : right + 1])
    if cost == 0 or not any(d.is_holiday for d in window):
        return None
    if len(window) < MIN_WINDOW_DAYS:
        return None
    return _build_result(window, cost, locale)


def compute_single_window(
    start_date: datetime.date,
    end_date: datetime.date,
    holidays: Iterable[Holiday],
    *,
    locale: str = "en",
) -> OptimizationResult:
    """Recompute a window from its date range alone.

    Used to rebuild stored or user-chosen windows.  No validity filtering
    is applied: a window needing no leave reports ``efficiency ==
    total_days``.

    Raises ``ValueError`` if *start_date* is after *end_date*.
    """
    if start_date > end_date:
        msg = f"Window start {start_date} is after its end {end_date}"
        raise ValueError(msg)
    days = generate_calendar(start_date, end_date, holidays)
    return _build_result(days, sum(d.cost for d in days), locale)


# ---------------------------------------------------------------------------
# Window search
# ---------------------------------------------------------------------------


def holiday_indices(days: Sequence[DayInfo]) -> list[int]:
    return [i for i, d in enumerate(days) if d.is_holiday]


def _grow_left(days: Sequence[DayInfo], left: int, cost: int, budget: int) -> tuple[int, int]:
    while left > 0:
        new_cost = cost + days[left - 1].cost
        if new_cost > budget:
            break
        left -= 1
        cost = new_cost
    return left, cost


def _grow_right(days: Sequence[DayInfo], right: int, cost: int, budget: int) -> tuple[int, int]:
    while right < len(days) - 1:
        new_cost = cost + days[right + 1].cost
        if new_cost > budget:
            break
        right += 1
        cost = new_cost
    return right, cost


def expand_both(
    days: Sequence[DayInfo], index: int, budget: int, *, locale: str = "en"
) -> OptimizationResult | None:
    """Grow a window around the holiday at *index*, leftward then rightward."""
    left, cost = _grow_left(days, index, days[index].cost, budget)
    right, cost = _grow_right(days, index, cost, budget)
    return make_result(days, left, right, cost, locale=locale)


def expand_left(
    days: Sequence[DayInfo], index: int, budget: int, *, locale: str = "en"
) -> OptimizationResult | None:
    """Grow a window ending on the holiday at *index*."""
    left, cost = _grow_left(days, index, days[index].cost, budget)
    return make_result(days, left, index, cost, locale=locale)


def expand_right(
    days: Sequence[DayInfo], index: int, budget: int, *, locale: str = "en"
) -> OptimizationResult | None:
    """Grow a window starting on the holiday at *index*."""
    right, cost = _grow_right(days, index, days[index].cost, budget)
    return make_result(days, index, right, cost, locale=locale)


def bridge_holidays(
    days: Sequence[DayInfo],
    first: int,
    second: int,
    budget: int,
    *,
    locale: str = "en",
) -> OptimizationResult | None:
    """Join the holidays at *first* and *second*, then grow outward.

    Returns ``None`` when the days between them alone exceed *budget*.
    """
    bridge_cost = sum(d.cost for d in days[first : second + 1])
    if bridge_cost > budget:
        return None
    left, cost = _grow_left(days, first, bridge_cost, budget)
    right, cost = _grow_right(days, second, cost, budget)
    return make_result(days, left, right, cost, locale=locale)


def collect_candidates(
    days: Sequence[DayInfo], budget: int, *, locale: str = "en"
) -> list[OptimizationResult]:
    """All valid windows from the three expansions and from bridging.

    Candidates may overlap and repeat; see :func:`select_windows`.
    """
    indices = holiday_indices(days)
    candidates: list[OptimizationResult] = []

    for idx in indices:
        for strategy in (expand_both, expand_left, expand_right):
            result = strategy(days, idx, budget, locale=locale)
            if result is not None:
                candidates.append(result)

    for first, second in zip(indices, indices[1:]):
        result = bridge_holidays(days, first, second, budget, locale=locale)
        if result is not None:
            candidates.append(result)

    logger.debug(
        "Found %d candidate windows around %d holidays (budget %d)",
        len(candidates),
        len(indices),
        budget,
    )
    return candidates


# ---------------------------------------------------------------------------
# Ranking & selection
# ---------------------------------------------------------------------------


def select_windows(
    candidates: Iterable[OptimizationResult], result_cap: int | None = 3
) -> list[OptimizationResult]:
    """Pick the best non-overlapping windows.

    Candidates are ranked by leave days used (more first, to make full use
    of the budget), then by length.  This deliberately does *not* rank by
    efficiency.  A *result_cap* of 0 or ``None`` means no limit.
    """
    ranked = sorted(
        (c for c in candidates if any(d.is_holiday for d in c.days)),
        key=lambda r: (-r.leave_days_required, -r.total_days),
    )

    selected: list[OptimizationResult] = []
    for result in ranked:
        if any(result.range.overlaps(s.range) for s in selected):
            continue
        selected.append(result)
        if result_cap and len(selected) >= result_cap:
            break
    return selected


def compute_windows_for_budget(
    days: Sequence[DayInfo],
    budget: int,
    result_cap: int | None = 3,
    *,
    locale: str = "en",
) -> list[OptimizationResult]:
    """Search *days* for the best windows costing at most *budget* leave days."""
    return select_windows(collect_candidates(days, budget, locale=locale), result_cap)


def best_window(
    days: Sequence[DayInfo], budget: int, *, locale: str = "en"
) -> OptimizationResult | None:
    results = compute_windows_for_budget(days, budget, 1, locale=locale)
    return results[0] if results else None


def holiday_opportunities(
    days: Sequence[DayInfo], budget: int, *, locale: str = "en"
) -> list[OptimizationResult]:
    """One both-direction window per holiday, in calendar order, unranked."""
    opportunities: list[OptimizationResult] = []
    for idx in holiday_indices(days):
        result = expand_both(days, idx, budget, locale=locale)
        if result is not None:
            opportunities.append(result)
    return opportunities


# ---------------------------------------------------------------------------
# Optimizer
# ---------------------------------------------------------------------------


class LeaveOptimizer:
    """Leave windows for one year, budget and holiday list.

    Calendars are built once in ``__init__``; searches run on first access
    and are cached on the instance.  Build a new optimizer when any input
    changes.
    """

    def __init__(
        self,
        year: int,
        leave_budget: int,
        holidays: Iterable[Holiday],
        max_results: int | None = 3,
        *,
        from_date: datetime.date | None = None,
        locale: str = "en",
    ):
        self.year = year
        self.leave_budget = leave_budget
        self.holidays = list(holidays)
        self.max_results = max_results
        self.locale = locale

        self.start_date = datetime.date(year, 1, 1)
        self.end_date = datetime.date(year, 12, 31)

        # Full year for reference stats; the active calendar may start later.
        self.year_calendar = compute_year_calendar(year, self.holidays)
        self.calendar = compute_year_calendar(year, self.holidays, from_date)
        self.effective_start = self.calendar[0].date

    @cached_property
    def top_opportunities(self) -> list[OptimizationResult]:
        return compute_windows_for_budget(
            self.calendar, self.leave_budget, self.max_results, locale=self.locale
        )

    @cached_property
    def best_opportunity(self) -> OptimizationResult | None:
        return best_window(self.calendar, self.leave_budget, locale=self.locale)

    @cached_property
    def holiday_opportunities(self) -> list[OptimizationResult]:
        return holiday_opportunities(self.calendar, self.leave_budget, locale=self.locale)

    @cached_property
    def stats(self) -> CalendarStats:
        """Stats over the active calendar."""
        return calendar_stats(self.calendar)

    @cached_property
    def full_year_stats(self) -> CalendarStats:
        return calendar_stats(self.year_calendar)

    def custom_period(
        self, start_date: datetime.date, end_date: datetime.date
    ) -> OptimizationResult:
        """Recompute a user-chosen window against this optimizer's holidays."""
        return compute_single_window(start_date, end_date, self.holidays, locale=self.locale)


# ---------------------------------------------------------------------------
# Output formatting
# ---------------------------------------------------------------------------


def format_date_range(rng: DateRange) -> str:
    """e.g. ``"1 Jan - 18 Jan 2026"``."""
    start, end = rng
    return f"{start.day} {start:%b} - {end.day} {end:%b %Y}"


def format_result(result: OptimizationResult, index: int | None = None) -> str:
    """Return a short, multi-line description of one window."""
    start, end = result.range
    n = result.total_days
    if start == end:
        dr = start.strftime("%a, %b %d")
    else:
        dr = f"{start.strftime('%a, %b %d')} -> {end.strftime('%a, %b %d')}"
    prefix = f"  {index:>2}. " if index is not None else "  "
    lines = [f"{prefix}{dr}  ({n} day{'s' if n != 1 else ''})"]

    holidays = [d for d in result.days if d.is_holiday]
    parts = [f"{result.leave_days_required} leave", f"{result.free_days} free"]
    if holidays:
        parts.append(f"{len(holidays)} holiday{'s' if len(holidays) > 1 else ''}")
    lines.append(f"      {' + '.join(parts)}")
    lines.append(f"      Efficiency: {result.efficiency:.1f}x  ({result.efficiency_label})")
    for d in holidays:
        lines.append(f"      * {d.date.strftime('%a, %b %d')}  {d.holiday_name}")
    return "\n".join(lines)


def format_results(results: list[OptimizationResult], optimizer: LeaveOptimizer) -> str:
    """Return a human-readable summary of the selected windows."""
    lines: list[str] = []
    w = 64

    lines.append("")
    lines.append("=" * w)
    lines.append(f"  BEST WINDOWS FOR {optimizer.leave_budget} LEAVE DAYS")
    lines.append("=" * w)

    stats = optimizer.stats
    lines.append(f"  Searching from:    {optimizer.effective_start.strftime('%a, %b %d, %Y')}")
    lines.append(
        f"  Workdays left:     {stats.workdays} of {stats.total_days} days "
        f"({stats.weekend_days} weekend, {stats.holiday_days} holiday)"
    )
    lines.append("")

    if not results:
        lines.append("  No window fits this budget.")
        return "\n".join(lines)

    lines.append("  Vacation Windows:")
    lines.append("  " + "-" * (w - 4))
    for i, result in enumerate(results, 1):
        lines.append(format_result(result, i))
        lines.append("")

    return "\n".join(lines)


def format_calendar_view(results: list[OptimizationResult], optimizer: LeaveOptimizer) -> str:
    """Return a month-by-month calendar highlighting the selected windows."""
    leave_set: set[datetime.date] = set()
    free_set: set[datetime.date] = set()
    for result in results:
        for d in result.days:
            (leave_set if d.cost == 1 else free_set).add(d.date)
    holiday_set = {h.date for h in optimizer.holidays}
    year = optimizer.year

    # Only months touched by a window
    active_months = {d.month for d in leave_set | free_set if d.year == year}
    if not active_months:
        return ""

    lines: list[str] = [
        "",
        f"  Calendar View {year}",
        "  Legend: L=Leave  H=Holiday  *=Free day in window",
        "",
    ]

    cal = calendar.Calendar(firstweekday=0)

    for month in range(1, 13):
        if month not in active_months:
            continue

        lines.append(f"  {calendar.month_name[month]} {year}")
        lines.append("  Mo  Tu  We  Th  Fr  Sa  Su")

        row = ""
        for day_num, weekday in cal.itermonthdays2(year, month):
            if day_num == 0:
                row += "    "
            else:
                d = datetime.date(year, month, day_num)
                if d in leave_set:
                    cell = f" {day_num:>2}L"
                elif d in holiday_set:
                    cell = f" {day_num:>2}H"
                elif d in free_set:
                    cell = f" {day_num:>2}*"
                else:
                    cell = f"  {day_num:>2}"
                row += cell

            if weekday == 6:
                lines.append(row)
                row = ""

        if row.strip():
            lines.append(row)
        lines.append("")

    return "\n".join(lines)


def format_holiday_list(holidays: list[Holiday], local_names: bool = False) -> str:
    """One line per holiday, weekend holidays flagged."""
    lines: list[str] = []
    for h in holidays:
        name = h.local_name if local_names else h.name
        tags: list[str] = []
        if h.date.weekday() >= 5:
            tags.append("weekend")
        if h.is_custom:
            tags.append("custom")
        suffix = f"  ({', '.join(tags)})" if tags else ""
        lines.append(f"    {h.date.strftime('%a, %b %d'):>12}  {name}{suffix}")
    return "\n".join(lines)


def format_year_comparison(
    feasts_by_year: dict[int, dict[str, datetime.date]],
) -> str:
    """Table of movable feast dates across years; ``*`` marks a weekend."""
    years = sorted(feasts_by_year)
    if not years:
        return ""
    names = list(feasts_by_year[years[0]])
    width = max(len(n) for n in names) + 2

    lines = ["  " + "".ljust(width) + "".join(f"{y:>12}" for y in years)]
    for name in names:
        cells = []
        for y in years:
            d = feasts_by_year[y][name]
            mark = "*" if d.weekday() >= 5 else " "
            cells.append(f"{d.strftime('%a %d %b'):>11}{mark}")
        lines.append("  " + name.ljust(width) + "".join(cells))
    return "\n".join(lines)
