"""Typer CLI for the leave optimizer."""

from __future__ import annotations

import datetime
import json
import pathlib
import sys

import typer

from anasa.easter import orthodox_easter
from anasa.holidays import PRESETS, CustomHoliday, Holiday, get_holidays, movable_feast_dates
from anasa.labels import LOCALES
from anasa.logging_config import setup_logging
from anasa.optimizer import (
    LeaveOptimizer,
    OptimizationResult,
    format_calendar_view,
    format_date_range,
    format_holiday_list,
    format_result,
    format_results,
    format_year_comparison,
)
from anasa.validation import parse_date_range, validate_date_range

app = typer.Typer(
    name="anasa",
    help="Greek leave optimizer: find the holiday windows that turn a few "
    "leave days into the longest breaks.",
    add_completion=False,
)

COUNTRY = "gr"


def _parse_date(value: str) -> datetime.date:
    """Parse a YYYY-MM-DD date string."""
    try:
        return datetime.date.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter(f"Invalid date format {value!r}. Use YYYY-MM-DD.") from None


def _parse_holiday(value: str) -> CustomHoliday:
    """Parse ``YYYY-MM-DD[:Name]`` into a one-time custom holiday."""
    date_part, _, name = value.partition(":")
    return CustomHoliday(name=name.strip() or "Custom holiday", date=_parse_date(date_part))


def _today() -> datetime.date:
    return datetime.date.today()


def _fail(message: str) -> typer.Exit:
    typer.echo(f"Error: {message}", err=True)
    return typer.Exit(code=1)


def _check_locale(locale: str) -> None:
    if locale not in LOCALES:
        raise _fail(f"Unknown locale {locale!r}. Supported: {', '.join(sorted(LOCALES))}")


@app.callback()
def main_callback(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log search details to stderr.",
    ),
) -> None:
    setup_logging("DEBUG" if verbose else "WARNING")


# ---------------------------------------------------------------------------
# Config file
# ---------------------------------------------------------------------------


def _load_config(path: str | None) -> dict[str, object]:
    """Load and validate a JSON config file; an absent path yields ``{}``."""
    if path is None:
        return {}

    p = pathlib.Path(path)
    if not p.exists():
        raise _fail(f"Config file not found: {path}")

    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise _fail(f"Invalid JSON in config file: {exc}") from None

    if not isinstance(data, dict):
        raise _fail("Config file must contain a JSON object.")

    return data


def _build_custom_holidays(data: dict[str, object]) -> list[CustomHoliday]:
    """Build CustomHoliday rules from the ``custom_holidays`` config key."""
    raw_list = data.get("custom_holidays", [])
    if not isinstance(raw_list, list):
        raise _fail("'custom_holidays' must be a list.")

    custom: list[CustomHoliday] = []
    for i, raw in enumerate(raw_list):
        if not isinstance(raw, dict):
            raise _fail(f"Custom holiday #{i + 1} must be an object.")

        one_time = raw.get("date")
        if one_time is not None:
            try:
                one_time = datetime.date.fromisoformat(one_time)
            except (TypeError, ValueError):
                raise _fail(f"Custom holiday #{i + 1}: invalid date {one_time!r}.") from None

        offset = raw.get("easter_offset")
        if offset is not None:
            try:
                offset = int(offset)
            except (TypeError, ValueError):
                raise _fail(
                    f"Custom holiday #{i + 1}: invalid easter_offset {offset!r}."
                ) from None

        recurring = raw.get("recurring_date")
        if recurring is not None and not isinstance(recurring, str):
            raise _fail(
                f"Custom holiday #{i + 1}: recurring_date must be a 'MM-DD' string."
            )

        # Rules without a usable name are dropped when resolved
        name = raw.get("name")
        custom.append(
            CustomHoliday(
                name=name if isinstance(name, str) else "",
                date=one_time,
                recurring_date=recurring,
                is_recurring=bool(raw.get("is_recurring", False)),
                is_movable=bool(raw.get("is_movable", offset is not None)),
                easter_offset=offset,
                moves_if_before_easter=bool(raw.get("moves_if_before_easter", False)),
            )
        )
    return custom


def _collect_holidays(
    year: int,
    include_holy_spirit: bool,
    data: dict[str, object],
    holiday: list[str] | None,
) -> list[Holiday]:
    custom = _build_custom_holidays(data)
    custom.extend(_parse_holiday(h) for h in holiday or [])
    return get_holidays(COUNTRY, year, include_holy_spirit, custom)


def _pick(flag: object, data: dict[str, object], key: str, default: object) -> object:
    """CLI flag, else config value, else *default*."""
    if flag is not None:
        return flag
    return data.get(key, default)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def optimize(
    year: int = typer.Option(
        None,
        "--year",
        "-y",
        help="Target year. Defaults to the current year.",
    ),
    budget: int = typer.Option(
        None,
        "--budget",
        "-b",
        help="Leave days available for one window.",
        min=0,
    ),
    results: int = typer.Option(
        3,
        "--results",
        "-n",
        help="Maximum number of windows to show (0 = no limit).",
        min=0,
    ),
    from_date: str | None = typer.Option(
        None,
        "--from",
        help="Only consider days from this date (YYYY-MM-DD).",
    ),
    from_today: bool = typer.Option(
        False,
        "--from-today",
        help="Skip days that have already passed this year.",
    ),
    holy_spirit: bool | None = typer.Option(
        None,
        "--holy-spirit/--no-holy-spirit",
        help="Count Holy Spirit Monday as a holiday (default: yes).",
    ),
    holiday: list[str] | None = typer.Option(  # noqa: B008
        None,
        "--holiday",
        "-H",
        help="Additional holiday YYYY-MM-DD[:Name]. Repeatable.",
    ),
    locale: str = typer.Option(
        "en",
        "--locale",
        "-l",
        help=f"Label language ({', '.join(sorted(LOCALES))}).",
    ),
    calendar: bool = typer.Option(
        True,
        "--calendar/--no-calendar",
        help="Show month-by-month calendar view.",
    ),
    output_json: bool = typer.Option(
        False,
        "--json",
        help="Output results as JSON.",
    ),
    config: str | None = typer.Option(
        None,
        "--config",
        help="Path to JSON config file (year, budget, custom holidays).",
    ),
) -> None:
    """Find the best leave windows around public holidays."""
    _check_locale(locale)
    data = _load_config(config)

    resolved_budget = _pick(budget, data, "budget", None)
    if resolved_budget is None:
        raise _fail("--budget is required (or set 'budget' in the config file).")

    resolved_year = int(_pick(year, data, "year", _today().year))  # type: ignore[arg-type]
    include_holy_spirit = bool(_pick(holy_spirit, data, "include_holy_spirit", True))
    holidays = _collect_holidays(resolved_year, include_holy_spirit, data, holiday)

    start: datetime.date | None = None
    if from_date is not None:
        start = _parse_date(from_date)
    elif from_today and _today().year == resolved_year:
        start = _today()

    optimizer = LeaveOptimizer(
        year=resolved_year,
        leave_budget=int(resolved_budget),  # type: ignore[arg-type]
        holidays=holidays,
        max_results=results,
        from_date=start,
        locale=locale,
    )
    found = optimizer.top_opportunities

    if output_json:
        _print_json(found, optimizer)
    else:
        _print_text(found, optimizer, calendar)


def _print_text(
    found: list[OptimizationResult],
    optimizer: LeaveOptimizer,
    show_calendar: bool,
) -> None:
    w = 64
    typer.echo("=" * w)
    typer.echo("  GREEK LEAVE OPTIMIZER")
    typer.echo("=" * w)
    typer.echo(f"  Year:              {optimizer.year}")
    typer.echo(f"  Leave budget:      {optimizer.leave_budget} days")
    typer.echo(f"  Public holidays:   {len(optimizer.holidays)}")
    typer.echo()
    typer.echo(format_holiday_list(optimizer.holidays))

    typer.echo(format_results(found, optimizer))
    if show_calendar and found:
        typer.echo(format_calendar_view(found, optimizer))

    typer.echo()
    typer.echo("=" * w)
    typer.echo(f"  Found {len(found)} vacation window{'s' if len(found) != 1 else ''}.")
    typer.echo("=" * w)


def _serialize_result(result: OptimizationResult) -> dict[str, object]:
    # The day-by-day slice is left out; it can be recomputed from the range.
    return {
        "start_date": result.range.start_date.isoformat(),
        "end_date": result.range.end_date.isoformat(),
        "total_days": result.total_days,
        "leave_days_required": result.leave_days_required,
        "free_days": result.free_days,
        "efficiency": result.efficiency,
        "efficiency_label": result.efficiency_label,
    }


def _print_json(found: list[OptimizationResult], optimizer: LeaveOptimizer) -> None:
    output = {
        "year": optimizer.year,
        "leave_budget": optimizer.leave_budget,
        "start_date": optimizer.effective_start.isoformat(),
        "stats": optimizer.stats._asdict(),
        "full_year_stats": optimizer.full_year_stats._asdict(),
        "results": [_serialize_result(r) for r in found],
    }
    json.dump(output, sys.stdout, indent=2, ensure_ascii=False)
    typer.echo()


@app.command()
def holidays(
    year: int = typer.Option(
        None,
        "--year",
        "-y",
        help="Year to list holidays for. Defaults to the current year.",
    ),
    holy_spirit: bool | None = typer.Option(
        None,
        "--holy-spirit/--no-holy-spirit",
        help="Include Holy Spirit Monday (default: yes).",
    ),
    holiday: list[str] | None = typer.Option(  # noqa: B008
        None,
        "--holiday",
        "-H",
        help="Additional holiday YYYY-MM-DD[:Name]. Repeatable.",
    ),
    local: bool = typer.Option(
        False,
        "--local",
        help="Show Greek holiday names.",
    ),
    config: str | None = typer.Option(
        None,
        "--config",
        help="Path to JSON config file with custom holidays.",
    ),
) -> None:
    """List the public holidays of a year."""
    data = _load_config(config)
    resolved_year = int(_pick(year, data, "year", _today().year))  # type: ignore[arg-type]
    include_holy_spirit = bool(_pick(holy_spirit, data, "include_holy_spirit", True))
    found = _collect_holidays(resolved_year, include_holy_spirit, data, holiday)

    typer.echo(f"  {PRESETS[COUNTRY]}, {resolved_year}")
    typer.echo(f"  Orthodox Easter: {orthodox_easter(resolved_year).strftime('%A, %B %d')}")
    typer.echo()
    typer.echo(format_holiday_list(found, local_names=local))


@app.command()
def period(
    start: str = typer.Argument(..., help="First day of leave (YYYY-MM-DD)."),
    end: str = typer.Argument(..., help="Last day of leave (YYYY-MM-DD)."),
    year: int = typer.Option(
        None,
        "--year",
        "-y",
        help="Year the period must fall in. Defaults to the current year.",
    ),
    today: str | None = typer.Option(
        None,
        "--today",
        help="Treat this date as today (YYYY-MM-DD).",
    ),
    holy_spirit: bool | None = typer.Option(
        None,
        "--holy-spirit/--no-holy-spirit",
        help="Count Holy Spirit Monday as a holiday (default: yes).",
    ),
    holiday: list[str] | None = typer.Option(  # noqa: B008
        None,
        "--holiday",
        "-H",
        help="Additional holiday YYYY-MM-DD[:Name]. Repeatable.",
    ),
    locale: str = typer.Option(
        "en",
        "--locale",
        "-l",
        help=f"Label language ({', '.join(sorted(LOCALES))}).",
    ),
    output_json: bool = typer.Option(
        False,
        "--json",
        help="Output the period as JSON.",
    ),
    config: str | None = typer.Option(
        None,
        "--config",
        help="Path to JSON config file with custom holidays.",
    ),
) -> None:
    """Work out what a chosen leave period costs."""
    _check_locale(locale)
    data = _load_config(config)
    resolved_year = int(_pick(year, data, "year", _today().year))  # type: ignore[arg-type]
    resolved_today = _parse_date(today) if today is not None else _today()

    check = validate_date_range(start, end, resolved_year, resolved_today)
    if not check.valid:
        raise _fail(check.message)

    include_holy_spirit = bool(_pick(holy_spirit, data, "include_holy_spirit", True))
    found = _collect_holidays(resolved_year, include_holy_spirit, data, holiday)
    optimizer = LeaveOptimizer(resolved_year, 0, found, locale=locale)
    start_date, end_date = parse_date_range(start, end)  # type: ignore[misc]
    result = optimizer.custom_period(start_date, end_date)

    if output_json:
        json.dump(_serialize_result(result), sys.stdout, indent=2, ensure_ascii=False)
        typer.echo()
        return

    typer.echo(f"  {format_date_range(result.range)}")
    typer.echo(format_result(result))


@app.command()
def easter(
    from_year: int = typer.Option(
        None,
        "--from-year",
        help="First year to compare. Defaults to the current year.",
    ),
    to_year: int = typer.Option(
        None,
        "--to-year",
        help="Last year to compare. Defaults to four years after --from-year.",
    ),
) -> None:
    """Compare Easter and the movable holidays across years."""
    first = from_year if from_year is not None else _today().year
    last = to_year if to_year is not None else first + 4
    if last < first:
        raise _fail("--to-year must not be before --from-year.")

    feasts = {y: movable_feast_dates(y) for y in range(first, last + 1)}
    typer.echo("  Movable holidays (* = weekend)")
    typer.echo()
    typer.echo(format_year_comparison(feasts))


def main() -> None:
    """Entry point for the CLI."""
    app()
