from __future__ import annotations

import datetime

import pytest

from anasa.easter import orthodox_easter
from anasa.holidays import (
    CustomHoliday,
    effective_holidays,
    find_holiday,
    fixed_holidays,
    get_holidays,
    greek_holidays,
    is_holiday_on_weekend,
    movable_feast_dates,
    movable_holidays,
    resolve_custom_holidays,
    weekend_holidays,
)


def _by_name(year: int) -> dict[str, datetime.date]:
    return {h.name: h.date for h in greek_holidays(year)}


class TestFixedHolidays:
    def test_eight_fixed_holidays(self) -> None:
        holidays = fixed_holidays(2026)
        assert len(holidays) == 8
        assert not any(h.is_movable or h.is_custom for h in holidays)

    def test_fixed_dates(self) -> None:
        dates = {(h.date.month, h.date.day) for h in fixed_holidays(2026)}
        assert dates == {(1, 1), (1, 6), (3, 25), (5, 1), (8, 15), (10, 28), (12, 25), (12, 26)}

    def test_local_names(self) -> None:
        new_year = fixed_holidays(2026)[0]
        assert new_year.name == "New Year's Day"
        assert new_year.local_name == "Πρωτοχρονιά"


class TestMovableHolidays:
    def test_2026_dates(self) -> None:
        names = _by_name(2026)
        assert names["Clean Monday"] == datetime.date(2026, 2, 23)
        assert names["Good Friday"] == datetime.date(2026, 4, 10)
        assert names["Easter Sunday"] == datetime.date(2026, 4, 12)
        assert names["Easter Monday"] == datetime.date(2026, 4, 13)
        assert names["Whit Monday (Holy Spirit)"] == datetime.date(2026, 6, 1)

    def test_holy_spirit_optional(self) -> None:
        easter = orthodox_easter(2026)
        assert len(movable_holidays(easter)) == 5
        without = movable_holidays(easter, include_holy_spirit=False)
        assert len(without) == 4
        assert "Whit Monday (Holy Spirit)" not in {h.name for h in without}

    def test_flagged_movable(self) -> None:
        assert all(h.is_movable for h in movable_holidays(orthodox_easter(2025)))

    def test_movable_feast_dates(self) -> None:
        feasts = movable_feast_dates(2025)
        assert feasts["Easter Sunday"] == datetime.date(2025, 4, 20)
        assert feasts["Easter Monday"] == datetime.date(2025, 4, 21)


class TestGreekHolidays:
    def test_count(self) -> None:
        assert len(greek_holidays(2026)) == 13
        assert len(greek_holidays(2026, include_holy_spirit=False)) == 12

    def test_sorted(self) -> None:
        dates = [h.date for h in greek_holidays(2026)]
        assert dates == sorted(dates)

    def test_deterministic(self) -> None:
        custom = [CustomHoliday("Saint Nicholas", recurring_date="12-06", is_recurring=True)]
        assert greek_holidays(2027, custom=custom) == greek_holidays(2027, custom=custom)

    def test_same_date_holidays_are_all_kept(self) -> None:
        custom = [CustomHoliday("Local Feast", date=datetime.date(2026, 1, 1))]
        holidays = greek_holidays(2026, custom=custom)
        on_new_year = [h for h in holidays if h.date == datetime.date(2026, 1, 1)]
        assert len(on_new_year) == 2
        # Fixed holiday first
        assert on_new_year[0].name == "New Year's Day"
        assert on_new_year[1].is_custom

    def test_get_holidays_preset(self) -> None:
        assert get_holidays("gr", 2026) == greek_holidays(2026)

    def test_get_holidays_unknown_country(self) -> None:
        with pytest.raises(KeyError, match="Unknown country preset"):
            get_holidays("xx", 2026)


class TestCustomHolidays:
    def test_one_time(self) -> None:
        resolved = resolve_custom_holidays(
            [CustomHoliday("Company Day", date=datetime.date(2026, 7, 3))], 2026
        )
        assert len(resolved) == 1
        assert resolved[0].date == datetime.date(2026, 7, 3)
        assert resolved[0].is_custom
        assert resolved[0].local_name == "Company Day"

    def test_recurring(self) -> None:
        rule = CustomHoliday("Saint Nicholas", recurring_date="12-06", is_recurring=True)
        assert resolve_custom_holidays([rule], 2026)[0].date == datetime.date(2026, 12, 6)
        assert resolve_custom_holidays([rule], 2030)[0].date == datetime.date(2030, 12, 6)

    def test_easter_offset(self) -> None:
        rule = CustomHoliday("Ascension", is_movable=True, easter_offset=39)
        resolved = resolve_custom_holidays([rule], 2026)
        assert resolved[0].date == datetime.date(2026, 5, 21)
        assert resolved[0].is_movable

    def test_moves_to_easter_monday_when_before_easter(self) -> None:
        # Easter 2024 is May 5, after April 23
        rule = CustomHoliday("Saint George", recurring_date="04-23", moves_if_before_easter=True)
        assert resolve_custom_holidays([rule], 2024)[0].date == datetime.date(2024, 5, 6)

    def test_moves_when_on_easter_sunday(self) -> None:
        # Easter 2006 is April 23 itself
        rule = CustomHoliday("Saint George", recurring_date="04-23", moves_if_before_easter=True)
        assert resolve_custom_holidays([rule], 2006)[0].date == datetime.date(2006, 4, 24)

    def test_stays_when_after_easter(self) -> None:
        # Easter 2026 is April 12
        rule = CustomHoliday("Saint George", recurring_date="04-23", moves_if_before_easter=True)
        assert resolve_custom_holidays([rule], 2026)[0].date == datetime.date(2026, 4, 23)

    def test_missing_name_dropped(self) -> None:
        rule = CustomHoliday("", date=datetime.date(2026, 7, 3))
        assert resolve_custom_holidays([rule], 2026) == []

    def test_missing_date_dropped(self) -> None:
        assert resolve_custom_holidays([CustomHoliday("Nothing")], 2026) == []

    def test_impossible_recurring_date_dropped(self) -> None:
        rules = [
            CustomHoliday("Bad", recurring_date="02-30", is_recurring=True),
            CustomHoliday("Garbage", recurring_date="soon", is_recurring=True),
        ]
        assert resolve_custom_holidays(rules, 2026) == []

    def test_leap_day_only_in_leap_years(self) -> None:
        rule = CustomHoliday("Leap Party", recurring_date="02-29", is_recurring=True)
        assert resolve_custom_holidays([rule], 2026) == []
        assert resolve_custom_holidays([rule], 2028)[0].date == datetime.date(2028, 2, 29)


class TestQueries:
    def test_find_holiday(self) -> None:
        holidays = greek_holidays(2026)
        found = find_holiday(datetime.date(2026, 3, 25), holidays)
        assert found is not None
        assert found.name == "Independence Day"
        assert find_holiday(datetime.date(2026, 3, 26), holidays) is None

    def test_weekend_split_2026(self) -> None:
        holidays = greek_holidays(2026)
        # Easter Sunday, Aug 15 and Dec 26 fall on a weekend in 2026
        on_weekend = {h.name for h in weekend_holidays(holidays)}
        assert on_weekend == {"Easter Sunday", "Assumption of Mary", "Glorifying Mother of God"}
        assert len(effective_holidays(holidays)) == 10

    def test_is_holiday_on_weekend(self) -> None:
        holidays = {h.name: h for h in greek_holidays(2026)}
        assert is_holiday_on_weekend(holidays["Assumption of Mary"]) is True
        assert is_holiday_on_weekend(holidays["Christmas Day"]) is False
