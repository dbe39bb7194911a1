from datetime import date

import pytest

from sowplan.services.months import (
    MONTH_ORDER,
    MonthRangeError,
    days_in_month,
    first_day_of_month,
    last_day_of_month,
    month_name_from_order,
    month_order,
    month_span,
    parse_iso_date,
    shift_years,
)


def test_days_in_month_uses_fixed_calendar():
    assert days_in_month("jan") == 31
    assert days_in_month("feb") == 28
    assert days_in_month("april") == 30


def test_month_order_is_case_insensitive_and_accepts_alias():
    assert month_order("Mars") == 3
    assert month_order("  JULI ") == 7
    assert month_order("sep") == month_order("sept") == 9


@pytest.mark.parametrize("name", ["", "march", "13", "septembre"])
def test_unknown_month_raises(name):
    with pytest.raises(MonthRangeError):
        month_order(name)
    with pytest.raises(MonthRangeError):
        days_in_month(name)


def test_month_range_error_is_value_error():
    assert issubclass(MonthRangeError, ValueError)


@pytest.mark.parametrize("name", sorted(MONTH_ORDER))
def test_single_month_span_equals_days_in_month(name):
    assert month_span(name, name) == days_in_month(name)


def test_month_span_sums_inclusive_months():
    assert month_span("feb", "april") == 89
    assert month_span("mars", "april") == 61
    assert month_span("juli", "sept") == 92
    assert month_span("jan", "dec") == 365


def test_month_span_rejects_every_reversed_pair():
    names = [month_name_from_order(order) for order in range(1, 13)]
    for i, start in enumerate(names):
        for end in names[:i]:
            with pytest.raises(MonthRangeError):
                month_span(start, end)


def test_month_span_rejects_year_wraparound():
    with pytest.raises(MonthRangeError):
        month_span("nov", "feb")


def test_first_and_last_day_of_month():
    assert first_day_of_month("mars", 2026) == date(2026, 3, 1)
    assert last_day_of_month("april", 2026) == date(2026, 4, 30)
    # concrete dates use the real calendar
    assert last_day_of_month("feb", 2028) == date(2028, 2, 29)


def test_month_name_from_order_prefers_canonical_spelling():
    assert month_name_from_order(9) == "sept"
    with pytest.raises(MonthRangeError):
        month_name_from_order(0)


def test_parse_iso_date():
    assert parse_iso_date("2026-07-15") == date(2026, 7, 15)
    with pytest.raises(ValueError):
        parse_iso_date("15/07/2026")
    with pytest.raises(ValueError):
        parse_iso_date(None)


def test_shift_years_handles_leap_day():
    assert shift_years(date(2026, 3, 10), 1) == date(2027, 3, 10)
    assert shift_years(date(2028, 2, 29), 1) == date(2029, 2, 28)
