from datetime import date, timedelta

import pytest

from conftest import make_plant
from sowplan.schemas.plant import MonthRange, PlantingMethod, PlantingWindows
from sowplan.services.months import CANONICAL_MONTH_NAMES, first_day_of_month, last_day_of_month
from sowplan.services.sow_date import (
    calculate_sow_date,
    calculate_total_days_from_seed,
    calculate_try_anyway_sow_date,
)

TOMATO_WINDOWS = PlantingWindows(indoors=MonthRange(start="mars", end="april"), outdoors=MonthRange())
TOMATO_HARVEST = MonthRange(start="juli", end="sept")


def test_proportional_mapping():
    # 14 days into a 92-day harvest window -> 14 * 61 / 92 = 9.3 days into the planting window
    sow = calculate_sow_date(date(2026, 7, 15), TOMATO_WINDOWS, TOMATO_HARVEST, PlantingMethod.indoor)
    assert sow == date(2026, 3, 10)


def test_harvest_before_window_clamps_to_planting_start():
    sow = calculate_sow_date(date(2026, 5, 20), TOMATO_WINDOWS, TOMATO_HARVEST, PlantingMethod.indoor)
    assert sow == date(2026, 3, 1)


def test_harvest_after_window_clamps_to_planting_end():
    sow = calculate_sow_date(date(2026, 11, 20), TOMATO_WINDOWS, TOMATO_HARVEST, PlantingMethod.indoor)
    assert sow == date(2026, 4, 30)


def _valid_pairs():
    months = [CANONICAL_MONTH_NAMES[m] for m in range(1, 13)]
    for p_start in range(0, 12, 3):
        for p_len in (0, 1, 3):
            for h_start in range(0, 12, 2):
                for h_len in (0, 2, 5):
                    if p_start + p_len < 12 and h_start + h_len < 12:
                        yield (
                            MonthRange(start=months[p_start], end=months[p_start + p_len]),
                            MonthRange(start=months[h_start], end=months[h_start + h_len]),
                        )


@pytest.mark.parametrize("planting,harvest", list(_valid_pairs()))
def test_sow_date_stays_inside_planting_window(planting, harvest):
    windows = PlantingWindows(indoors=planting)
    year = 2026
    start = first_day_of_month(harvest.start, year)
    end = last_day_of_month(harvest.end, year)
    day = start
    while day <= end:
        sow = calculate_sow_date(day, windows, harvest, PlantingMethod.indoor)
        assert first_day_of_month(planting.start, year) <= sow <= last_day_of_month(planting.end, year)
        day += timedelta(days=7)


@pytest.mark.parametrize(
    "windows,harvest",
    [
        (TOMATO_WINDOWS, None),
        (TOMATO_WINDOWS, MonthRange(start="juli", end="")),
        (PlantingWindows(), TOMATO_HARVEST),
        (PlantingWindows(indoors=MonthRange(start="april", end="mars")), TOMATO_HARVEST),
        (TOMATO_WINDOWS, MonthRange(start="nov", end="feb")),
        (PlantingWindows(indoors=MonthRange(start="marsch", end="april")), TOMATO_HARVEST),
    ],
)
def test_insufficient_window_data_returns_none(windows, harvest):
    assert calculate_sow_date(date(2026, 7, 15), windows, harvest, PlantingMethod.indoor) is None


def test_outdoor_method_ignores_indoor_window():
    windows = PlantingWindows(indoors=MonthRange(start="mars", end="april"), outdoors=MonthRange())
    assert calculate_sow_date(date(2026, 7, 15), windows, TOMATO_HARVEST, PlantingMethod.outdoor) is None


def test_try_anyway_counts_back_from_harvest_date(tomato):
    # planting start 1 March -> harvest start 1 July = 122 days
    assert calculate_try_anyway_sow_date(date(2026, 7, 15), tomato) == date(2026, 3, 15)


def test_try_anyway_is_earlier_than_proportional_date(tomato):
    harvest = date(2026, 6, 8)
    proportional = calculate_sow_date(harvest, tomato.planting_windows, tomato.harvest_time, tomato.planting_method)
    assert calculate_try_anyway_sow_date(harvest, tomato) < proportional


def test_try_anyway_floors_maturity_at_zero():
    plant = make_plant(
        planting_windows=PlantingWindows(indoors=MonthRange(start="aug", end="sept")),
        harvest_time=MonthRange(start="juni", end="juli"),
    )
    assert calculate_try_anyway_sow_date(date(2026, 6, 10), plant) == date(2026, 6, 10)


def test_try_anyway_without_data(tomato):
    assert calculate_try_anyway_sow_date(date(2026, 7, 15), tomato.model_copy(update={"harvest_time": None})) is None
    no_windows = tomato.model_copy(update={"planting_windows": PlantingWindows()})
    assert calculate_try_anyway_sow_date(date(2026, 7, 15), no_windows) is None


def test_total_days_from_seed():
    harvest = MonthRange(start="juli", end="okt")
    windows = PlantingWindows(indoors=MonthRange(start="feb", end="april"))
    assert calculate_total_days_from_seed(windows, harvest, PlantingMethod.indoor) == 273
    assert calculate_total_days_from_seed(windows, None) is None
