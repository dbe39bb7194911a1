"""
Sow date calculation from a desired harvest date.

The harvest window and the planting window are treated as two calendar
intervals of different lengths. A harvest date's position inside the
harvest window is mapped linearly onto the planting window:

    planting_span = month_span(planting.start, planting.end)
    harvest_span  = month_span(harvest.start, harvest.end)
    scale         = harvest_span / planting_span
    offset        = clamp(harvest_date - first day of harvest.start, 0, harvest_span)
    sow_date      = first day of planting.start + round(offset / scale)

Harvest dates outside the harvest window clamp to the nearer boundary,
so the result always falls inside the planting window. Both windows are
pinned to the harvest date's year.
"""
import math
from datetime import date, timedelta
from typing import Optional

from sowplan.schemas.plant import MonthRange, Plant, PlantingMethod, PlantingWindows
from sowplan.services.months import MonthRangeError, first_day_of_month, last_day_of_month, month_span
from sowplan.services.planting_window import select_planting_window


def calculate_sow_date(
    harvest_date: date,
    planting_windows: Optional[PlantingWindows],
    harvest_window: Optional[MonthRange],
    planting_method: Optional[PlantingMethod] = None,
) -> Optional[date]:
    """Proportionally mapped sow date, or None when the window data cannot support one."""
    if harvest_window is None or harvest_window.is_blank:
        return None

    planting_window = select_planting_window(planting_windows, planting_method)
    if planting_window is None:
        return None

    year = harvest_date.year
    try:
        planting_span = month_span(planting_window.start, planting_window.end)
        harvest_span = month_span(harvest_window.start, harvest_window.end)
        harvest_start = first_day_of_month(harvest_window.start, year)
        planting_start = first_day_of_month(planting_window.start, year)
        planting_end = last_day_of_month(planting_window.end, year)
    except MonthRangeError:
        return None

    if planting_span == 0:
        return None
    scale = harvest_span / planting_span

    harvest_offset = (harvest_date - harvest_start).days
    clamped_offset = max(0, min(harvest_offset, harvest_span))
    sow_offset = clamped_offset / scale

    sow_date = planting_start + timedelta(days=math.floor(sow_offset + 0.5))
    # A full-span offset lands one day past the window
    return min(sow_date, planting_end)


def calculate_try_anyway_sow_date(harvest_date: date, plant: Plant) -> Optional[date]:
    """
    Backward estimate for off-season attempts.

    Growth time is taken as the distance from the first day of the planting
    window to the first day of the harvest window (floored at zero), counted
    back from the harvest date. Earlier than the proportional date, and only
    realistic with extra effort such as a heated greenhouse.
    """
    harvest_window = plant.harvest_time
    if harvest_window is None or not harvest_window.start.strip():
        return None

    planting_window = select_planting_window(plant.planting_windows, plant.planting_method)
    if planting_window is None:
        return None

    year = harvest_date.year
    try:
        harvest_start = first_day_of_month(harvest_window.start, year)
        planting_start = first_day_of_month(planting_window.start, year)
    except MonthRangeError:
        return None

    maturity_days = max(0, (harvest_start - planting_start).days)
    return harvest_date - timedelta(days=maturity_days)


def calculate_total_days_from_seed(
    planting_windows: Optional[PlantingWindows],
    harvest_window: Optional[MonthRange],
    planting_method: Optional[PlantingMethod] = None,
) -> Optional[int]:
    """Days from the first possible sowing day to the last possible harvest day."""
    if harvest_window is None or harvest_window.is_blank:
        return None

    planting_window = select_planting_window(planting_windows, planting_method)
    if planting_window is None:
        return None

    try:
        return month_span(planting_window.start, harvest_window.end)
    except MonthRangeError:
        return None
