"""
Planting window selection and translation of month windows into concrete dates.

A window with either bound blank counts as absent. Concrete windows are
pinned to a caller-supplied year; ranges that cannot be pinned (unknown
month name, year wraparound) come back as None.
"""
from datetime import date, timedelta
from typing import Optional

from sowplan.schemas.plant import MonthRange, Plant, PlantingMethod, PlantingWindows
from sowplan.services.months import MonthRangeError, first_day_of_month, last_day_of_month, month_order
from sowplan.services.plant_defaults import DiagnosticSink, resolve_hardening_days, resolve_transplant_window

DateWindow = tuple[date, date]


def _usable(window: Optional[MonthRange]) -> bool:
    return window is not None and not window.is_blank


def select_planting_window(
    windows: Optional[PlantingWindows],
    planting_method: Optional[PlantingMethod] = None,
) -> Optional[MonthRange]:
    """
    Pick the single window that governs sowing.

    Outdoor plants use the outdoor window only. Indoor plants, and plants
    with no method, prefer the indoor window and fall back to the outdoor one.
    """
    if windows is None:
        return None

    if planting_method == PlantingMethod.outdoor:
        return windows.outdoors if _usable(windows.outdoors) else None

    if _usable(windows.indoors):
        return windows.indoors
    if _usable(windows.outdoors):
        return windows.outdoors
    return None


def month_range_dates(month_range: Optional[MonthRange], year: int) -> Optional[DateWindow]:
    """First day of ``start`` to last day of ``end`` in ``year``."""
    if not _usable(month_range):
        return None
    try:
        if month_order(month_range.end) < month_order(month_range.start):
            return None
        return first_day_of_month(month_range.start, year), last_day_of_month(month_range.end, year)
    except MonthRangeError:
        return None


def get_harvest_window_dates(harvest_time: Optional[MonthRange], year: int) -> Optional[DateWindow]:
    return month_range_dates(harvest_time, year)


def get_planting_window_dates(plant: Plant, year: int) -> Optional[DateWindow]:
    window = select_planting_window(plant.planting_windows, plant.planting_method)
    return month_range_dates(window, year)


def get_transplant_window_dates(
    plant: Plant, year: int, emit: Optional[DiagnosticSink] = None
) -> Optional[DateWindow]:
    """Window for moving an indoor-started plant outside; None for other plants."""
    if plant.planting_method != PlantingMethod.indoor:
        return None
    return month_range_dates(resolve_transplant_window(plant, emit), year)


def get_hardening_window_dates(
    plant: Plant, year: int, emit: Optional[DiagnosticSink] = None
) -> Optional[DateWindow]:
    """
    Valid interval for starting hardening: the transplant window, opened
    ``hardening_days`` earlier so hardening can finish as the window opens.
    """
    transplant = get_transplant_window_dates(plant, year, emit)
    if transplant is None:
        return None
    hardening_days = resolve_hardening_days(plant, emit) or 0
    start, end = transplant
    return start - timedelta(days=hardening_days), end
