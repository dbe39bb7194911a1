"""
Re-validation of a finished Recommendation against the plant's windows.

  sow dates              planting window
  hardening start        hardening window (transplant window opened
                         hardening_days early), indoor plants only
  move outdoors          transplant window, indoor plants only
  harvest date           harvest window

Indoor plants whose transplant window cannot be resolved fall back to the
planting window for the hardening and move-outdoors checks. Windows are
pinned to the harvest date's year. A date that does not parse is skipped;
the remaining checks still run.
"""
import logging
from datetime import date
from typing import Optional

from sowplan.schemas.plant import Plant
from sowplan.schemas.planner import DateType, PlantWarning, Recommendation, WarningType
from sowplan.services.months import parse_iso_date
from sowplan.services.plant_defaults import DiagnosticSink, with_resolved_method
from sowplan.services.planting_window import (
    DateWindow,
    get_hardening_window_dates,
    get_harvest_window_dates,
    get_planting_window_dates,
    get_transplant_window_dates,
)

logger = logging.getLogger(__name__)

_DATE_LABELS: dict[DateType, str] = {
    DateType.outdoor_sow_date: "Outdoor sow date",
    DateType.indoor_sow_date: "Indoor sow date",
    DateType.harden_start_date: "Hardening start date",
    DateType.move_plant_outdoor_date: "Move outdoors date",
    DateType.harvest: "Harvest date",
}

_WINDOW_LABELS: dict[DateType, str] = {
    DateType.outdoor_sow_date: "sowing window",
    DateType.indoor_sow_date: "sowing window",
    DateType.harden_start_date: "hardening window",
    DateType.move_plant_outdoor_date: "transplant window",
    DateType.harvest: "harvest window",
}


def _outside(value: date, window: Optional[DateWindow]) -> Optional[WarningType]:
    if window is None:
        return None
    start, end = window
    if value < start:
        return WarningType.too_early
    if value > end:
        return WarningType.too_late
    return None


def _check(
    plant: Plant,
    recommendation: Recommendation,
    date_iso: Optional[str],
    date_type: DateType,
    window_for_year,
    fallback_year: Optional[int],
) -> Optional[PlantWarning]:
    if not date_iso:
        return None
    try:
        value = parse_iso_date(date_iso)
    except ValueError:
        logger.debug("get_plant_warnings: skipping unparseable %s %r", date_type.value, date_iso)
        return None

    warning_type = _outside(value, window_for_year(fallback_year or value.year))
    if warning_type is None:
        return None

    name = plant.name or f"plant {plant.id}"
    return PlantWarning(
        plant_id=recommendation.plant_id,
        plant_name=plant.name,
        warning_type=warning_type,
        message=f"{_DATE_LABELS[date_type]} ({date_iso}) is outside the optimal {_WINDOW_LABELS[date_type]} for {name}",
        date=date_iso,
        date_type=date_type,
    )


def get_plant_warnings(
    recommendation: Recommendation,
    plant: Plant,
    emit: Optional[DiagnosticSink] = None,
) -> list[PlantWarning]:
    plant = with_resolved_method(plant, emit)

    try:
        year: Optional[int] = parse_iso_date(recommendation.harvest_date_iso).year
    except ValueError:
        year = None

    def planting(y: int) -> Optional[DateWindow]:
        return get_planting_window_dates(plant, y)

    def hardening(y: int) -> Optional[DateWindow]:
        return get_hardening_window_dates(plant, y, emit) or planting(y)

    def transplant(y: int) -> Optional[DateWindow]:
        return get_transplant_window_dates(plant, y, emit) or planting(y)

    def harvest(y: int) -> Optional[DateWindow]:
        return get_harvest_window_dates(plant.harvest_time, y)

    checks = [
        (recommendation.outdoor_sow_date, DateType.outdoor_sow_date, planting),
        (recommendation.indoor_sow_date, DateType.indoor_sow_date, planting),
        (recommendation.harden_start_date, DateType.harden_start_date, hardening),
        (recommendation.move_plant_outdoor_date, DateType.move_plant_outdoor_date, transplant),
        (recommendation.harvest_date_iso, DateType.harvest, harvest),
    ]

    warnings: list[PlantWarning] = []
    for date_iso, date_type, window_for_year in checks:
        warning = _check(plant, recommendation, date_iso, date_type, window_for_year, year)
        if warning is not None:
            warnings.append(warning)
    return warnings
