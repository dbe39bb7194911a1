"""
Per-plant planting schedules for a desired harvest date.

Never raises: missing data turns into null dates plus a warning string on
the Recommendation. Output depends only on the plant list and the harvest
date, not on the current date.
"""
import logging
from datetime import date, timedelta
from typing import Optional

from sowplan.schemas.plant import Plant, PlantingMethod
from sowplan.schemas.planner import Recommendation
from sowplan.services.months import parse_iso_date
from sowplan.services.plant_defaults import (
    DiagnosticSink,
    resolve_days_indoor_growth,
    resolve_hardening_days,
    with_resolved_method,
)
from sowplan.services.sow_date import calculate_sow_date

logger = logging.getLogger(__name__)

INVALID_HARVEST_DATE = "Invalid harvest date"
MISSING_WINDOW_DATA = "Could not calculate sow date (missing planting window or harvest window)"
MISSING_INDOOR_GROWTH = "Missing data for number of days of indoor growth"
MISSING_HARDENING_DAYS = "Missing data for number of hardening days, assuming 0"
HARDENING_EXCEEDS_INDOOR_GROWTH = "Hardening days exceed days of indoor growth, hardening starts on the sow date"
UNKNOWN_PLANTING_METHOD = "Unknown planting method, cannot choose between indoor and outdoor sowing"


def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _outdoor_recommendation(plant: Plant, harvest_date: date, harvest_date_iso: str) -> Recommendation:
    warnings: list[str] = []
    sow_date = calculate_sow_date(
        harvest_date, plant.planting_windows, plant.harvest_time, PlantingMethod.outdoor
    )
    if sow_date is None:
        warnings.append(MISSING_WINDOW_DATA)

    return Recommendation(
        plant_id=plant.id,
        outdoor_sow_date=_iso(sow_date),
        harvest_date_iso=harvest_date_iso,
        warnings=warnings,
    )


def _indoor_recommendation(
    plant: Plant,
    harvest_date: date,
    harvest_date_iso: str,
    emit: Optional[DiagnosticSink],
) -> Recommendation:
    warnings: list[str] = []
    sow_date = calculate_sow_date(
        harvest_date, plant.planting_windows, plant.harvest_time, PlantingMethod.indoor
    )
    if sow_date is None:
        warnings.append(MISSING_WINDOW_DATA)
        return Recommendation(plant_id=plant.id, harvest_date_iso=harvest_date_iso, warnings=warnings)

    days_indoor_growth = resolve_days_indoor_growth(plant, emit)
    if days_indoor_growth is None:
        warnings.append(MISSING_INDOOR_GROWTH)
        return Recommendation(
            plant_id=plant.id,
            indoor_sow_date=_iso(sow_date),
            harvest_date_iso=harvest_date_iso,
            warnings=warnings,
        )

    hardening_days = resolve_hardening_days(plant, emit)
    if hardening_days is None:
        warnings.append(MISSING_HARDENING_DAYS)
        hardening_days = 0
    # Hardening happens during the final days indoors, never before sowing.
    if hardening_days > days_indoor_growth:
        warnings.append(HARDENING_EXCEEDS_INDOOR_GROWTH)
        hardening_days = days_indoor_growth

    move_outdoor_date = sow_date + timedelta(days=days_indoor_growth)
    harden_start_date = move_outdoor_date - timedelta(days=hardening_days)

    return Recommendation(
        plant_id=plant.id,
        indoor_sow_date=_iso(sow_date),
        harden_start_date=_iso(harden_start_date),
        move_plant_outdoor_date=_iso(move_outdoor_date),
        harvest_date_iso=harvest_date_iso,
        warnings=warnings,
    )


def generate_recommendation(
    plant: Plant,
    harvest_date: date,
    harvest_date_iso: str,
    emit: Optional[DiagnosticSink] = None,
) -> Recommendation:
    plant = with_resolved_method(plant, emit)
    method = plant.planting_method

    if method == PlantingMethod.outdoor:
        return _outdoor_recommendation(plant, harvest_date, harvest_date_iso)
    elif method == PlantingMethod.indoor:
        return _indoor_recommendation(plant, harvest_date, harvest_date_iso, emit)
    else:
        return Recommendation(
            plant_id=plant.id,
            harvest_date_iso=harvest_date_iso,
            warnings=[UNKNOWN_PLANTING_METHOD],
        )


def generate_recommendations(
    plants: list[Plant],
    harvest_date_iso: str,
    emit: Optional[DiagnosticSink] = None,
) -> list[Recommendation]:
    """One Recommendation per plant, in input order."""
    try:
        harvest_date = parse_iso_date(harvest_date_iso)
    except ValueError:
        logger.info("generate_recommendations: invalid harvest date %r", harvest_date_iso)
        return [
            Recommendation(
                plant_id=plant.id,
                harvest_date_iso=harvest_date_iso if isinstance(harvest_date_iso, str) else "",
                warnings=[INVALID_HARVEST_DATE],
            )
            for plant in plants
        ]

    return [generate_recommendation(plant, harvest_date, harvest_date_iso, emit) for plant in plants]
