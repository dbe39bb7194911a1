"""
Classification of a chosen harvest date for a single plant.

Result keys:
  harvestDate                     inside the harvest window with enough time to mature
  harvestDateInPast               today or earlier
  harvestToClose                  not enough time left to mature
  harvestDateBeforeHarvestWindow  earlier than the harvest window
  harvestDateAfterHarvestWindow   later than the harvest window

Two maturity baselines are used. The strict one measures from the end of
the planting window to the start of the harvest window. The "try anyway"
one measures from the start of the planting window, and comes with a
backward-computed sow date for gardeners willing to use a heated
greenhouse or similar.

Returns None (never raises) when the plant lacks the window data to say
anything.
"""
import logging
from datetime import date
from typing import Optional

from sowplan.schemas.plant import Plant, PlantingMethod
from sowplan.schemas.planner import HarvestDateValidation, Recommendation, SowResult, SowResultKey
from sowplan.services.months import parse_iso_date, shift_years
from sowplan.services.plant_defaults import DiagnosticSink, with_resolved_method
from sowplan.services.planting_window import get_harvest_window_dates, get_planting_window_dates
from sowplan.services.sow_date import calculate_sow_date, calculate_try_anyway_sow_date

logger = logging.getLogger(__name__)

INVALID_HARVEST_DATE = "Invalid harvest date"
HARVEST_DATE_IN_PAST = "The harvest date cannot be in the past. Choose a valid date"

_INDOOR_ADVICE = "You would need something like a heated greenhouse to succeed."
_OUTDOOR_ADVICE = "Keep an eye on frost forecasts or use a greenhouse."


def validate_harvest_date(harvest_date_iso: Optional[str], today: Optional[date] = None) -> HarvestDateValidation:
    """
    Basic input check for the harvest date field.

    Empty input is invalid but carries no error, so nothing is shown before
    the user has picked a date.
    """
    if not harvest_date_iso or not harvest_date_iso.strip():
        return HarvestDateValidation(is_valid=False, error=None)

    try:
        harvest_date = parse_iso_date(harvest_date_iso)
    except ValueError:
        return HarvestDateValidation(is_valid=False, error=INVALID_HARVEST_DATE)

    if harvest_date <= (today or date.today()):
        return HarvestDateValidation(is_valid=False, error=HARVEST_DATE_IN_PAST)
    return HarvestDateValidation(is_valid=True, error=None)


def nearest_sow_date(plant: Plant, today: date) -> date:
    """The next day sowing is possible: today, this year's window start, or next year's."""
    window = get_planting_window_dates(plant, today.year)
    if window is None:
        return today

    start, end = window
    if today < start:
        return start
    if today <= end:
        return today

    next_year = get_planting_window_dates(plant, today.year + 1)
    return next_year[0] if next_year is not None else start


def _advice(plant: Plant) -> str:
    return _INDOOR_ADVICE if plant.planting_method == PlantingMethod.indoor else _OUTDOOR_ADVICE


def get_plant_sow_result(
    harvest_date_iso: Optional[str],
    plant: Plant,
    today: Optional[date] = None,
    emit: Optional[DiagnosticSink] = None,
) -> Optional[SowResult]:
    if not harvest_date_iso or not harvest_date_iso.strip():
        return None
    try:
        harvest_date = parse_iso_date(harvest_date_iso)
    except ValueError:
        return None

    today = today or date.today()
    if harvest_date <= today:
        return SowResult(key=SowResultKey.harvest_date_in_past, message=HARVEST_DATE_IN_PAST, sow_date_iso=None)

    plant = with_resolved_method(plant, emit)
    sow_date = calculate_sow_date(harvest_date, plant.planting_windows, plant.harvest_time, plant.planting_method)
    if sow_date is None:
        return None
    sow_iso = sow_date.isoformat()

    harvest_window = get_harvest_window_dates(plant.harvest_time, harvest_date.year)
    planting_window = get_planting_window_dates(plant, harvest_date.year)
    if harvest_window is None or planting_window is None:
        return None
    window_start, window_end = harvest_window
    planting_start, planting_end = planting_window

    is_before = harvest_date < window_start
    is_after = harvest_date > window_end
    is_within = not is_before and not is_after

    days_to_harvest = (harvest_date - sow_date).days

    # Strict: not enough time even when sown at the very end of the planting window.
    min_maturity_days = max(0, (window_start - planting_end).days)
    too_close = sow_date < today or days_to_harvest < min_maturity_days

    # Lenient: measured from the start of the planting window.
    sow_in_window = planting_start <= sow_date <= planting_end
    try_anyway_days = max(0, (window_start - planting_start).days)
    too_close_try_anyway = days_to_harvest < try_anyway_days and (
        not is_within or not sow_in_window or sow_date < today
    )

    if is_within and not too_close and not too_close_try_anyway:
        return SowResult(key=SowResultKey.harvest_date, message=f"Sow on {sow_iso}", sow_date_iso=sow_iso)

    name = plant.name or "this plant"
    try_anyway_date = calculate_try_anyway_sow_date(harvest_date, plant) if too_close_try_anyway else None
    too_late_this_year = try_anyway_date is not None and try_anyway_date < today
    messages: list[str] = []

    # Once the try-anyway date has passed, only the nearest sow date is offered.
    if not too_late_this_year:
        if is_before:
            messages.append(
                f"The chosen harvest date is before the harvest window for {name}. "
                f"We recommend choosing a later harvest date. Recommended sow date: {sow_iso}."
            )
        elif is_after:
            messages.append(
                f"The chosen harvest date is after the harvest window for {name}. "
                f"We recommend choosing an earlier harvest date. Recommended sow date: {sow_iso}."
            )

    if too_close and not too_late_this_year:
        if is_within:
            messages.append(
                f"The chosen date ({harvest_date_iso}) is too close in time for {name} to mature. "
                f"Nearest recommended sow date: {sow_iso}. {_advice(plant)}"
            )
        else:
            messages.append(
                f"There is also too little time left for {name} to mature by {harvest_date_iso}, "
                f"even when sowing on {sow_iso}. {_advice(plant)}"
            )

    if try_anyway_date is not None:
        if not too_late_this_year:
            messages.append(
                f"If you still want to try for {harvest_date_iso}, sow on {try_anyway_date.isoformat()}. "
                f"That date is based only on the time {name} needs to mature. {_advice(plant)}"
            )
        else:
            nearest = nearest_sow_date(plant, today).isoformat()
            next_year = shift_years(try_anyway_date, 1).isoformat()
            messages.append(
                f"The chosen date ({harvest_date_iso}) is too close in time to mature. "
                f"Nearest recommended sow date for a harvest this year: {nearest}.\n"
                f"To try for the same date another year, sow on {next_year}. {_advice(plant)}"
            )
            return SowResult(key=SowResultKey.harvest_too_close, message="\n".join(messages), sow_date_iso=nearest)

    if is_within:
        key = SowResultKey.harvest_too_close
    elif is_before:
        key = SowResultKey.before_harvest_window
    else:
        key = SowResultKey.after_harvest_window

    return SowResult(key=key, message="\n".join(messages), sow_date_iso=sow_iso)


def get_plant_sow_results(
    recommendations: list[Recommendation],
    plants: list[Plant],
    today: Optional[date] = None,
    emit: Optional[DiagnosticSink] = None,
) -> dict[int, SowResult]:
    """SowResult per plant id, for each recommendation whose plant is known."""
    plants_by_id = {plant.id: plant for plant in plants}
    results: dict[int, SowResult] = {}
    for recommendation in recommendations:
        plant = plants_by_id.get(recommendation.plant_id)
        if plant is None:
            logger.debug("get_plant_sow_results: unknown plant %d", recommendation.plant_id)
            continue
        result = get_plant_sow_result(recommendation.harvest_date_iso, plant, today, emit)
        if result is not None:
            results[plant.id] = result
    return results
