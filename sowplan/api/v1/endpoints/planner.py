from datetime import date

from fastapi import APIRouter, HTTPException, Query, status

from sowplan.core.config import settings
from sowplan.schemas.planner import (
    DiagnosticRead,
    HarvestDateValidation,
    PlanRequest,
    PlantListRequest,
    PlantSowResultItem,
    PlantWarning,
    Recommendation,
    ResolvedPlantResponse,
    Task,
)
from sowplan.services.germination import parse_germination_time
from sowplan.services.plant_defaults import Diagnostic, resolve_plant
from sowplan.services.recommendations import generate_recommendations
from sowplan.services.sow_result import get_plant_sow_result, validate_harvest_date
from sowplan.services.tasks import recommendations_to_tasks
from sowplan.services.warnings import get_plant_warnings

router = APIRouter(prefix="/planner", tags=["planner"])


def _check_batch_size(plants: list) -> None:
    if len(plants) > settings.MAX_PLANTS_PER_REQUEST:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"At most {settings.MAX_PLANTS_PER_REQUEST} plants per request",
        )


@router.post("/recommendations", response_model=list[Recommendation])
async def plan_recommendations(body: PlanRequest):
    _check_batch_size(body.plants)
    return generate_recommendations(body.plants, body.harvest_date)


@router.post("/sow-results", response_model=list[PlantSowResultItem])
async def plan_sow_results(body: PlanRequest):
    _check_batch_size(body.plants)
    today = date.today()
    return [
        PlantSowResultItem(plant_id=plant.id, result=get_plant_sow_result(body.harvest_date, plant, today))
        for plant in body.plants
    ]


@router.post("/warnings", response_model=list[PlantWarning])
async def plan_warnings(body: PlanRequest):
    _check_batch_size(body.plants)
    recommendations = generate_recommendations(body.plants, body.harvest_date)
    warnings: list[PlantWarning] = []
    for plant, recommendation in zip(body.plants, recommendations):
        warnings.extend(get_plant_warnings(recommendation, plant))
    return warnings


@router.post("/tasks", response_model=list[Task])
async def plan_tasks(body: PlanRequest):
    _check_batch_size(body.plants)
    recommendations = generate_recommendations(body.plants, body.harvest_date)
    return recommendations_to_tasks(recommendations, body.plants)


@router.get("/harvest-date/validate", response_model=HarvestDateValidation)
async def validate_harvest_date_endpoint(harvest_date: str = Query("")):
    return validate_harvest_date(harvest_date)


@router.post("/plants/{plant_id}/resolve", response_model=ResolvedPlantResponse)
async def resolve_plant_defaults(plant_id: int, body: PlantListRequest):
    plant = next((p for p in body.plants if p.id == plant_id), None)
    if plant is None:
        raise HTTPException(status_code=404, detail="Plant not found")

    diagnostics: list[Diagnostic] = []
    resolved = resolve_plant(plant, diagnostics.append)
    return ResolvedPlantResponse(
        plant=resolved,
        germination_days=parse_germination_time(resolved.germination_time),
        diagnostics=[
            DiagnosticRead(plant_id=d.plant_id, field=d.field, level=d.level.value, message=d.message)
            for d in diagnostics
        ],
    )
