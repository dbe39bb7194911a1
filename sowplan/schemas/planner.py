from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from sowplan.schemas.plant import Plant


class SowResultKey(str, Enum):
    harvest_date = "harvestDate"
    harvest_date_in_past = "harvestDateInPast"
    harvest_too_close = "harvestToClose"
    before_harvest_window = "harvestDateBeforeHarvestWindow"
    after_harvest_window = "harvestDateAfterHarvestWindow"


class WarningType(str, Enum):
    outside_planting_window = "outside-planting-window"
    too_early = "too-early"
    too_late = "too-late"


class DateType(str, Enum):
    outdoor_sow_date = "outdoorSowDate"
    indoor_sow_date = "indoorSowDate"
    harden_start_date = "hardenStartDate"
    move_plant_outdoor_date = "movePlantOutdoorDate"
    harvest = "harvest"


class TaskType(str, Enum):
    sow_outdoor = "sow-outdoor"
    sow_indoor = "sow-indoor"
    harden_start = "harden-start"
    move_plant_outdoor = "move-plant-outdoor"
    harvest = "harvest"


class Recommendation(BaseModel):
    plant_id: int
    # Outdoor path
    outdoor_sow_date: Optional[str] = None
    # Indoor path
    indoor_sow_date: Optional[str] = None
    harden_start_date: Optional[str] = None
    move_plant_outdoor_date: Optional[str] = None
    harvest_date_iso: str
    warnings: list[str] = []

    model_config = {"frozen": True}


class SowResult(BaseModel):
    key: SowResultKey
    message: str
    sow_date_iso: Optional[str] = None

    model_config = {"frozen": True}


class PlantWarning(BaseModel):
    plant_id: int
    plant_name: str = ""
    warning_type: WarningType
    message: str
    date: str
    date_type: DateType

    model_config = {"frozen": True}


class Task(BaseModel):
    type: TaskType
    date: str
    plant_id: int
    plant_name: str
    label: str

    model_config = {"frozen": True}


class HarvestDateValidation(BaseModel):
    is_valid: bool
    error: Optional[str] = None


# ── Request / response bodies ─────────────────────────────────────────────────


class PlanRequest(BaseModel):
    harvest_date: str
    plants: list[Plant] = Field(default_factory=list)


class PlantListRequest(BaseModel):
    plants: list[Plant] = Field(default_factory=list)


class PlantSowResultItem(BaseModel):
    plant_id: int
    result: Optional[SowResult] = None


class DiagnosticRead(BaseModel):
    plant_id: int
    field: str
    level: str
    message: str


class ResolvedPlantResponse(BaseModel):
    plant: Plant
    germination_days: Optional[int] = None
    diagnostics: list[DiagnosticRead]
