from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class PlantingMethod(str, Enum):
    indoor = "indoor"
    outdoor = "outdoor"


class MonthRange(BaseModel):
    """A recurring, year-agnostic month interval such as ``{"start": "mars", "end": "april"}``."""

    start: str = ""
    end: str = ""

    model_config = {"frozen": True}

    @property
    def is_blank(self) -> bool:
        return not self.start.strip() or not self.end.strip()


class PlantingWindows(BaseModel):
    indoors: Optional[MonthRange] = None
    outdoors: Optional[MonthRange] = None

    model_config = {"frozen": True}


class TransplantWindow(MonthRange):
    description: str = ""


class Plant(BaseModel):
    id: int
    name: str = ""
    category: str = ""
    subcategory: str = ""
    planting_method: Optional[PlantingMethod] = None
    planting_windows: PlantingWindows = PlantingWindows()
    harvest_time: Optional[MonthRange] = None

    days_indoor_growth: Optional[int] = Field(default=None, ge=0)
    hardening_days: Optional[int] = Field(default=None, ge=0)
    frost_tolerant: Optional[bool] = None
    move_plant_outdoor: Optional[TransplantWindow] = None

    # Germination / growing
    germination_time: Optional[str] = None
    germination_temperature: Optional[str] = None
    growing_temperature: Optional[str] = None

    model_config = {"frozen": True}
