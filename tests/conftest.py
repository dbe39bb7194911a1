from datetime import date

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from sowplan.main import app
from sowplan.schemas.plant import MonthRange, Plant, PlantingMethod, PlantingWindows

# Pinned "today" for date-dependent service tests
TODAY = date(2026, 1, 10)


def make_plant(**overrides) -> Plant:
    fields = dict(
        id=1,
        name="Black Cherry",
        category="grönsaker",
        subcategory="tomat",
        planting_method=PlantingMethod.indoor,
        planting_windows=PlantingWindows(
            indoors=MonthRange(start="mars", end="april"),
            outdoors=MonthRange(),
        ),
        harvest_time=MonthRange(start="juli", end="sept"),
        days_indoor_growth=49,
        hardening_days=7,
        frost_tolerant=False,
    )
    fields.update(overrides)
    return Plant(**fields)


@pytest.fixture
def tomato() -> Plant:
    return make_plant()


@pytest.fixture
def peas() -> Plant:
    return make_plant(
        id=2,
        name="Sugar Snap",
        subcategory="ärter",
        planting_method=PlantingMethod.outdoor,
        planting_windows=PlantingWindows(
            indoors=MonthRange(),
            outdoors=MonthRange(start="april", end="maj"),
        ),
        harvest_time=MonthRange(start="juli", end="aug"),
        days_indoor_growth=None,
        hardening_days=None,
        frost_tolerant=True,
    )


@pytest_asyncio.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
