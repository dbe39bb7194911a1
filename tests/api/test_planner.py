from httpx import AsyncClient

from sowplan.core.config import settings

TOMATO = {
    "id": 1,
    "name": "Black Cherry",
    "category": "grönsaker",
    "subcategory": "tomat",
    "planting_method": "indoor",
    "planting_windows": {"indoors": {"start": "mars", "end": "april"}, "outdoors": {"start": "", "end": ""}},
    "harvest_time": {"start": "juli", "end": "sept"},
    "days_indoor_growth": 49,
    "hardening_days": 7,
    "frost_tolerant": False,
}

PEAS = {
    "id": 2,
    "name": "Sugar Snap",
    "category": "grönsaker",
    "subcategory": "ärter",
    "planting_windows": {"outdoors": {"start": "april", "end": "maj"}},
    "harvest_time": {"start": "juli", "end": "aug"},
}


async def test_health(client: AsyncClient):
    res = await client.get("/api/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok"}


async def test_recommendations(client: AsyncClient):
    res = await client.post(
        "/api/v1/planner/recommendations",
        json={"harvest_date": "2099-07-15", "plants": [TOMATO, PEAS]},
    )
    assert res.status_code == 200
    tomato, peas = res.json()
    assert tomato["plant_id"] == 1
    assert tomato["indoor_sow_date"] == "2099-03-10"
    assert tomato["harden_start_date"] == "2099-04-21"
    assert tomato["move_plant_outdoor_date"] == "2099-04-28"
    assert tomato["warnings"] == []
    assert peas["outdoor_sow_date"] is not None
    assert peas["indoor_sow_date"] is None


async def test_recommendations_invalid_date(client: AsyncClient):
    res = await client.post(
        "/api/v1/planner/recommendations",
        json={"harvest_date": "someday", "plants": [TOMATO]},
    )
    assert res.status_code == 200
    assert res.json()[0]["warnings"] == ["Invalid harvest date"]


async def test_recommendations_reject_invalid_plant(client: AsyncClient):
    bad = {**TOMATO, "days_indoor_growth": -3}
    res = await client.post(
        "/api/v1/planner/recommendations",
        json={"harvest_date": "2099-07-15", "plants": [bad]},
    )
    assert res.status_code == 422


async def test_too_many_plants(client: AsyncClient):
    plants = [{**TOMATO, "id": i} for i in range(settings.MAX_PLANTS_PER_REQUEST + 1)]
    res = await client.post(
        "/api/v1/planner/recommendations",
        json={"harvest_date": "2099-07-15", "plants": plants},
    )
    assert res.status_code == 422


async def test_sow_results(client: AsyncClient):
    res = await client.post(
        "/api/v1/planner/sow-results",
        json={"harvest_date": "2099-07-15", "plants": [TOMATO]},
    )
    assert res.status_code == 200
    [item] = res.json()
    assert item["plant_id"] == 1
    assert item["result"]["key"] == "harvestDate"
    assert item["result"]["sow_date_iso"] == "2099-03-10"


async def test_sow_results_past_date(client: AsyncClient):
    res = await client.post(
        "/api/v1/planner/sow-results",
        json={"harvest_date": "2000-01-01", "plants": [TOMATO]},
    )
    assert res.status_code == 200
    assert res.json()[0]["result"]["key"] == "harvestDateInPast"


async def test_warnings(client: AsyncClient):
    res = await client.post(
        "/api/v1/planner/warnings",
        json={"harvest_date": "2099-07-15", "plants": [TOMATO]},
    )
    assert res.status_code == 200
    data = res.json()
    assert [(w["date_type"], w["warning_type"]) for w in data] == [
        ("hardenStartDate", "too-early"),
        ("movePlantOutdoorDate", "too-early"),
    ]


async def test_tasks(client: AsyncClient):
    res = await client.post(
        "/api/v1/planner/tasks",
        json={"harvest_date": "2099-07-15", "plants": [TOMATO, PEAS]},
    )
    assert res.status_code == 200
    data = res.json()
    assert [t["date"] for t in data] == sorted(t["date"] for t in data)
    assert data[0] == {
        "type": "sow-indoor",
        "date": "2099-03-10",
        "plant_id": 1,
        "plant_name": "Black Cherry",
        "label": "Sow indoors Black Cherry",
    }


async def test_validate_harvest_date(client: AsyncClient):
    res = await client.get("/api/v1/planner/harvest-date/validate", params={"harvest_date": "2099-07-15"})
    assert res.json() == {"is_valid": True, "error": None}

    res = await client.get("/api/v1/planner/harvest-date/validate", params={"harvest_date": "2000-01-01"})
    assert res.json()["error"] == "The harvest date cannot be in the past. Choose a valid date"

    res = await client.get("/api/v1/planner/harvest-date/validate")
    assert res.json() == {"is_valid": False, "error": None}


async def test_resolve_plant(client: AsyncClient):
    res = await client.post("/api/v1/planner/plants/2/resolve", json={"plants": [TOMATO, PEAS]})
    assert res.status_code == 200
    data = res.json()
    assert data["plant"]["planting_method"] == "outdoor"
    assert data["plant"]["frost_tolerant"] is True
    assert data["plant"]["hardening_days"] == 0
    assert data["germination_days"] == 10
    fields = {d["field"] for d in data["diagnostics"]}
    assert {"frost_tolerant", "hardening_days", "germination_time"} <= fields
    assert all(d["plant_id"] == 2 for d in data["diagnostics"])


async def test_resolve_unknown_plant(client: AsyncClient):
    res = await client.post("/api/v1/planner/plants/42/resolve", json={"plants": [TOMATO]})
    assert res.status_code == 404
