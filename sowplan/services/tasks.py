from sowplan.schemas.plant import Plant
from sowplan.schemas.planner import Recommendation, Task, TaskType
from sowplan.services.months import parse_iso_date

TASK_LABELS: dict[TaskType, str] = {
    TaskType.sow_outdoor: "Sow outdoors",
    TaskType.sow_indoor: "Sow indoors",
    TaskType.harden_start: "Start hardening",
    TaskType.move_plant_outdoor: "Move outdoors",
    TaskType.harvest: "Harvest",
}


def recommendations_to_tasks(recommendations: list[Recommendation], plants: list[Plant]) -> list[Task]:
    """
    Flatten recommendations into dated calendar tasks, earliest first.

    Recommendations for unknown plants and dates that do not parse are skipped.
    Tasks on the same day keep schedule order (sow, harden, move, harvest).
    """
    plants_by_id = {plant.id: plant for plant in plants}
    dated: list[tuple] = []

    for recommendation in recommendations:
        plant = plants_by_id.get(recommendation.plant_id)
        if plant is None:
            continue

        entries = [
            (TaskType.sow_outdoor, recommendation.outdoor_sow_date),
            (TaskType.sow_indoor, recommendation.indoor_sow_date),
            (TaskType.harden_start, recommendation.harden_start_date),
            (TaskType.move_plant_outdoor, recommendation.move_plant_outdoor_date),
            (TaskType.harvest, recommendation.harvest_date_iso),
        ]
        for task_type, date_iso in entries:
            if not date_iso:
                continue
            try:
                when = parse_iso_date(date_iso)
            except ValueError:
                continue
            task = Task(
                type=task_type,
                date=when.isoformat(),
                plant_id=plant.id,
                plant_name=plant.name,
                label=f"{TASK_LABELS[task_type]} {plant.name}".strip(),
            )
            dated.append((when, len(dated), task))

    dated.sort(key=lambda entry: (entry[0], entry[1]))
    return [task for _, _, task in dated]
