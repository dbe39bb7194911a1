"""
Tiered defaults for per-plant attributes missing from the dataset.

Resolution order for every attribute, stopping at the first hit:
  1. explicit value on the plant record
  2. subcategory table (keyed by the dataset's Swedish subcategory names)
  3. category heuristic, where one exists for the attribute
  4. unresolved: returns None and emits a diagnostic

Diagnostics go to the ``emit`` callable when given, otherwise to this
module's logger. Emission never changes the returned value, and plant
records are never mutated.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from sowplan.schemas.plant import Plant, PlantingMethod, TransplantWindow

logger = logging.getLogger(__name__)


class DiagnosticLevel(str, Enum):
    info = "info"
    warning = "warning"
    error = "error"


@dataclass(frozen=True)
class Diagnostic:
    plant_id: int
    plant_name: str
    subcategory: str
    field: str
    level: DiagnosticLevel
    message: str
    value: Any = None


DiagnosticSink = Callable[[Diagnostic], None]

_LOG_LEVELS = {
    DiagnosticLevel.info: logging.INFO,
    DiagnosticLevel.warning: logging.WARNING,
    DiagnosticLevel.error: logging.ERROR,
}


def log_diagnostic(diagnostic: Diagnostic) -> None:
    logger.log(_LOG_LEVELS[diagnostic.level], "plant %d: %s", diagnostic.plant_id, diagnostic.message)


# ── Subcategory tables ────────────────────────────────────────────────────────

VEGETABLE_CATEGORY = "grönsaker"
LEGUME_SUBCATEGORIES = frozenset({"ärter", "bönor"})

DEFAULT_PLANTING_METHOD_BY_SUBCATEGORY: dict[str, PlantingMethod] = {
    # Frost-sensitive, started indoors
    "tomat": PlantingMethod.indoor,
    "gurka": PlantingMethod.indoor,
    "melon": PlantingMethod.indoor,
    "aubergin": PlantingMethod.indoor,
    "paprika": PlantingMethod.indoor,
    "chili": PlantingMethod.indoor,
    "physalis": PlantingMethod.indoor,
    "pumpa": PlantingMethod.indoor,
    # Direct-sown
    "ärter": PlantingMethod.outdoor,
    "bönor": PlantingMethod.outdoor,
    "sparris": PlantingMethod.outdoor,
}

DEFAULT_HARDENING_DAYS_BY_SUBCATEGORY: dict[str, int] = {
    "tomat": 7,
    "gurka": 7,
    "melon": 7,
    "aubergin": 7,
    "paprika": 7,
    "chili": 7,
    "physalis": 7,
    "pumpa": 7,
    "ärter": 0,
    "bönor": 0,
    "sparris": 0,
}

DEFAULT_FROST_TOLERANT_BY_SUBCATEGORY: dict[str, bool] = {
    "ärter": True,
    "bönor": True,
    "sparris": True,
    "tomat": False,
    "gurka": False,
    "melon": False,
    "aubergin": False,
    "paprika": False,
    "chili": False,
    "physalis": False,
    "pumpa": False,
}

DEFAULT_GERMINATION_TIME_BY_SUBCATEGORY: dict[str, str] = {
    "tomat": "5-15 dagar",
    "gurka": "5-15 dagar",
    "melon": "5-15 dagar",
    "aubergin": "10-30 dagar",
    "paprika": "20-30 dagar",
    "chili": "20-30 dagar",
    "physalis": "10-30 dagar",
    "pumpa": "5-15 dagar",
    "ärter": "5-15 dagar",
    "bönor": "5-15 dagar",
    "sparris": "20-30 dagar",
}

DEFAULT_GERMINATION_TEMPERATURE_BY_SUBCATEGORY: dict[str, str] = {
    "tomat": "22-25 grader",
    "gurka": "ca 25 grader",
    "melon": "ca 25 grader",
    "aubergin": "ca 25 grader",
    "paprika": "ca 25 grader",
    "chili": "ca 25 grader",
    "physalis": "ca 25 grader",
    "pumpa": "ca 25 grader",
    # outdoor soil temperature at sowing
    "ärter": "5-10 grader",
    "bönor": "10-15 grader",
    "sparris": "8 grader",
}

DEFAULT_GROWING_TEMPERATURE_BY_SUBCATEGORY: dict[str, str] = {
    "tomat": "18-20 grader",
    "gurka": "16-20 grader",
    "melon": "20-25 grader",
    "aubergin": "20-25 grader",
    "paprika": "18-22 grader",
    "chili": "18-22 grader",
    "physalis": "18-22 grader",
    "pumpa": "18-22 grader",
    "ärter": "18-20 grader",
    "bönor": "15-20 grader",
    "sparris": "15-20 grader",
}

# Weeks converted to days: 6–8 weeks → 49, 4–5 weeks → 32, 3–4 weeks → 25
DEFAULT_DAYS_INDOOR_GROWTH_BY_SUBCATEGORY: dict[str, int] = {
    "aubergin": 49,
    "chili": 49,
    "paprika": 49,
    "physalis": 49,
    "tomat": 49,
    "gurka": 32,
    "melon": 32,
    "pumpa": 25,
}

FROST_TOLERANT_TRANSPLANT_WINDOW = TransplantWindow(
    description="once frost risk passes", start="april", end="maj",
)
FROST_SENSITIVE_TRANSPLANT_WINDOW = TransplantWindow(
    description="after hardening, once frost risk is over", start="maj", end="juni",
)


# ── Resolution helpers ────────────────────────────────────────────────────────

def _subcategory_key(plant: Plant) -> str:
    return plant.subcategory.strip().lower()


def _emit(
    emit: Optional[DiagnosticSink],
    plant: Plant,
    field: str,
    level: DiagnosticLevel,
    message: str,
    value: Any = None,
) -> None:
    diagnostic = Diagnostic(
        plant_id=plant.id,
        plant_name=plant.name,
        subcategory=plant.subcategory,
        field=field,
        level=level,
        message=message,
        value=value,
    )
    (emit or log_diagnostic)(diagnostic)


def _resolve(
    plant: Plant,
    field: str,
    value: Any,
    table: dict[str, Any],
    emit: Optional[DiagnosticSink],
    category_value: Any = None,
    category_reason: str = "",
    unresolved_level: DiagnosticLevel = DiagnosticLevel.warning,
) -> Any:
    if value is not None:
        return value

    label = f"{plant.name!r} ({plant.subcategory or 'no subcategory'})"

    default = table.get(_subcategory_key(plant))
    if default is not None:
        _emit(emit, plant, field, DiagnosticLevel.info,
              f"Missing {field} for {label}, using subcategory default: {default!r}", default)
        return default

    if category_value is not None:
        _emit(emit, plant, field, DiagnosticLevel.info,
              f"Missing {field} for {label}, using category default: {category_value!r} ({category_reason})",
              category_value)
        return category_value

    _emit(emit, plant, field, unresolved_level,
          f"Missing {field} for {label} and no default available")
    return None


def normalize_temperature(value: Optional[str]) -> Optional[str]:
    """Spell out the unit word: "22-25 gr" → "22-25 grader"."""
    if not value:
        return None
    return " ".join("grader" if word.lower() == "gr" else word for word in value.split(" "))


# ── Resolvers ─────────────────────────────────────────────────────────────────

def resolve_planting_method(
    plant: Plant, emit: Optional[DiagnosticSink] = None
) -> Optional[PlantingMethod]:
    if plant.planting_method is not None:
        return plant.planting_method

    windows = plant.planting_windows
    if windows.indoors is not None and not windows.indoors.is_blank:
        return PlantingMethod.indoor
    if windows.outdoors is not None and not windows.outdoors.is_blank:
        return PlantingMethod.outdoor

    category_value = None
    category_reason = ""
    if plant.category.strip().lower() == VEGETABLE_CATEGORY:
        if _subcategory_key(plant) in LEGUME_SUBCATEGORIES:
            category_value, category_reason = PlantingMethod.outdoor, "legumes are sown directly outdoors"
        else:
            category_value, category_reason = PlantingMethod.indoor, "vegetables are started indoors"

    return _resolve(
        plant, "planting_method", None, DEFAULT_PLANTING_METHOD_BY_SUBCATEGORY, emit,
        category_value=category_value,
        category_reason=category_reason,
        unresolved_level=DiagnosticLevel.error,
    )


def resolve_days_indoor_growth(plant: Plant, emit: Optional[DiagnosticSink] = None) -> Optional[int]:
    """Indoor-growth days; always None (without a diagnostic) for plants not started indoors."""
    method = resolve_planting_method(plant, emit)
    if method != PlantingMethod.indoor:
        if plant.days_indoor_growth is not None:
            _emit(emit, plant, "days_indoor_growth", DiagnosticLevel.info,
                  f"Ignoring days_indoor_growth ({plant.days_indoor_growth}) for {plant.name!r}, "
                  "it is not started indoors")
        return None
    return _resolve(plant, "days_indoor_growth", plant.days_indoor_growth,
                    DEFAULT_DAYS_INDOOR_GROWTH_BY_SUBCATEGORY, emit)


def resolve_hardening_days(plant: Plant, emit: Optional[DiagnosticSink] = None) -> Optional[int]:
    category_value = None
    if plant.hardening_days is None and plant.planting_method == PlantingMethod.outdoor:
        category_value = 0
    return _resolve(
        plant, "hardening_days", plant.hardening_days, DEFAULT_HARDENING_DAYS_BY_SUBCATEGORY, emit,
        category_value=category_value,
        category_reason="direct-sown plants are not hardened off",
    )


def resolve_frost_tolerance(plant: Plant, emit: Optional[DiagnosticSink] = None) -> Optional[bool]:
    return _resolve(plant, "frost_tolerant", plant.frost_tolerant,
                    DEFAULT_FROST_TOLERANT_BY_SUBCATEGORY, emit)


def resolve_germination_time(plant: Plant, emit: Optional[DiagnosticSink] = None) -> Optional[str]:
    return _resolve(plant, "germination_time", plant.germination_time,
                    DEFAULT_GERMINATION_TIME_BY_SUBCATEGORY, emit)


def resolve_germination_temperature(plant: Plant, emit: Optional[DiagnosticSink] = None) -> Optional[str]:
    return _resolve(plant, "germination_temperature", normalize_temperature(plant.germination_temperature),
                    DEFAULT_GERMINATION_TEMPERATURE_BY_SUBCATEGORY, emit)


def resolve_growing_temperature(plant: Plant, emit: Optional[DiagnosticSink] = None) -> Optional[str]:
    return _resolve(plant, "growing_temperature", normalize_temperature(plant.growing_temperature),
                    DEFAULT_GROWING_TEMPERATURE_BY_SUBCATEGORY, emit)


def default_transplant_window(frost_tolerant: Optional[bool]) -> Optional[TransplantWindow]:
    if frost_tolerant is None:
        return None
    return FROST_TOLERANT_TRANSPLANT_WINDOW if frost_tolerant else FROST_SENSITIVE_TRANSPLANT_WINDOW


def resolve_transplant_window(
    plant: Plant, emit: Optional[DiagnosticSink] = None
) -> Optional[TransplantWindow]:
    """
    Window for moving indoor-started plants outside.

    An explicit window with both bounds wins. Otherwise the default follows
    resolved frost tolerance: April–May when frost tolerant, May–June when
    frost sensitive.
    """
    explicit = plant.move_plant_outdoor
    if explicit is not None and not explicit.is_blank:
        return explicit

    frost_tolerant = resolve_frost_tolerance(plant, emit)
    window = default_transplant_window(frost_tolerant)
    if window is not None:
        _emit(emit, plant, "move_plant_outdoor", DiagnosticLevel.info,
              f"Missing move_plant_outdoor for {plant.name!r}, using default "
              f"{window.start}–{window.end} ({window.description})", window)
    else:
        _emit(emit, plant, "move_plant_outdoor", DiagnosticLevel.warning,
              f"Missing move_plant_outdoor for {plant.name!r} and frost tolerance is unknown")
    return window


def resolve_plant(plant: Plant, emit: Optional[DiagnosticSink] = None) -> Plant:
    """Return a copy of ``plant`` with every resolvable attribute filled in."""
    method = resolve_planting_method(plant, emit)
    # Later tiers depend on the method, so resolve against a copy carrying it.
    with_method = plant.model_copy(update={"planting_method": method})
    frost_tolerant = resolve_frost_tolerance(with_method, emit)

    update: dict[str, Any] = {
        "planting_method": method,
        "days_indoor_growth": resolve_days_indoor_growth(with_method, emit),
        "hardening_days": resolve_hardening_days(with_method, emit),
        "frost_tolerant": frost_tolerant,
        "germination_time": resolve_germination_time(with_method, emit),
        "germination_temperature": resolve_germination_temperature(with_method, emit),
        "growing_temperature": resolve_growing_temperature(with_method, emit),
    }
    if method == PlantingMethod.indoor:
        with_frost = with_method.model_copy(update={"frost_tolerant": frost_tolerant})
        update["move_plant_outdoor"] = resolve_transplant_window(with_frost, emit)
    return plant.model_copy(update=update)


def with_resolved_method(plant: Plant, emit: Optional[DiagnosticSink] = None) -> Plant:
    """``plant`` itself when its method is explicit, else a copy carrying the resolved method."""
    if plant.planting_method is not None:
        return plant
    return plant.model_copy(update={"planting_method": resolve_planting_method(plant, emit)})
