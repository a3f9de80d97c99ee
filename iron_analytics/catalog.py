"""
Iron Analytics — Exercise Catalog

Read-only lookup from exercise uuid to its definition. Definitions are
plain dicts: {uuid, title, primary, secondary, alias?, equipment?}.
Muscle names are anatomical ("quadriceps", "deltoid", ...) and are mapped
to the six canonical groups through config.MUSCLE_GROUP_NAMES.
"""
import json
from pathlib import Path

from iron_analytics.config import (
    COMMON_MUSCLE_NAMES,
    UNKNOWN_EXERCISE_TITLE,
    get_muscle_group,
)


def build_catalog(exercises: list[dict]) -> dict:
    """Index exercise definitions by uuid. Later duplicates win."""
    catalog = {}
    for ex in exercises:
        uuid = str(ex["uuid"])
        catalog[uuid] = {
            "uuid": uuid,
            "title": ex.get("title", UNKNOWN_EXERCISE_TITLE),
            "primary": list(ex.get("primary", [])),
            "secondary": list(ex.get("secondary", [])),
            "alias": list(ex.get("alias", [])),
            "equipment": list(ex.get("equipment", [])),
        }
    return catalog


def load_catalog(path) -> dict:
    """Load a JSON list of exercise definitions (bundled catalog format)."""
    with Path(path).open("r", encoding="utf-8") as handle:
        data = json.load(handle)
    if isinstance(data, dict):
        data = data.get("exercises", [])
    return build_catalog(data)


def find_exercise(catalog: dict, uuid) -> dict | None:
    if uuid is None:
        return None
    return catalog.get(str(uuid))


def exercise_title(catalog: dict, uuid) -> str:
    ex = find_exercise(catalog, uuid)
    return ex["title"] if ex else UNKNOWN_EXERCISE_TITLE


def _groups(muscles: list[str]) -> list[str]:
    """Group of each listed muscle; repeats kept, unmapped muscles dropped."""
    return [group for group in map(get_muscle_group, muscles) if group]


def primary_groups(exercise: dict) -> list[str]:
    """One canonical group per primary muscle, in listed order."""
    return _groups(exercise.get("primary", []))


def secondary_groups(exercise: dict) -> list[str]:
    return _groups(exercise.get("secondary", []))


def exercise_muscle_group(exercise: dict) -> str:
    """Group of the first primary muscle, or "other"."""
    primary = exercise.get("primary", [])
    if not primary:
        return "other"
    return get_muscle_group(primary[0]) or "other"


def common_muscle_names(muscles: list[str]) -> list[str]:
    names = []
    for muscle in muscles:
        name = COMMON_MUSCLE_NAMES.get(muscle, muscle)
        if name not in names:
            names.append(name)
    return names
