"""
Iron Analytics — Configuration

Environment-driven settings plus the static lookup tables every reducer
shares: canonical muscle groups, anatomical muscle mapping and the epic
milestone ladder. Nothing here is mutated at runtime; callers get an
explicit settings dict from get_settings() and pass it down.
"""
import os

# ── Settings (env overrides) ─────────────────────────────────────────
WEIGHT_UNIT = os.environ.get("IRON_WEIGHT_UNIT", "metric")
VOLUME_METRIC = os.environ.get("IRON_VOLUME_METRIC", "weight_x_reps")
FIRST_WEEKDAY = os.environ.get("IRON_FIRST_WEEKDAY", "0")  # 0 = Monday

OVERLOAD_LOOKBACK_DAYS = os.environ.get("IRON_OVERLOAD_LOOKBACK_DAYS", "30")
OVERLOAD_RECENT_DAYS = os.environ.get("IRON_OVERLOAD_RECENT_DAYS", "15")
OVERLOAD_TOP_N = os.environ.get("IRON_OVERLOAD_TOP_N", "5")
HEATMAP_LOOKBACK_DAYS = os.environ.get("IRON_HEATMAP_LOOKBACK_DAYS", "7")

WEIGHT_UNITS = ("metric", "imperial")
VOLUME_METRICS = ("weight_x_reps", "weight")


def _as_int(name: str, value, low: int = None, high: int = None) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be an integer, got {value!r}") from None
    if low is not None and number < low:
        raise ValueError(f"{name} must be >= {low}, got {number}")
    if high is not None and number > high:
        raise ValueError(f"{name} must be <= {high}, got {number}")
    return number


def get_settings(**overrides) -> dict:
    """
    Build the settings context handed to compute_feed().

    Starts from the IRON_* environment values above; keyword overrides win.
    Raises ValueError on an unknown unit/metric or a malformed window.
    """
    raw = {
        "weight_unit": WEIGHT_UNIT,
        "volume_metric": VOLUME_METRIC,
        "first_weekday": FIRST_WEEKDAY,
        "overload_lookback_days": OVERLOAD_LOOKBACK_DAYS,
        "overload_recent_days": OVERLOAD_RECENT_DAYS,
        "overload_top_n": OVERLOAD_TOP_N,
        "heatmap_lookback_days": HEATMAP_LOOKBACK_DAYS,
    }
    raw.update(overrides)

    if raw["weight_unit"] not in WEIGHT_UNITS:
        raise ValueError(f"weight_unit must be one of {WEIGHT_UNITS}, got {raw['weight_unit']!r}")
    if raw["volume_metric"] not in VOLUME_METRICS:
        raise ValueError(f"volume_metric must be one of {VOLUME_METRICS}, got {raw['volume_metric']!r}")

    settings = {
        "weight_unit": raw["weight_unit"],
        "volume_metric": raw["volume_metric"],
        "first_weekday": _as_int("first_weekday", raw["first_weekday"], 0, 6),
        "overload_lookback_days": _as_int("overload_lookback_days", raw["overload_lookback_days"], 1),
        "overload_recent_days": _as_int("overload_recent_days", raw["overload_recent_days"], 1),
        "overload_top_n": _as_int("overload_top_n", raw["overload_top_n"], 0),
        "heatmap_lookback_days": _as_int("heatmap_lookback_days", raw["heatmap_lookback_days"], 1),
    }
    if settings["overload_recent_days"] > settings["overload_lookback_days"]:
        raise ValueError("overload_recent_days cannot exceed overload_lookback_days")
    return settings


# ═════════════════════════════════════════════════════════════════════
# MUSCLE GROUPS
#
# Six canonical buckets. Anatomical names are the ones used by the
# bundled exercise catalog (primary / secondary lists).
# ═════════════════════════════════════════════════════════════════════

MUSCLE_GROUPS = ["chest", "back", "shoulders", "arms", "abs", "legs"]

MUSCLE_GROUP_NAMES = {
    # abs
    "abdominals": "abs",
    "obliques": "abs",
    # arms
    "biceps brachii": "arms",
    "triceps brachii": "arms",
    # shoulders
    "deltoid": "shoulders",
    # back
    "erector spinae": "back",
    "latissimus dorsi": "back",
    "trapezius": "back",
    # legs
    "gastrocnemius": "legs",
    "soleus": "legs",
    "glutaeus maximus": "legs",
    "ischiocrural muscles": "legs",
    "quadriceps": "legs",
    # chest
    "pectoralis major": "chest",
}

COMMON_MUSCLE_NAMES = {
    "abdominals": "Abs",
    "biceps brachii": "Biceps",
    "deltoid": "Shoulders",
    "erector spinae": "Lower Back",
    "gastrocnemius": "Calves",
    "soleus": "Calves",
    "glutaeus maximus": "Glutes",
    "ischiocrural muscles": "Hamstrings",
    "latissimus dorsi": "Lats",
    "obliques": "Obliques",
    "pectoralis major": "Chest",
    "quadriceps": "Quads",
    "trapezius": "Traps",
    "triceps brachii": "Triceps",
}

MUSCLE_GROUP_COLORS = {
    "chest": "#ef4444",
    "back": "#3b82f6",
    "shoulders": "#f97316",
    "arms": "#a855f7",
    "abs": "#eab308",
    "legs": "#22c55e",
}

UNKNOWN_EXERCISE_TITLE = "Unknown exercise"


# ═════════════════════════════════════════════════════════════════════
# EPIC MILESTONES — lifetime lifted weight vs famous objects (kg)
#
# Strictly ascending by threshold_kg.
# ═════════════════════════════════════════════════════════════════════

EPIC_MILESTONES = [
    # Small
    {"id": "baby_elephant", "name": "Baby Elephant", "threshold_kg": 120, "emoji": "🐘", "desc": "A newborn elephant"},
    {"id": "gorilla", "name": "Gorilla", "threshold_kg": 200, "emoji": "🦍", "desc": "Adult silverback"},
    {"id": "grand_piano", "name": "Grand Piano", "threshold_kg": 500, "emoji": "🎹", "desc": "Concert grand"},
    {"id": "horse", "name": "Horse", "threshold_kg": 600, "emoji": "🐎", "desc": "Thoroughbred"},
    {"id": "polar_bear", "name": "Polar Bear", "threshold_kg": 700, "emoji": "🐻‍❄️", "desc": "Adult male"},
    # Medium
    {"id": "smart_car", "name": "Smart Car", "threshold_kg": 900, "emoji": "🚗", "desc": "City car"},
    {"id": "white_shark", "name": "Great White Shark", "threshold_kg": 1_100, "emoji": "🦈", "desc": "Ocean predator"},
    {"id": "hippo", "name": "Hippo", "threshold_kg": 1_800, "emoji": "🦛", "desc": "Adult hippo"},
    {"id": "car", "name": "Car", "threshold_kg": 2_000, "emoji": "🚙", "desc": "Average family car"},
    {"id": "rhino", "name": "Rhino", "threshold_kg": 2_500, "emoji": "🦏", "desc": "African rhino"},
    # Large
    {"id": "elephant", "name": "Elephant", "threshold_kg": 6_000, "emoji": "🐘", "desc": "Largest land animal"},
    {"id": "t_rex", "name": "T-Rex", "threshold_kg": 9_000, "emoji": "🦖", "desc": "King of the dinosaurs"},
    {"id": "school_bus", "name": "School Bus", "threshold_kg": 11_000, "emoji": "🚌", "desc": "Yellow school bus"},
    {"id": "fire_truck", "name": "Fire Truck", "threshold_kg": 19_000, "emoji": "🚒", "desc": "Ladder truck"},
    {"id": "whale_shark", "name": "Whale Shark", "threshold_kg": 20_000, "emoji": "🐋", "desc": "Largest fish"},
    # Epic
    {"id": "humpback", "name": "Humpback Whale", "threshold_kg": 36_000, "emoji": "🐳", "desc": "Singer of the sea"},
    {"id": "semi_truck", "name": "Semi Truck", "threshold_kg": 40_000, "emoji": "🚛", "desc": "Loaded tractor-trailer"},
    {"id": "space_shuttle", "name": "Space Shuttle", "threshold_kg": 78_000, "emoji": "🚀", "desc": "Orbiter"},
    {"id": "blue_whale", "name": "Blue Whale", "threshold_kg": 150_000, "emoji": "🐋", "desc": "Largest animal on Earth"},
    {"id": "boeing_747", "name": "Boeing 747", "threshold_kg": 178_000, "emoji": "✈️", "desc": "Jumbo jet"},
    # Legendary
    {"id": "liberty", "name": "Statue of Liberty", "threshold_kg": 225_000, "emoji": "🗽", "desc": "New York landmark"},
    {"id": "iss", "name": "ISS Module", "threshold_kg": 420_000, "emoji": "🛸", "desc": "Space station"},
    {"id": "eiffel", "name": "Eiffel Tower", "threshold_kg": 7_300_000, "emoji": "🗼", "desc": "Paris landmark"},
    {"id": "moai", "name": "Moai Statues", "threshold_kg": 10_000_000, "emoji": "🗿", "desc": "Every moai on Easter Island"},
    {"id": "pyramid", "name": "Great Pyramid", "threshold_kg": 6_000_000_000, "emoji": "⛰️", "desc": "Ancient wonder"},
]


def get_muscle_group(muscle: str) -> str | None:
    """Canonical group for an anatomical muscle name, None if unmapped."""
    return MUSCLE_GROUP_NAMES.get(muscle)
