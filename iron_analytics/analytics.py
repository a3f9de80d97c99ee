"""
Iron Analytics — Pandas Analytics Engine

Pure reducers over a snapshot of workout records (see records.py).
Every function here is read-only: same input frames, same output.
Only finished workouts and completed sets ever count.
"""
from datetime import timedelta

import numpy as np
import pandas as pd

from iron_analytics.catalog import (
    exercise_title,
    find_exercise,
    primary_groups,
    secondary_groups,
)
from iron_analytics.config import (
    EPIC_MILESTONES,
    MUSCLE_GROUP_COLORS,
    MUSCLE_GROUPS,
    VOLUME_METRICS,
)
from iron_analytics.records import fetch_finished, to_timestamp

OVERLOAD_COLUMNS = [
    "exercise_uuid", "title", "current_max", "previous_max",
    "improvement_pct", "is_new_pr",
]


# ═══════════════════════════════════════════════════════════════════════
# 0. TIME WINDOWS — half-open [start, end)
# ═══════════════════════════════════════════════════════════════════════

def week_window(now, first_weekday: int = 0) -> tuple[pd.Timestamp, pd.Timestamp]:
    """Start of the current calendar week (midnight) up to now."""
    now = to_timestamp(now)
    days_back = (now.weekday() - first_weekday) % 7
    return now.normalize() - timedelta(days=days_back), now


def previous_week_window(now, first_weekday: int = 0) -> tuple[pd.Timestamp, pd.Timestamp]:
    start, _ = week_window(now, first_weekday)
    return start - timedelta(days=7), start


def month_window(now) -> tuple[pd.Timestamp, pd.Timestamp]:
    now = to_timestamp(now)
    return now.normalize().replace(day=1), now


def previous_month_window(now) -> tuple[pd.Timestamp, pd.Timestamp]:
    start, _ = month_window(now)
    return start - pd.DateOffset(months=1), start


def lookback_window(now, days: int) -> tuple[pd.Timestamp, pd.Timestamp]:
    now = to_timestamp(now)
    return now - timedelta(days=days), now


# ═══════════════════════════════════════════════════════════════════════
# 1. VOLUME AGGREGATOR — weekly / monthly totals and change
# ═══════════════════════════════════════════════════════════════════════

def set_volume(sets: pd.DataFrame, metric: str = "weight_x_reps") -> pd.Series:
    """Per-set volume: weight × reps, or the bare weight."""
    if metric not in VOLUME_METRICS:
        raise ValueError(f"Unknown volume metric {metric!r}")
    if metric == "weight":
        return sets["weight"]
    return sets["weight"] * sets["repetitions"]


def volume_summary(
    sessions: pd.DataFrame,
    sets: pd.DataFrame,
    start=None,
    end=None,
    metric: str = "weight_x_reps",
) -> dict:
    """Totals over finished workouts starting in [start, end)."""
    window_sessions = fetch_finished(sessions, start, end)
    window_sets = fetch_finished(sets, start, end)
    done = window_sets[window_sets["is_completed"]] if not window_sets.empty else window_sets
    return {
        "total_volume": float(set_volume(done, metric).sum()) if not done.empty else 0.0,
        "workouts": int(len(window_sessions)),
        "sets": int(window_sessions["completed_sets"].sum()) if not window_sessions.empty else 0,
        "reps": int(window_sessions["completed_repetitions"].sum()) if not window_sessions.empty else 0,
    }


def percent_change(current: float, previous: float) -> float | None:
    """
    current/previous - 1, or None without a positive baseline.

    Changes under 0.1% collapse to exactly 0.0 so the display never
    shows a noisy ±0.0%.
    """
    if previous is None or previous <= 0:
        return None
    change = (current / previous) - 1
    return 0.0 if abs(change) < 0.001 else change


def _period_block(sessions, sets, window, prev_window, metric) -> dict:
    current = volume_summary(sessions, sets, *window, metric=metric)
    previous = volume_summary(sessions, sets, *prev_window, metric=metric)
    return {
        **current,
        "start": window[0],
        "end": window[1],
        "previous": previous,
        "change": percent_change(current["total_volume"], previous["total_volume"]),
    }


def volume_stats(
    sessions: pd.DataFrame,
    sets: pd.DataFrame,
    now,
    metric: str = "weight_x_reps",
    first_weekday: int = 0,
) -> dict:
    """This week vs last week and this month vs last month."""
    return {
        "week": _period_block(
            sessions, sets,
            week_window(now, first_weekday), previous_week_window(now, first_weekday),
            metric,
        ),
        "month": _period_block(
            sessions, sets,
            month_window(now), previous_month_window(now),
            metric,
        ),
    }


# ═══════════════════════════════════════════════════════════════════════
# 2. PROGRESSIVE OVERLOAD — recent max vs prior max per exercise
# ═══════════════════════════════════════════════════════════════════════

def _entry_max_weights(window: pd.DataFrame) -> pd.DataFrame:
    """One row per exercise entry: its heaviest completed set (0 if none)."""
    window = window[window["exercise_uuid"].notna()].copy()
    window["done_weight"] = np.where(window["is_completed"], window["weight"], 0.0)
    return (
        window.groupby(["workout_id", "entry_idx"], sort=False)
        .agg(
            exercise_uuid=("exercise_uuid", "first"),
            start=("start", "first"),
            max_weight=("done_weight", "max"),
        )
        .reset_index()
    )


def progressive_overload(
    sets: pd.DataFrame,
    now,
    catalog: dict,
    lookback_days: int = 30,
    recent_days: int = 15,
    top_n: int | None = None,
) -> pd.DataFrame:
    """
    Compare each exercise's max weight in the last `recent_days` against the
    rest of the `lookback_days` window.

    Exercises with nothing lifted recently are left out. Without a prior
    baseline the improvement is 0 and it is never flagged as a PR.
    Sorted by improvement, best first; ties keep snapshot order.
    """
    start, end = lookback_window(now, lookback_days)
    recent_start, _ = lookback_window(now, recent_days)
    window = fetch_finished(sets, start, end)
    if window.empty:
        return pd.DataFrame(columns=OVERLOAD_COLUMNS)

    entries = _entry_max_weights(window)
    if entries.empty:
        return pd.DataFrame(columns=OVERLOAD_COLUMNS)
    entries["is_recent"] = entries["start"] >= recent_start

    rows = []
    for uuid, ex_df in entries.groupby("exercise_uuid", sort=False):
        recent = ex_df[ex_df["is_recent"]]
        if recent.empty:
            continue
        current_max = float(recent["max_weight"].max())
        if current_max <= 0:
            continue
        prior = ex_df[~ex_df["is_recent"]]
        previous_max = float(prior["max_weight"].max()) if not prior.empty else 0.0

        if previous_max > 0:
            improvement = (current_max - previous_max) / previous_max * 100
        else:
            improvement = 0.0

        rows.append({
            "exercise_uuid": uuid,
            "title": exercise_title(catalog, uuid),
            "current_max": current_max,
            "previous_max": previous_max,
            "improvement_pct": improvement,
            "is_new_pr": bool(current_max > previous_max and previous_max > 0),
        })

    rows = sorted(rows, key=lambda r: r["improvement_pct"], reverse=True)
    if top_n is not None:
        rows = rows[:top_n]
    return pd.DataFrame(rows, columns=OVERLOAD_COLUMNS)


# ═══════════════════════════════════════════════════════════════════════
# 3. MUSCLE VOLUME — completed sets per muscle group (heat map)
# ═══════════════════════════════════════════════════════════════════════

def muscle_volume(
    sets: pd.DataFrame,
    now,
    catalog: dict,
    lookback_days: int = 7,
) -> dict:
    """
    Completed-set count per muscle group over the last `lookback_days`.

    Per exercise entry with n completed sets: every listed primary muscle
    adds n to its group, every listed secondary muscle adds n // 2. Two
    muscles in the same group credit it twice. The halving is applied once
    per entry, not per set. Exercises missing from the catalog count nowhere.
    """
    volume = {group: 0 for group in MUSCLE_GROUPS}
    start, end = lookback_window(now, lookback_days)
    window = fetch_finished(sets, start, end)
    if window.empty:
        return volume

    entries = (
        window.groupby(["workout_id", "entry_idx"], sort=False)
        .agg(exercise_uuid=("exercise_uuid", "first"), completed=("is_completed", "sum"))
        .reset_index()
    )
    for _, row in entries.iterrows():
        exercise = find_exercise(catalog, row["exercise_uuid"])
        if exercise is None:
            continue
        completed = int(row["completed"])
        for group in primary_groups(exercise):
            volume[group] += completed
        for group in secondary_groups(exercise):
            volume[group] += completed // 2
    return volume


def muscle_intensity(volume: dict) -> dict:
    """count / max count per group, in [0, 1]; all zero when nothing was hit."""
    top = max(volume.values(), default=0)
    if top <= 0:
        return {group: 0.0 for group in volume}
    return {group: count / top for group, count in volume.items()}


def muscle_heatmap(volume: dict) -> pd.DataFrame:
    intensity = muscle_intensity(volume)
    return pd.DataFrame([
        {
            "muscle_group": group,
            "sets": volume.get(group, 0),
            "intensity": round(intensity.get(group, 0.0), 3),
            "color": MUSCLE_GROUP_COLORS.get(group, "#666"),
        }
        for group in MUSCLE_GROUPS
    ])


# ═══════════════════════════════════════════════════════════════════════
# 4. EPIC MILESTONES — lifetime volume vs landmark weights
# ═══════════════════════════════════════════════════════════════════════

def lifetime_volume(sessions: pd.DataFrame) -> float:
    """
    Total completed weight (weight × reps) across every finished workout.

    No time window and no volume metric: the milestone ladder is in kg lifted.
    """
    finished = fetch_finished(sessions)
    if finished.empty:
        return 0.0
    return float(finished["total_completed_weight"].sum())


def validate_milestones(milestones: list[dict]) -> None:
    thresholds = [m["threshold_kg"] for m in milestones]
    for lower, upper in zip(thresholds, thresholds[1:]):
        if upper <= lower:
            raise ValueError(
                f"Milestone thresholds must be strictly increasing ({lower} → {upper})"
            )


def milestone_progress(total: float, milestones: list[dict] = None) -> dict:
    """
    Where `total` sits on the milestone ladder.

    progress_to_next interpolates between the last achieved threshold (0
    when none) and the next one. Past the top entry there is no next and
    progress is 1.0.
    """
    milestones = EPIC_MILESTONES if milestones is None else milestones
    validate_milestones(milestones)

    achieved = [m for m in milestones if m["threshold_kg"] <= total]
    nxt = next((m for m in milestones if m["threshold_kg"] > total), None)

    if nxt is None:
        progress, remaining = 1.0, 0.0
    else:
        prev = achieved[-1]["threshold_kg"] if achieved else 0
        progress = min(max((total - prev) / (nxt["threshold_kg"] - prev), 0.0), 1.0)
        remaining = nxt["threshold_kg"] - total

    return {
        "total": total,
        "achieved": achieved,
        "latest": achieved[-1] if achieved else None,
        "next": nxt,
        "progress_to_next": progress,
        "remaining": remaining,
        "achieved_count": len(achieved),
        "milestone_count": len(milestones),
    }
