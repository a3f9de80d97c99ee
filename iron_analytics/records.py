"""
Iron Analytics — Workout Records

Flattens workout record dicts into pandas DataFrames and provides the
read-only query the reducers consume (finished records in a time window,
newest first).

Record shape:
    {
        "id": "...",
        "start": "2026-10-12T18:00:00Z",     # ISO string or datetime
        "end": "2026-10-12T19:05:00Z",       # optional
        "is_current_workout": False,         # in-progress flag
        "exercises": [
            {"exercise_uuid": "...",
             "sets": [{"weight": 100.0, "repetitions": 5, "is_completed": True}, ...]},
        ],
    }

Weights are in the canonical unit (kg).
"""
import json
from pathlib import Path

import pandas as pd

SET_COLUMNS = [
    "workout_id", "start", "end", "in_progress",
    "entry_idx", "exercise_uuid",
    "set_idx", "weight", "repetitions", "is_completed",
]

SESSION_COLUMNS = [
    "workout_id", "start", "end", "in_progress",
    "completed_sets", "completed_repetitions", "total_completed_weight",
]


def to_timestamp(value) -> pd.Timestamp | None:
    """Parse to a naive UTC pd.Timestamp. None/empty stays None."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    ts = pd.Timestamp(value)
    if pd.isna(ts):
        return None
    if ts.tzinfo is not None:
        ts = ts.tz_convert("UTC").tz_localize(None)
    return ts


def _check_record(record: dict) -> None:
    if not isinstance(record, dict) or record.get("id") in (None, ""):
        raise ValueError(f"Workout record without id: {record!r}")
    exercises = record.get("exercises", [])
    if not isinstance(exercises, list):
        raise ValueError(f"Workout {record['id']}: 'exercises' must be a list")
    for ex in exercises:
        if not isinstance(ex, dict):
            raise ValueError(f"Workout {record['id']}: exercise entries must be objects, got {ex!r}")
        if not isinstance(ex.get("sets", []), list):
            raise ValueError(f"Workout {record['id']}: 'sets' must be a list")


def _set_values(s: dict) -> tuple[float, int, bool]:
    weight = float(s.get("weight", 0) or 0)
    reps = int(s.get("repetitions", 0) or 0)
    return weight, reps, bool(s.get("is_completed", False))


def workouts_to_dataframe(records: list[dict]) -> pd.DataFrame:
    """
    Convert workout records to a flat DataFrame.
    One row per set per exercise entry per workout.
    """
    rows = []
    for w in records:
        _check_record(w)
        start = to_timestamp(w.get("start"))
        end = to_timestamp(w.get("end"))
        in_progress = bool(w.get("is_current_workout", False))

        for entry_idx, ex in enumerate(w.get("exercises", [])):
            uuid = ex.get("exercise_uuid")
            for set_idx, s in enumerate(ex.get("sets", [])):
                weight, reps, done = _set_values(s)
                rows.append({
                    "workout_id": str(w["id"]),
                    "start": start,
                    "end": end,
                    "in_progress": in_progress,
                    "entry_idx": entry_idx,
                    "exercise_uuid": str(uuid) if uuid is not None else None,
                    "set_idx": set_idx,
                    "weight": weight,
                    "repetitions": reps,
                    "is_completed": done,
                })

    df = pd.DataFrame(rows, columns=SET_COLUMNS)
    df["start"] = pd.to_datetime(df["start"])
    df["end"] = pd.to_datetime(df["end"])
    df["weight"] = df["weight"].astype(float)
    df["repetitions"] = df["repetitions"].astype(int)
    df["is_completed"] = df["is_completed"].astype(bool)
    df["in_progress"] = df["in_progress"].astype(bool)
    return df


def sessions_dataframe(records: list[dict]) -> pd.DataFrame:
    """One row per workout with its completed-set totals."""
    rows = []
    for w in records:
        _check_record(w)
        start = to_timestamp(w.get("start"))
        end = to_timestamp(w.get("end"))
        sets = [
            _set_values(s)
            for ex in w.get("exercises", [])
            for s in ex.get("sets", [])
        ]
        completed = [(wt, r) for wt, r, done in sets if done]
        rows.append({
            "workout_id": str(w["id"]),
            "start": start,
            "end": end,
            "in_progress": bool(w.get("is_current_workout", False)),
            "completed_sets": len(completed),
            "completed_repetitions": sum(r for _, r in completed),
            "total_completed_weight": sum(wt * r for wt, r in completed),
        })

    df = pd.DataFrame(rows, columns=SESSION_COLUMNS)
    df["start"] = pd.to_datetime(df["start"])
    df["end"] = pd.to_datetime(df["end"])
    df["in_progress"] = df["in_progress"].astype(bool)
    return df


def fetch_finished(df: pd.DataFrame, start=None, end=None) -> pd.DataFrame:
    """
    Finished rows with start <= row.start < end, newest first.

    Works on both the set-level and the session-level frame. Rows without
    a start timestamp never match a bounded window.
    """
    if df.empty:
        return df.copy()
    mask = ~df["in_progress"]
    lo = to_timestamp(start)
    hi = to_timestamp(end)
    if lo is not None:
        mask &= df["start"] >= lo
    if hi is not None:
        mask &= df["start"] < hi
    # mergesort keeps entry/set order inside a workout
    return df[mask].sort_values("start", ascending=False, kind="mergesort")


def load_records(path) -> list[dict]:
    """Read a JSON snapshot: a list of records or {"workouts": [...]}."""
    with Path(path).open("r", encoding="utf-8") as handle:
        data = json.load(handle)
    if isinstance(data, dict):
        data = data.get("workouts", [])
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of workout records")
    return data
