"""
Iron Analytics — Feed Recompute
Run manually: python -m iron_analytics.feed <records.json> <catalog.json> [--now ISO]

The hosting layer calls compute_feed() whenever its snapshot changes.
"""
import sys

import pandas as pd

from iron_analytics.analytics import (
    lifetime_volume,
    milestone_progress,
    muscle_heatmap,
    muscle_intensity,
    muscle_volume,
    progressive_overload,
    volume_stats,
)
from iron_analytics.catalog import load_catalog
from iron_analytics.config import EPIC_MILESTONES, get_settings
from iron_analytics.records import (
    load_records,
    sessions_dataframe,
    to_timestamp,
    workouts_to_dataframe,
)
from iron_analytics.units import (
    format_lifetime_weight,
    format_milestone_weight,
    format_percent_change,
    format_weight,
)


def compute_feed(
    records: list[dict],
    catalog: dict,
    settings: dict = None,
    now=None,
    milestones: list[dict] = None,
) -> dict:
    """
    Run every reducer on one snapshot.

    `now` defaults to the current UTC time; pass it explicitly for
    reproducible output.
    """
    settings = settings or get_settings()
    now = to_timestamp(now) if now is not None else pd.Timestamp.now(tz="UTC").tz_localize(None)
    metric = settings["volume_metric"]

    sets = workouts_to_dataframe(records)
    sessions = sessions_dataframe(records)

    volume = muscle_volume(sets, now, catalog, settings["heatmap_lookback_days"])
    total = lifetime_volume(sessions)
    return {
        "now": now,
        "volume": volume_stats(sessions, sets, now, metric, settings["first_weekday"]),
        "progressive_overload": progressive_overload(
            sets, now, catalog,
            lookback_days=settings["overload_lookback_days"],
            recent_days=settings["overload_recent_days"],
            top_n=settings["overload_top_n"],
        ),
        "muscle_volume": volume,
        "muscle_intensity": muscle_intensity(volume),
        "muscle_heatmap": muscle_heatmap(volume),
        "milestones": milestone_progress(total, EPIC_MILESTONES if milestones is None else milestones),
    }


def print_feed(feed: dict, unit: str = "metric") -> None:
    print(f"📊 Iron Feed — {feed['now'].isoformat()}")

    for label, key in (("This week", "week"), ("This month", "month")):
        block = feed["volume"][key]
        change = format_percent_change(block["change"])
        print(f"\n📦 {label}: {format_weight(block['total_volume'], unit)}"
              + (f" ({change})" if change else ""))
        print(f"   {block['workouts']} workouts / {block['sets']} sets / {block['reps']} reps")

    overload = feed["progressive_overload"]
    print("\n📈 Progressive overload:")
    if overload.empty:
        print("   No data")
    for _, row in overload.iterrows():
        pr = " 🏆 PR" if row["is_new_pr"] else ""
        print(f"   {row['title']}: {format_weight(row['current_max'], unit)}"
              f" (prev {format_weight(row['previous_max'], unit)}, {row['improvement_pct']:+.1f}%){pr}")

    print("\n🔥 Muscle heat map (last days):")
    for _, row in feed["muscle_heatmap"].iterrows():
        bar = "█" * int(round(row["intensity"] * 10))
        print(f"   {row['muscle_group']:<10} {row['sets']:>3} {bar}")

    ms = feed["milestones"]
    print(f"\n🗿 Lifetime: {format_lifetime_weight(ms['total'], unit)}"
          f" — {ms['achieved_count']}/{ms['milestone_count']} milestones")
    if ms["latest"]:
        latest = ms["latest"]
        print(f"   ✅ {latest['emoji']} {latest['name']} ({format_milestone_weight(latest['threshold_kg'])})")
    if ms["next"]:
        nxt = ms["next"]
        print(f"   🎯 {nxt['emoji']} {nxt['name']} — {int(ms['progress_to_next'] * 100)}%,"
              f" {format_lifetime_weight(ms['remaining'], unit)} to go")


def _arg_value(argv: list[str], flag: str) -> str | None:
    if flag in argv:
        idx = argv.index(flag)
        if idx + 1 < len(argv):
            return argv[idx + 1]
    return None


def main(argv: list[str] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    now_arg = _arg_value(argv, "--now")
    paths = [a for a in argv if not a.startswith("--") and a != now_arg]
    if len(paths) != 2:
        print(__doc__.strip().splitlines()[1])
        return 2

    try:
        settings = get_settings()
        records = load_records(paths[0])
        catalog = load_catalog(paths[1])
        print(f"📥 Loaded {len(records)} workouts, {len(catalog)} exercises")
        feed = compute_feed(records, catalog, settings, now=now_arg)
    except (OSError, ValueError) as e:
        print(f"\n❌ Feed FAILED: {e}")
        return 1

    print()
    print_feed(feed, settings["weight_unit"])
    return 0


if __name__ == "__main__":
    sys.exit(main())
