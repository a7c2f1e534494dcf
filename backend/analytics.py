"""
Analytics over a user's most recent stress logs.

`summarize()` takes rows newest-first (as `StressLogRepo.fetch_recent`
returns them) and never mutates its input.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Mapping, Sequence

NO_TRIGGER = "None"


def _mean(values: List[float]) -> float:
    if not values:
        return 0
    # half up: 2.25 -> 2.3
    mean = Decimal(str(sum(values) / len(values)))
    return float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def most_common_trigger(rows: Sequence[Mapping[str, Any]]) -> str:
    """Most frequent non-empty tag; ties go to the tag seen first."""

    counts: Dict[str, int] = {}
    for row in rows:
        tag = row.get("tag")
        if tag:
            counts[tag] = counts.get(tag, 0) + 1

    best, best_count = NO_TRIGGER, 0
    # dicts keep first-insertion order, so a later tag must beat the count
    for tag, count in counts.items():
        if count > best_count:
            best, best_count = tag, count
    return best


def summarize(rows: Sequence[Mapping[str, Any]]) -> Dict[str, Any]:
    """Reduce newest-first rows into the analytics payload.

    Returns a dict with `averageMood`, `averageSleep`, `mostCommonTrigger`
    and `trendData` (oldest-first, 1-based `day`).
    """

    moods = [row.get("mood") or 0 for row in rows]
    sleeps = [row.get("sleep_hours") or 0 for row in rows]

    trend = [
        {
            "day": index + 1,
            "mood": row.get("mood"),
            "sleep": row.get("sleep_hours") or 0,
            "timestamp": row["timestamp"],
        }
        for index, row in enumerate(reversed(rows))
    ]

    return {
        "averageMood": _mean(moods),
        "averageSleep": _mean(sleeps),
        "mostCommonTrigger": most_common_trigger(rows),
        "trendData": trend,
    }
