"""
Rule-based wellness suggestions.

Pure functions only: no DB, no settings. The API submit path and any other
caller that needs advice for a single entry go through `suggest()`.

Rules are evaluated in a fixed order and every matching rule appends its
advisory:
1. exactly one stress tier (high / moderate / mild / low)
2. short sleep
3. long work day
4. good sleep with low stress
"""

from typing import Dict, List, Optional

HIGH_STRESS = "🫁 High stress detected — Try 5-min deep breathing (4-4-4) and a short walk."
MODERATE_STRESS = "🧘 Moderate stress — Try a 5–10 min guided meditation or calming music."
MILD_STRESS = "😌 Mild stress — Consider some light stretching or journaling."
LOW_STRESS = "✨ Low stress — Great! Consider a 2-min gratitude note to maintain this state."
SLEEP_DEFICIT = "😴 Sleep is below optimal — Wind down 30 minutes earlier and avoid screens before bed."
LONG_WORK_DAY = "⏰ Long work day detected — Take micro-breaks, try Pomodoro technique (25/5)."
GOOD_ROUTINE = "🌟 Good sleep + low stress — Perfect combo! Keep up the healthy routine."

TIER_ADVISORIES = (HIGH_STRESS, MODERATE_STRESS, MILD_STRESS, LOW_STRESS)

STRESS_TAGS = ["Work", "Relationships", "Health", "Studies", "Finance", "Family", "Other"]


def _tier(mood: int, sleep: float) -> str:
    if mood >= 8 or (sleep < 5 and mood >= 6):
        return HIGH_STRESS
    if mood >= 6:
        return MODERATE_STRESS
    if mood >= 4:
        return MILD_STRESS
    return LOW_STRESS


def suggest(mood: int, sleep_hours: Optional[float], work_hours: Optional[float]) -> List[str]:
    """Return the ordered advisories for one entry.

    Missing hours count as 0, so an entry without `sleep_hours` also gets
    the sleep advisory. Mood is evaluated as given, even outside 1-10.
    """

    sleep = sleep_hours if sleep_hours is not None else 0.0
    work = work_hours if work_hours is not None else 0.0

    suggestions = [_tier(mood, sleep)]
    if sleep < 6:
        suggestions.append(SLEEP_DEFICIT)
    if work > 10:
        suggestions.append(LONG_WORK_DAY)
    if sleep >= 8 and mood <= 3:
        suggestions.append(GOOD_ROUTINE)
    return suggestions


def stress_label(mood: int) -> str:
    """Human label for a mood score."""
    if mood <= 2:
        return "Very Low"
    if mood <= 4:
        return "Low"
    if mood <= 6:
        return "Moderate"
    if mood <= 8:
        return "High"
    return "Very High"


def label_scale() -> Dict[int, str]:
    return {mood: stress_label(mood) for mood in range(1, 11)}
