from __future__ import annotations

from collections import Counter
from datetime import date
from typing import Iterable

from emoclass.db.models import EMOTIONS, EmotionCheckin
from emoclass.utils.time import last_n_days

POSITIVE = {"happy", "neutral"}
TIRED = {"sleepy"}
NEEDS_SUPPORT = {"stressed", "normal"}

EMOTION_COLORS = {
    "happy": "#10b981",
    "neutral": "#6ee7b7",
    "normal": "#fbbf24",
    "stressed": "#ef4444",
    "sleepy": "#f59e0b",
}


def _pct(part: int, whole: int) -> int:
    if whole <= 0:
        return 0
    # half-up like the chart front end, not banker's rounding
    return (part * 200 + whole) // (2 * whole)


def calculate_dashboard_stats(emotions: list[str], total_students: int) -> dict:
    """
    Headline numbers for one class and day. Category percentages are relative
    to the students who checked in, not the class size.
    """
    if total_students == 0:
        zero = {"count": 0, "percentage": 0}
        return {
            "students_checked_in": {"count": 0, "total": 0, "percentage": 0},
            "positive_emotions": dict(zero),
            "tired_low_energy": dict(zero),
            "needs_support": dict(zero),
        }

    checked_in = len(emotions)
    positive = sum(1 for e in emotions if e in POSITIVE)
    tired = sum(1 for e in emotions if e in TIRED)
    support = sum(1 for e in emotions if e in NEEDS_SUPPORT)

    return {
        "students_checked_in": {
            "count": checked_in,
            "total": total_students,
            "percentage": min(100, _pct(checked_in, total_students)),
        },
        "positive_emotions": {"count": positive, "percentage": _pct(positive, checked_in)},
        "tired_low_energy": {"count": tired, "percentage": _pct(tired, checked_in)},
        "needs_support": {"count": support, "percentage": _pct(support, checked_in)},
    }


def emotion_distribution(emotions: list[str]) -> list[dict]:
    total = len(emotions)
    if total == 0:
        return []
    counts = Counter(emotions)
    dist = [
        {
            "emotion": e,
            "count": counts[e],
            "percentage": _pct(counts[e], total),
            "color": EMOTION_COLORS[e],
        }
        for e in EMOTIONS
        if counts[e] > 0
    ]
    # stable sort keeps enum order for ties
    return sorted(dist, key=lambda d: d["count"], reverse=True)


def weekly_trend(checkins: Iterable[EmotionCheckin], end: date, days: int = 7) -> dict:
    """
    Share of positive check-ins per local day for the `days` days ending at `end`.
    Days without check-ins score 0.
    """
    dates = last_n_days(end, days)
    per_day: dict[date, list[str]] = {d: [] for d in dates}
    for ci in checkins:
        if ci.checkin_date in per_day:
            per_day[ci.checkin_date].append(ci.emotion)
    scores = [_pct(sum(1 for e in per_day[d] if e in POSITIVE), len(per_day[d])) for d in dates]
    return {"dates": [d.isoformat() for d in dates], "scores": scores}


def students_needing_attention(checkins: Iterable[EmotionCheckin], tracked: Iterable[str]) -> list[dict]:
    watch = set(tracked)
    return [
        {
            "student_id": ci.student_id,
            "student_name": ci.student.name if ci.student else "Unknown",
            "emotion": ci.emotion,
            "note": ci.note,
            "timestamp": ci.created_at,
        }
        for ci in checkins
        if ci.emotion in watch
    ]
