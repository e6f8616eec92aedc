# File: studymate_app/modules/dashboard/logics/streak.py
# Study streak: consecutive days with at least one completed study session.

from __future__ import annotations

from datetime import date, datetime
from typing import Iterable


def calculate_study_streak(study_dates: Iterable[date], today: date) -> int:
    """
    Count consecutive study days walking back from ``today``.

    A day studied yesterday but not yet today still counts, so the streak
    survives until the end of the current day.
    """
    days = sorted({d.date() if isinstance(d, datetime) else d for d in study_dates}, reverse=True)

    streak = 0
    cursor = today
    for day in days:
        if day > cursor:
            continue
        if (cursor - day).days <= 1:
            streak += 1
            cursor = day
        else:
            break
    return streak
