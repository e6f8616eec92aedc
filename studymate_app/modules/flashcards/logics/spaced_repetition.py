"""
Spaced-repetition scheduling for flashcards.

A fixed lookup on recall accuracy, no per-card difficulty:

    correct,   accuracy >= 80%  -> review again in 7 days
    correct,   accuracy >= 60%  -> 3 days
    correct,   below 60%        -> 1 day
    incorrect (any accuracy)    -> 4 hours

Pure logic, no database access.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

INCORRECT_INTERVAL = timedelta(hours=4)

# (minimum accuracy, interval), checked top to bottom
CORRECT_INTERVALS = (
    (0.8, timedelta(days=7)),
    (0.6, timedelta(days=3)),
    (0.0, timedelta(days=1)),
)


@dataclass(frozen=True)
class ReviewOutcome:
    times_reviewed: int
    times_correct: int
    accuracy: float
    next_review: datetime
    interval: timedelta


def interval_for(accuracy: float, correct: bool) -> timedelta:
    if not correct:
        return INCORRECT_INTERVAL
    for threshold, interval in CORRECT_INTERVALS:
        if accuracy >= threshold:
            return interval
    return CORRECT_INTERVALS[-1][1]


def schedule_review(times_reviewed: int, times_correct: int, correct: bool, now: datetime) -> ReviewOutcome:
    """
    Apply one review answer to a card's counters and pick its next review time.

    Args:
        times_reviewed: reviews before this one.
        times_correct: correct answers before this one.
        correct: whether the user recalled the answer.
        now: the review time (timezone-aware UTC).
    """
    times_reviewed = (times_reviewed or 0) + 1
    times_correct = (times_correct or 0) + (1 if correct else 0)
    accuracy = times_correct / times_reviewed
    interval = interval_for(accuracy, correct)
    return ReviewOutcome(
        times_reviewed=times_reviewed,
        times_correct=times_correct,
        accuracy=accuracy,
        next_review=now + interval,
        interval=interval,
    )
