"""Pomodoro cycle: work / short break / long break phases."""
from __future__ import annotations

from dataclasses import dataclass

PHASE_WORK = 'pomodoro'
PHASE_SHORT_BREAK = 'short_break'
PHASE_LONG_BREAK = 'long_break'
PHASES = (PHASE_WORK, PHASE_SHORT_BREAK, PHASE_LONG_BREAK)


@dataclass(frozen=True)
class PomodoroSettings:
    work_minutes: int = 25
    short_break_minutes: int = 5
    long_break_minutes: int = 15
    sessions_before_long_break: int = 4

    @classmethod
    def from_config(cls, config) -> 'PomodoroSettings':
        return cls(
            work_minutes=int(config.get('POMODORO_WORK_MINUTES', 25)),
            short_break_minutes=int(config.get('POMODORO_SHORT_BREAK_MINUTES', 5)),
            long_break_minutes=int(config.get('POMODORO_LONG_BREAK_MINUTES', 15)),
            sessions_before_long_break=int(config.get('POMODORO_SESSIONS_BEFORE_LONG_BREAK', 4)),
        )

    def to_dict(self) -> dict:
        return {
            'work': self.work_minutes,
            'short_break': self.short_break_minutes,
            'long_break': self.long_break_minutes,
            'sessions_before_long_break': self.sessions_before_long_break,
        }


def phase_duration(phase: str, settings: PomodoroSettings) -> int:
    """Length of a phase in minutes."""
    if phase == PHASE_WORK:
        return settings.work_minutes
    if phase == PHASE_SHORT_BREAK:
        return settings.short_break_minutes
    if phase == PHASE_LONG_BREAK:
        return settings.long_break_minutes
    raise ValueError(f"Unknown pomodoro phase: {phase}")


def next_phase(phase: str, completed_work_sessions: int, settings: PomodoroSettings) -> str:
    """
    Phase that follows ``phase``.

    ``completed_work_sessions`` includes the phase just finished when it was
    a work phase; every Nth work session is followed by a long break.
    """
    if phase != PHASE_WORK:
        return PHASE_WORK
    every = max(settings.sessions_before_long_break, 1)
    if completed_work_sessions > 0 and completed_work_sessions % every == 0:
        return PHASE_LONG_BREAK
    return PHASE_SHORT_BREAK
