from .pomodoro import (
    PHASE_LONG_BREAK,
    PHASE_SHORT_BREAK,
    PHASE_WORK,
    PomodoroSettings,
    next_phase,
    phase_duration,
)

__all__ = [
    'PHASE_LONG_BREAK',
    'PHASE_SHORT_BREAK',
    'PHASE_WORK',
    'PomodoroSettings',
    'next_phase',
    'phase_duration',
]
