import pytest

from studymate_app.modules.study_timer.logics.pomodoro import (
    PHASE_LONG_BREAK,
    PHASE_SHORT_BREAK,
    PHASE_WORK,
    PomodoroSettings,
    next_phase,
    phase_duration,
)

SETTINGS = PomodoroSettings()


class TestPomodoroSettings:

    def test_defaults(self):
        assert SETTINGS.work_minutes == 25
        assert SETTINGS.short_break_minutes == 5
        assert SETTINGS.long_break_minutes == 15
        assert SETTINGS.sessions_before_long_break == 4

    def test_from_config(self):
        settings = PomodoroSettings.from_config({'POMODORO_WORK_MINUTES': 50, 'POMODORO_LONG_BREAK_MINUTES': 20})
        assert settings.work_minutes == 50
        assert settings.long_break_minutes == 20
        assert settings.short_break_minutes == 5


class TestPhases:

    @pytest.mark.parametrize('phase, minutes', [
        (PHASE_WORK, 25),
        (PHASE_SHORT_BREAK, 5),
        (PHASE_LONG_BREAK, 15),
    ])
    def test_phase_duration(self, phase, minutes):
        assert phase_duration(phase, SETTINGS) == minutes

    def test_unknown_phase(self):
        with pytest.raises(ValueError):
            phase_duration('nap', SETTINGS)

    @pytest.mark.parametrize('completed, expected', [
        (1, PHASE_SHORT_BREAK),
        (2, PHASE_SHORT_BREAK),
        (3, PHASE_SHORT_BREAK),
        (4, PHASE_LONG_BREAK),
        (5, PHASE_SHORT_BREAK),
        (8, PHASE_LONG_BREAK),
    ])
    def test_break_after_work(self, completed, expected):
        assert next_phase(PHASE_WORK, completed, SETTINGS) == expected

    @pytest.mark.parametrize('phase', [PHASE_SHORT_BREAK, PHASE_LONG_BREAK])
    def test_work_after_any_break(self, phase):
        assert next_phase(phase, 4, SETTINGS) == PHASE_WORK
