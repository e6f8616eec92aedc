from dataclasses import dataclass


@dataclass
class DashboardStatsDTO:
    total_notes: int = 0
    total_modules: int = 0
    total_flashcards: int = 0
    study_minutes_week: int = 0
    study_streak: int = 0
    due_flashcards: int = 0

    @property
    def study_hours_week(self) -> float:
        return round(self.study_minutes_week / 60, 1)
