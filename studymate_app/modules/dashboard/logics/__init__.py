from .streak import calculate_study_streak

__all__ = ['calculate_study_streak']
