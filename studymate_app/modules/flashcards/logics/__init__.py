from .spaced_repetition import ReviewOutcome, schedule_review

__all__ = ['ReviewOutcome', 'schedule_review']
