"""
Dashboard Service - aggregates per-user numbers for the dashboard page.
"""
from datetime import timedelta

from sqlalchemy import func

from studymate_app.core.extensions import db
from studymate_app.utils.time_utils import to_user_timezone, user_today, utcnow

from ..activity.models import ActivityLog
from ..flashcards.services import FlashcardService
from ..notes.models import Note
from ..study_modules.models import Module
from ..study_timer.models import StudySession
from .logics.streak import calculate_study_streak
from .schemas import DashboardStatsDTO

RECENT_NOTES_LIMIT = 6
RECENT_ACTIVITY_LIMIT = 10


class DashboardService:

    @staticmethod
    def get_study_dates(user):
        """Calendar dates (user timezone) with at least one completed session."""
        started = db.session.execute(
            db.select(StudySession.started_at).where(
                StudySession.user_id == user.user_id,
                StudySession.completed.is_(True),
            )
        ).scalars().all()
        return {to_user_timezone(value, user).date() for value in started if value is not None}

    @staticmethod
    def get_study_minutes(user, days=7, now=None):
        since = (now or utcnow()) - timedelta(days=days)
        total = db.session.execute(
            db.select(func.coalesce(func.sum(StudySession.duration_minutes), 0)).where(
                StudySession.user_id == user.user_id,
                StudySession.completed.is_(True),
                StudySession.started_at >= since,
            )
        ).scalar()
        return int(total or 0)

    @staticmethod
    def get_user_stats(user, now=None) -> DashboardStatsDTO:
        return DashboardStatsDTO(
            total_notes=Note.query.filter_by(user_id=user.user_id).count(),
            total_modules=Module.query.filter_by(user_id=user.user_id).count(),
            total_flashcards=user.flashcards.count(),
            study_minutes_week=DashboardService.get_study_minutes(user, now=now),
            study_streak=calculate_study_streak(DashboardService.get_study_dates(user), user_today(user)),
            due_flashcards=FlashcardService.count_due(user.user_id, now=now),
        )

    @staticmethod
    def get_recent_notes(user, limit=RECENT_NOTES_LIMIT):
        return (
            Note.query.filter_by(user_id=user.user_id, is_archived=False)
            .order_by(Note.updated_at.desc())
            .limit(limit)
            .all()
        )

    @staticmethod
    def get_recent_activity(user, limit=RECENT_ACTIVITY_LIMIT):
        return (
            ActivityLog.query.filter_by(user_id=user.user_id)
            .order_by(ActivityLog.created_at.desc(), ActivityLog.activity_id.desc())
            .limit(limit)
            .all()
        )
