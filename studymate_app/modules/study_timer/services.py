"""
Study Session Service - persists timer and manual study sessions.
"""
from datetime import datetime, time

import pytz
from flask import current_app
from sqlalchemy import func

from studymate_app.core.error_handlers import NotFoundError, ValidationError
from studymate_app.core.extensions import db
from studymate_app.core.signals import study_session_completed
from studymate_app.utils.time_utils import get_user_timezone, user_today, utcnow

from ..study_modules.models import Module
from .logics.pomodoro import PHASE_WORK, PomodoroSettings, next_phase, phase_duration
from .models import StudySession

MAX_SESSION_MINUTES = 600


class StudySessionService:

    @staticmethod
    def _start_of_today_utc(user):
        tz = get_user_timezone(user)
        local_midnight = tz.localize(datetime.combine(user_today(user), time.min))
        return local_midnight.astimezone(pytz.UTC)

    @staticmethod
    def record_session(user, duration_minutes, session_type=StudySession.TYPE_POMODORO,
                       module_id=None, completed=True, now=None):
        """
        Store a study session.

        Raises:
            ValidationError: unknown type, duration outside 1-600 minutes,
                or a module the user does not own.
        """
        try:
            duration_minutes = int(duration_minutes)
        except (TypeError, ValueError):
            raise ValidationError('Invalid session duration.', redirect_endpoint='study_timer.index')
        if not 1 <= duration_minutes <= MAX_SESSION_MINUTES:
            raise ValidationError('Invalid session duration.', redirect_endpoint='study_timer.index')
        if session_type not in StudySession.TYPES:
            raise ValidationError('Invalid session type.', redirect_endpoint='study_timer.index')

        module_id = module_id or None
        if module_id is not None:
            owned = Module.query.filter_by(module_id=module_id, user_id=user.user_id).first()
            if owned is None:
                raise ValidationError('Please select a valid module.', redirect_endpoint='study_timer.index')

        session = StudySession(
            user_id=user.user_id,
            module_id=module_id,
            session_type=session_type,
            duration_minutes=duration_minutes,
            completed=bool(completed),
            started_at=now or utcnow(),
        )
        db.session.add(session)
        db.session.commit()
        current_app.logger.info(
            f"User {user.user_id} logged {duration_minutes}m {session_type} session {session.session_id}"
        )

        if session.completed:
            study_session_completed.send(current_app._get_current_object(), user_id=user.user_id,
                                         session_id=session.session_id, duration_minutes=duration_minutes,
                                         session_type=session_type)
        return session

    @staticmethod
    def get_owned_session(user_id, session_id):
        session = StudySession.query.filter_by(session_id=session_id, user_id=user_id).first()
        if session is None:
            raise NotFoundError('Study session not found.', redirect_endpoint='study_timer.index', resource='study_session')
        return session

    @staticmethod
    def delete_session(user_id, session_id):
        db.session.delete(StudySessionService.get_owned_session(user_id, session_id))
        db.session.commit()

    @staticmethod
    def list_recent_sessions(user_id, limit=20):
        return (
            StudySession.query.filter_by(user_id=user_id)
            .order_by(StudySession.started_at.desc(), StudySession.session_id.desc())
            .limit(limit)
            .all()
        )

    @staticmethod
    def count_work_sessions_today(user):
        return StudySession.query.filter(
            StudySession.user_id == user.user_id,
            StudySession.session_type == PHASE_WORK,
            StudySession.completed.is_(True),
            StudySession.started_at >= StudySessionService._start_of_today_utc(user),
        ).count()

    @staticmethod
    def minutes_today(user):
        total = db.session.execute(
            db.select(func.coalesce(func.sum(StudySession.duration_minutes), 0)).where(
                StudySession.user_id == user.user_id,
                StudySession.completed.is_(True),
                StudySession.started_at >= StudySessionService._start_of_today_utc(user),
            )
        ).scalar()
        return int(total or 0)

    @staticmethod
    def upcoming_phase(user, finished_phase):
        """Phase and length (minutes) the timer should run after ``finished_phase``."""
        settings = PomodoroSettings.from_config(current_app.config)
        phase = next_phase(finished_phase, StudySessionService.count_work_sessions_today(user), settings)
        return phase, phase_duration(phase, settings)
