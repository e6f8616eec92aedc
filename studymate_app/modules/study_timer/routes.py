# File: studymate_app/modules/study_timer/routes.py
from flask import current_app, flash, jsonify, redirect, render_template, request, url_for
from flask_login import current_user, login_required

from studymate_app.core.error_handlers import wants_json

from . import study_timer_bp as blueprint
from ..study_modules.services import ModuleService
from .forms import StudySessionForm
from .logics.pomodoro import PomodoroSettings
from .models import StudySession
from .services import StudySessionService


@blueprint.route('/')
@login_required
def index():
    user = current_user._get_current_object()
    modules = ModuleService.list_modules(user.user_id)
    form = StudySessionForm()
    form.set_module_choices(modules)
    return render_template(
        'study_timer/index.html',
        form=form,
        modules=modules,
        settings=PomodoroSettings.from_config(current_app.config),
        sessions=StudySessionService.list_recent_sessions(user.user_id),
        work_sessions_today=StudySessionService.count_work_sessions_today(user),
        minutes_today=StudySessionService.minutes_today(user),
    )


@blueprint.route('/sessions', methods=['POST'])
@login_required
def record_session():
    """Called by the timer (JSON) when a phase completes, or by the manual log form."""
    user = current_user._get_current_object()
    payload = request.get_json(silent=True) or request.form
    session_type = payload.get('type') or StudySession.TYPE_POMODORO

    session = StudySessionService.record_session(
        user,
        duration_minutes=payload.get('duration'),
        session_type=session_type,
        module_id=_optional_int(payload.get('module_id')),
    )

    if wants_json():
        phase, minutes = StudySessionService.upcoming_phase(user, session_type)
        return jsonify({
            'success': True,
            'session_id': session.session_id,
            'next_phase': phase,
            'next_duration': minutes,
            'work_sessions_today': StudySessionService.count_work_sessions_today(user),
            'minutes_today': StudySessionService.minutes_today(user),
        })

    flash(f'Logged {session.duration_minutes} minutes of study.', 'success')
    return redirect(url_for('study_timer.index'))


@blueprint.route('/sessions/<int:session_id>/delete', methods=['POST'])
@login_required
def delete_session(session_id):
    StudySessionService.delete_session(current_user.user_id, session_id)
    flash('Study session removed.', 'success')
    return redirect(url_for('study_timer.index'))


def _optional_int(value):
    try:
        return int(value) or None
    except (TypeError, ValueError):
        return None
