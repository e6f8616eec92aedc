"""Tests for the study timer endpoints and session bookkeeping."""
from datetime import timedelta

import pytest

from studymate_app import db
from studymate_app.core.error_handlers import ValidationError
from studymate_app.models import StudySession, User
from studymate_app.modules.study_timer.services import StudySessionService
from studymate_app.utils.time_utils import utcnow

from helpers import make_module, make_session


def post_session(client, **payload):
    payload.setdefault('type', 'pomodoro')
    payload.setdefault('duration', 25)
    return client.post('/timer/sessions', json=payload)


class TestRecordSessionRoute:

    def test_json_session_recorded(self, app, alice, alice_client):
        response = post_session(alice_client)
        assert response.status_code == 200
        data = response.get_json()
        assert data['success'] is True
        assert data['next_phase'] == 'short_break'
        assert data['next_duration'] == 5
        assert data['work_sessions_today'] == 1
        assert data['minutes_today'] == 25

        with app.app_context():
            session = db.session.get(StudySession, data['session_id'])
            assert session.user_id == alice
            assert session.completed is True

    def test_long_break_after_fourth_work_session(self, alice_client):
        phases = [post_session(alice_client).get_json()['next_phase'] for _ in range(4)]
        assert phases == ['short_break', 'short_break', 'short_break', 'long_break']

    def test_break_is_followed_by_work(self, alice_client):
        data = post_session(alice_client, type='short_break', duration=5).get_json()
        assert data['next_phase'] == 'pomodoro'
        assert data['next_duration'] == 25
        assert data['work_sessions_today'] == 0
        assert data['minutes_today'] == 5

    def test_session_linked_to_own_module(self, app, alice, alice_client):
        module_id = make_module(app, alice)
        data = post_session(alice_client, module_id=module_id).get_json()
        with app.app_context():
            assert db.session.get(StudySession, data['session_id']).module_id == module_id

    @pytest.mark.parametrize('duration', [0, -5, 601, 'abc', None])
    def test_invalid_duration_rejected(self, app, alice_client, duration):
        response = post_session(alice_client, duration=duration)
        assert response.status_code == 400
        assert response.get_json()['message'] == 'Invalid session duration.'
        with app.app_context():
            assert StudySession.query.count() == 0

    def test_unknown_type_rejected(self, alice_client):
        response = post_session(alice_client, type='nap')
        assert response.status_code == 400

    def test_foreign_module_rejected(self, app, bob, alice_client):
        bob_module = make_module(app, bob, 'Bob Physics')
        response = post_session(alice_client, module_id=bob_module)
        assert response.status_code == 400
        with app.app_context():
            assert StudySession.query.count() == 0

    def test_manual_form_entry(self, app, alice, alice_client):
        response = alice_client.post('/timer/sessions', data={'duration': '45', 'type': 'manual', 'module_id': '0'})
        assert response.status_code == 302
        with app.app_context():
            session = StudySession.query.filter_by(user_id=alice).one()
            assert session.session_type == 'manual'
            assert session.module_id is None

    def test_index_page(self, alice_client):
        post_session(alice_client)
        response = alice_client.get('/timer/')
        assert response.status_code == 200


class TestDeleteSession:

    def test_delete_own(self, app, alice, alice_client):
        session_id = make_session(app, alice)
        alice_client.post(f'/timer/sessions/{session_id}/delete')
        with app.app_context():
            assert db.session.get(StudySession, session_id) is None

    def test_cannot_delete_others(self, app, alice, bob_client):
        session_id = make_session(app, alice)
        bob_client.post(f'/timer/sessions/{session_id}/delete')
        with app.app_context():
            assert db.session.get(StudySession, session_id) is not None


class TestSessionTotals:

    def test_yesterday_not_counted_today(self, app, alice):
        with app.app_context():
            user = db.session.get(User, alice)
            StudySessionService.record_session(user, 30, now=utcnow() - timedelta(days=2))
            StudySessionService.record_session(user, 20)
            assert StudySessionService.minutes_today(user) == 20
            assert StudySessionService.count_work_sessions_today(user) == 1

    def test_incomplete_sessions_ignored(self, app, alice):
        with app.app_context():
            user = db.session.get(User, alice)
            StudySessionService.record_session(user, 10, completed=False)
            assert StudySessionService.minutes_today(user) == 0

    def test_service_rejects_bad_duration(self, app, alice):
        with app.app_context():
            user = db.session.get(User, alice)
            with pytest.raises(ValidationError):
                StudySessionService.record_session(user, 0)
