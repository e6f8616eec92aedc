"""
Tests for the password reset flow: token issue, single use, expiry,
and the email that carries the link.
"""
from datetime import datetime, timedelta, timezone
from urllib.parse import parse_qs, urlparse

import pytest

from studymate_app import db
from studymate_app.models import PasswordReset, User
from studymate_app.modules.auth.services import PasswordResetService
from studymate_app.modules.notification.services import DeliveryService

from conftest import PASSWORD, login

NEW_PASSWORD = 'Brandnew42'
NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def sent_emails(monkeypatch):
    sent = []

    def fake_send(to_email, subject, body_html, body_text):
        sent.append({'to': to_email, 'subject': subject, 'html': body_html, 'text': body_text})
        return True

    monkeypatch.setattr(DeliveryService, 'send_email', staticmethod(fake_send))
    return sent


def token_from_email(email):
    link = next(line for line in email['text'].splitlines() if '/auth/reset-password' in line)
    query = parse_qs(urlparse(link.strip()).query)
    return query['email'][0], query['token'][0]


class TestResetToken:

    def test_token_stored_hashed(self, app, alice):
        with app.app_context():
            token = PasswordResetService.create_token('alice@example.com', now=NOW)
            reset = PasswordReset.query.one()
            assert len(token) == 64
            assert reset.token_hash != token
            assert reset.token_hash == PasswordResetService.hash_token(token)
            assert reset.used is False

    def test_unknown_email_gets_no_token(self, app):
        with app.app_context():
            assert PasswordResetService.create_token('ghost@example.com') is None
            assert PasswordReset.query.count() == 0

    def test_token_accepted_once(self, app, alice):
        with app.app_context():
            token = PasswordResetService.create_token('alice@example.com', now=NOW)
            soon = NOW + timedelta(minutes=10)

            assert PasswordResetService.reset_password('alice@example.com', token, NEW_PASSWORD, now=soon)
            assert db.session.get(User, alice).check_password(NEW_PASSWORD)

            # Second use is refused and leaves the password alone
            assert not PasswordResetService.reset_password('alice@example.com', token, 'Another99', now=soon)
            assert db.session.get(User, alice).check_password(NEW_PASSWORD)
            assert PasswordReset.query.one().used is True

    def test_token_rejected_after_expiry(self, app, alice):
        with app.app_context():
            token = PasswordResetService.create_token('alice@example.com', now=NOW)
            expiry = timedelta(seconds=app.config['PASSWORD_RESET_TOKEN_EXPIRY'])

            assert PasswordResetService.find_valid_reset('alice@example.com', token, now=NOW + expiry - timedelta(seconds=1))
            assert PasswordResetService.find_valid_reset('alice@example.com', token, now=NOW + expiry) is None
            assert not PasswordResetService.reset_password('alice@example.com', token, NEW_PASSWORD,
                                                           now=NOW + expiry + timedelta(minutes=1))
            assert db.session.get(User, alice).check_password(PASSWORD)

    def test_token_bound_to_email(self, app, alice, bob):
        with app.app_context():
            token = PasswordResetService.create_token('alice@example.com', now=NOW)
            assert not PasswordResetService.reset_password('bob@example.com', token, NEW_PASSWORD, now=NOW)

    def test_used_token_not_usable(self, app, alice):
        with app.app_context():
            token = PasswordResetService.create_token('alice@example.com', now=NOW)
            reset = PasswordResetService.find_valid_reset('alice@example.com', token, now=NOW)
            assert reset.is_usable(NOW)

            reset.used = True
            db.session.commit()
            assert not reset.is_usable(NOW)
            assert PasswordResetService.find_valid_reset('alice@example.com', token, now=NOW) is None

    def test_new_request_replaces_old_token(self, app, alice):
        with app.app_context():
            first = PasswordResetService.create_token('alice@example.com', now=NOW)
            second = PasswordResetService.create_token('alice@example.com', now=NOW)
            assert PasswordReset.query.count() == 1
            assert PasswordResetService.find_valid_reset('alice@example.com', first, now=NOW) is None
            assert PasswordResetService.find_valid_reset('alice@example.com', second, now=NOW) is not None

    def test_reset_clears_lockout(self, app, alice):
        with app.app_context():
            user = db.session.get(User, alice)
            user.locked_until = NOW + timedelta(hours=1)
            user.failed_login_attempts = 3
            db.session.commit()

            token = PasswordResetService.create_token('alice@example.com', now=NOW)
            PasswordResetService.reset_password('alice@example.com', token, NEW_PASSWORD, now=NOW)
            user = db.session.get(User, alice)
            assert user.locked_until is None
            assert user.failed_login_attempts == 0

    def test_purge_expired(self, app, alice, bob):
        with app.app_context():
            PasswordResetService.create_token('alice@example.com', now=NOW - timedelta(days=2))
            PasswordResetService.create_token('bob@example.com', now=NOW)
            assert PasswordResetService.purge_expired(now=NOW) == 1
            assert PasswordReset.query.one().email == 'bob@example.com'


class TestResetRoutes:

    def test_forgot_password_sends_link(self, app, client, alice, sent_emails):
        response = client.post('/auth/forgot-password', data={'email': 'alice@example.com'})
        assert response.status_code == 302

        assert len(sent_emails) == 1
        email = sent_emails[0]
        assert email['to'] == 'alice@example.com'
        assert 'Password Reset' in email['subject']
        assert 'expires in 1 hour' in email['text']
        assert 'http://studymate.test/auth/reset-password' in email['html']

    def test_unknown_email_same_response(self, app, client, sent_emails):
        response = client.post('/auth/forgot-password', data={'email': 'ghost@example.com'}, follow_redirects=True)
        assert b'If an account exists with that email' in response.data
        assert sent_emails == []

    def test_full_reset_flow(self, app, client, alice, sent_emails):
        client.post('/auth/forgot-password', data={'email': 'alice@example.com'})
        email, token = token_from_email(sent_emails[0])

        response = client.get('/auth/reset-password', query_string={'email': email, 'token': token})
        assert response.status_code == 200

        response = client.post('/auth/reset-password', data={
            'email': email,
            'token': token,
            'password': NEW_PASSWORD,
            'confirm_password': NEW_PASSWORD,
        })
        assert response.status_code == 302
        assert response.headers['Location'].endswith('/auth/login')

        assert login(client, 'alice', NEW_PASSWORD).status_code == 302

    def test_reused_link_rejected(self, app, client, alice, sent_emails):
        client.post('/auth/forgot-password', data={'email': 'alice@example.com'})
        email, token = token_from_email(sent_emails[0])
        form = {'email': email, 'token': token, 'password': NEW_PASSWORD, 'confirm_password': NEW_PASSWORD}
        client.post('/auth/reset-password', data=form)

        response = client.post('/auth/reset-password', data=dict(form, password='Another99', confirm_password='Another99'))
        assert response.headers['Location'].endswith('/auth/forgot-password')
        response = client.get('/auth/reset-password', query_string={'email': email, 'token': token})
        assert response.status_code == 302

    def test_invalid_link(self, client, alice):
        response = client.get('/auth/reset-password', query_string={'email': 'alice@example.com', 'token': 'nope'},
                              follow_redirects=True)
        assert b'invalid or has expired' in response.data

    def test_weak_new_password_rerenders_form(self, app, client, alice):
        with app.app_context():
            token = PasswordResetService.create_token('alice@example.com')
        response = client.post('/auth/reset-password', data={
            'email': 'alice@example.com', 'token': token, 'password': 'weak', 'confirm_password': 'weak',
        })
        assert response.status_code == 200
        with app.app_context():
            assert PasswordReset.query.one().used is False
