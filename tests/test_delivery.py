"""Tests for outgoing email delivery over SMTP."""
import smtplib

import pytest

from studymate_app.modules.notification.services import DeliveryService


class FakeSMTP:
    instances = []

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.calls = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        self.calls.append('starttls')

    def login(self, username, password):
        self.calls.append(('login', username))

    def sendmail(self, sender, recipients, message):
        self.calls.append(('sendmail', sender, recipients))


@pytest.fixture
def live_mail(app, monkeypatch):
    FakeSMTP.instances = []
    app.config.update(MAIL_SUPPRESS_SEND=False, MAIL_USERNAME='mailer', MAIL_PASSWORD='pw',
                      MAIL_DEFAULT_SENDER='noreply@studymate.test')
    monkeypatch.setattr(smtplib, 'SMTP', FakeSMTP)
    return app


def test_message_has_text_and_html_parts(app):
    with app.app_context():
        msg = DeliveryService.build_message('alice@example.com', 'Hello', '<p>Hi</p>', 'Hi')
    assert msg['To'] == 'alice@example.com'
    assert [part.get_content_type() for part in msg.get_payload()] == ['text/plain', 'text/html']


def test_suppressed_send_reports_success(app, monkeypatch):
    monkeypatch.setattr(smtplib, 'SMTP', pytest.fail)
    with app.app_context():
        assert DeliveryService.send_email('alice@example.com', 'Hello', '<p>Hi</p>', 'Hi') is True


def test_send_uses_tls_and_login(live_mail):
    with live_mail.app_context():
        assert DeliveryService.send_email('alice@example.com', 'Hello', '<p>Hi</p>', 'Hi') is True
    [server] = FakeSMTP.instances
    assert server.calls == [
        'starttls',
        ('login', 'mailer'),
        ('sendmail', 'noreply@studymate.test', ['alice@example.com']),
    ]


def test_smtp_failure_returns_false(live_mail, monkeypatch):
    def refuse(*args, **kwargs):
        raise ConnectionRefusedError('no mail server')

    monkeypatch.setattr(smtplib, 'SMTP', refuse)
    with live_mail.app_context():
        assert DeliveryService.send_email('alice@example.com', 'Hello', '<p>Hi</p>', 'Hi') is False
