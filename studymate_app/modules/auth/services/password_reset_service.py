"""
Password reset tokens.

The raw token only ever travels in the emailed link; the database keeps
its SHA-256 digest. A token is valid for PASSWORD_RESET_TOKEN_EXPIRY
seconds and can be used once. Requesting a new token discards older ones
for the same email.
"""
import hashlib
import secrets
from datetime import timedelta

from flask import current_app, render_template, url_for
from sqlalchemy import or_

from studymate_app.core.extensions import db
from studymate_app.core.signals import password_reset_completed, password_reset_requested
from studymate_app.utils.time_utils import utcnow

from ...notification.services import DeliveryService
from ..models import PasswordReset, User


class PasswordResetService:

    @staticmethod
    def hash_token(token: str) -> str:
        return hashlib.sha256(token.encode('utf-8')).hexdigest()

    @staticmethod
    def create_token(email, now=None):
        """
        Issue a fresh token for ``email``.

        Returns:
            str | None: the raw token, or None when no account uses that email.
        """
        now = now or utcnow()
        email = (email or '').strip().lower()
        if User.query.filter_by(email=email).first() is None:
            return None

        PasswordReset.query.filter_by(email=email).delete(synchronize_session=False)

        token = secrets.token_hex(32)
        expiry = current_app.config.get('PASSWORD_RESET_TOKEN_EXPIRY', 3600)
        db.session.add(PasswordReset(
            email=email,
            token_hash=PasswordResetService.hash_token(token),
            expires_at=now + timedelta(seconds=expiry),
            used=False,
        ))
        db.session.commit()
        return token

    @staticmethod
    def build_reset_link(email, token):
        base_url = current_app.config.get('APP_URL', '').rstrip('/')
        return base_url + url_for('auth.reset_password', email=email, token=token)

    @staticmethod
    def request_reset(email) -> bool:
        """
        Create a token and email the reset link.

        Returns:
            bool: True when an email was handed to the mail server. Callers
            must not reveal this to the user.
        """
        token = PasswordResetService.create_token(email)
        if token is None:
            current_app.logger.info("Password reset requested for unknown email")
            return False

        email = email.strip().lower()
        expiry_minutes = current_app.config.get('PASSWORD_RESET_TOKEN_EXPIRY', 3600) // 60
        context = {
            'app_name': current_app.config.get('APP_NAME', 'StudyMate'),
            'reset_link': PasswordResetService.build_reset_link(email, token),
            'expiry_text': '1 hour' if expiry_minutes == 60 else f'{expiry_minutes} minutes',
        }
        sent = DeliveryService.send_email(
            email,
            f"{context['app_name']} - Password Reset Request",
            render_template('emails/password_reset.html', **context),
            render_template('emails/password_reset.txt', **context),
        )

        try:
            password_reset_requested.send(current_app._get_current_object(), email=email)
        except Exception as e:
            current_app.logger.error(f"Error emitting password_reset_requested signal: {e}")

        return sent

    @staticmethod
    def find_valid_reset(email, token, now=None):
        """Return the unused, unexpired reset row matching email + token, else None."""
        if not email or not token:
            return None
        now = now or utcnow()
        reset = PasswordReset.query.filter_by(
            email=email.strip().lower(),
            token_hash=PasswordResetService.hash_token(token),
        ).first()
        if reset is None or not reset.is_usable(now):
            return None
        return reset

    @staticmethod
    def reset_password(email, token, new_password, now=None) -> bool:
        """Consume the token and set the new password in one commit."""
        reset = PasswordResetService.find_valid_reset(email, token, now)
        if reset is None:
            return False

        user = User.query.filter_by(email=reset.email).first()
        if user is None:
            return False

        user.set_password(new_password)
        user.failed_login_attempts = 0
        user.locked_until = None
        reset.used = True
        db.session.commit()
        current_app.logger.info(f"Password reset completed for {user.username}")

        try:
            password_reset_completed.send(current_app._get_current_object(), user=user)
        except Exception as e:
            current_app.logger.error(f"Error emitting password_reset_completed signal: {e}")

        return True

    @staticmethod
    def purge_expired(now=None) -> int:
        """Delete used and expired tokens. Returns the number of rows removed."""
        now = now or utcnow()
        removed = PasswordReset.query.filter(
            or_(PasswordReset.used.is_(True), PasswordReset.expires_at < now)
        ).delete(synchronize_session=False)
        db.session.commit()
        return removed
