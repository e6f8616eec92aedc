"""
Auth Service - Core authentication logic.

Handles user registration and credential checks, including the
failed-attempt lockout. Decouples DB logic from Routes.
"""
import math

from flask import current_app
from sqlalchemy import or_

from studymate_app.core.extensions import db
from studymate_app.core.signals import user_logged_in, user_registered
from studymate_app.utils.time_utils import ensure_utc, utcnow

from ..models import User
from ..schemas import AuthResponseDTO

INVALID_CREDENTIALS_MESSAGE = 'Invalid username or password.'


class AuthService:
    """Service for Authentication related operations."""

    @staticmethod
    def register_user(username, email, password):
        """
        Register a new user and emit ``user_registered``.

        Uniqueness of username/email is checked by the registration form;
        the database constraints are the last line.
        """
        user = User(username=username.strip(), email=email.strip().lower())
        user.set_password(password)
        db.session.add(user)
        db.session.commit()

        current_app.logger.info(f"User registered: {user.username} ({user.user_id})")

        try:
            user_registered.send(current_app._get_current_object(), user=user)
        except Exception as e:
            current_app.logger.error(f"Error emitting user_registered signal: {e}")

        return user

    @staticmethod
    def find_by_identifier(identifier):
        """Look a user up by username or email."""
        identifier = (identifier or '').strip()
        if not identifier:
            return None
        return User.query.filter(
            or_(User.username == identifier, User.email == identifier.lower())
        ).first()

    @staticmethod
    def authenticate_user(identifier, password, now=None):
        """
        Verify credentials, enforcing MAX_LOGIN_ATTEMPTS / LOGIN_LOCKOUT_SECONDS.

        Returns:
            AuthResponseDTO: ``success`` with the user, or a message to show.
        """
        now = now or utcnow()
        config = current_app.config
        user = AuthService.find_by_identifier(identifier)

        if user is None:
            current_app.logger.info(f"Failed login for unknown account '{identifier}'")
            return AuthResponseDTO(success=False, message=INVALID_CREDENTIALS_MESSAGE)

        if user.is_locked(now):
            remaining = (ensure_utc(user.locked_until) - now).total_seconds()
            minutes = max(1, math.ceil(remaining / 60))
            return AuthResponseDTO(
                success=False,
                locked=True,
                message=f'Too many failed login attempts. Please try again in {minutes} minute{"s" if minutes > 1 else ""}.',
            )

        if not user.check_password(password):
            locked = user.register_failed_login(
                config.get('MAX_LOGIN_ATTEMPTS', 5),
                config.get('LOGIN_LOCKOUT_SECONDS', 900),
                now,
            )
            db.session.commit()
            if locked:
                current_app.logger.warning(f"Account {user.username} locked after repeated failed logins")
                minutes = max(1, config.get('LOGIN_LOCKOUT_SECONDS', 900) // 60)
                return AuthResponseDTO(
                    success=False,
                    locked=True,
                    message=f'Too many failed login attempts. Please try again in {minutes} minutes.',
                )
            current_app.logger.info(f"Failed login for {user.username}")
            return AuthResponseDTO(success=False, message=INVALID_CREDENTIALS_MESSAGE)

        user.register_successful_login(now)
        db.session.commit()

        try:
            user_logged_in.send(current_app._get_current_object(), user=user)
        except Exception as e:
            current_app.logger.error(f"Error emitting user_logged_in signal: {e}")

        return AuthResponseDTO(success=True, user=user)
