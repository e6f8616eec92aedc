from __future__ import annotations

from datetime import timedelta

from flask import url_for
from flask_login import UserMixin
from werkzeug.security import check_password_hash, generate_password_hash

from studymate_app.core.extensions import db
from studymate_app.utils.time_utils import ensure_utc, utcnow


class User(UserMixin, db.Model):
    """Application user model."""
    __tablename__ = 'users'

    THEME_LIGHT = 'light'
    THEME_DARK = 'dark'
    THEMES = (THEME_LIGHT, THEME_DARK)

    user_id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(50), unique=True, nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(256), nullable=False)
    theme = db.Column(db.String(10), default=THEME_LIGHT, nullable=False)
    avatar = db.Column(db.String(255), nullable=True)
    timezone = db.Column(db.String(50), default='UTC')
    last_login = db.Column(db.DateTime(timezone=True))
    failed_login_attempts = db.Column(db.Integer, default=0, nullable=False)
    locked_until = db.Column(db.DateTime(timezone=True), nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)

    modules = db.relationship('Module', backref='owner', lazy='dynamic')
    notes = db.relationship('Note', backref='owner', lazy='dynamic')
    tags = db.relationship('Tag', backref='owner', lazy='dynamic')
    flashcards = db.relationship('Flashcard', backref='owner', lazy='dynamic')
    study_sessions = db.relationship('StudySession', backref='user', lazy='dynamic')

    def get_id(self):
        return str(self.user_id)

    def set_password(self, password: str) -> None:
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    def get_avatar_url(self):
        if self.avatar:
            if self.avatar.startswith(('http://', 'https://')):
                return self.avatar
            return url_for('media_uploads', filename=self.avatar)
        return None

    @property
    def initial(self) -> str:
        return (self.username or '?')[:1].upper()

    def is_locked(self, now=None) -> bool:
        if self.locked_until is None:
            return False
        return ensure_utc(self.locked_until) > (now or utcnow())

    def register_failed_login(self, max_attempts: int, lockout_seconds: int, now=None) -> bool:
        """Count a failed login; returns True when this attempt triggered a lockout."""
        now = now or utcnow()
        self.failed_login_attempts = (self.failed_login_attempts or 0) + 1
        if self.failed_login_attempts >= max_attempts:
            self.locked_until = now + timedelta(seconds=lockout_seconds)
            self.failed_login_attempts = 0
            return True
        return False

    def register_successful_login(self, now=None) -> None:
        self.failed_login_attempts = 0
        self.locked_until = None
        self.last_login = now or utcnow()

    def __repr__(self):
        return f'<User {self.username}>'


class PasswordReset(db.Model):
    """
    Single-use, time-bound password reset token.
    Only the SHA-256 digest of the emailed token is stored.
    """
    __tablename__ = 'password_resets'

    reset_id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), nullable=False, index=True)
    token_hash = db.Column(db.String(64), nullable=False)
    expires_at = db.Column(db.DateTime(timezone=True), nullable=False)
    used = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)

    def is_expired(self, now=None) -> bool:
        return ensure_utc(self.expires_at) <= (now or utcnow())

    def is_usable(self, now=None) -> bool:
        return not self.used and not self.is_expired(now)

    def __repr__(self):
        return f'<PasswordReset {self.email} used={self.used}>'
