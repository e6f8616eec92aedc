# File: studymate_app/config.py
# Application configuration, read from the environment (.env supported).

import os
from datetime import timedelta

from dotenv import load_dotenv
from sqlalchemy.engine import make_url

load_dotenv()

# config.py lives in studymate_app/, the project root is one level up.
BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))

DATABASE_PATH = os.path.join(BASE_DIR, "database", "studymate.db")


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """StudyMate application configuration."""

    SECRET_KEY = os.environ.get('SECRET_KEY')
    if not SECRET_KEY:
        # Development fallback, set SECRET_KEY in production
        SECRET_KEY = 'dev-secret-key-replace-in-production'

    # Branding: the same app ships as "StudyMate" or "StudentHub"
    APP_NAME = os.environ.get('APP_NAME', 'StudyMate')
    APP_URL = os.environ.get('APP_URL', 'http://localhost:5000')

    SQLALCHEMY_DATABASE_URI = os.environ.get('SQLALCHEMY_DATABASE_URI') or f'sqlite:///{DATABASE_PATH}'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
        'connect_args': {'timeout': 30},
    }
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Sessions
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    SESSION_COOKIE_SECURE = _env_flag('SESSION_COOKIE_SECURE')
    PERMANENT_SESSION_LIFETIME = timedelta(hours=24)
    REMEMBER_COOKIE_DURATION = timedelta(days=30)
    REMEMBER_COOKIE_HTTPONLY = True

    # Mail (Gmail SMTP by default)
    MAIL_SERVER = os.environ.get('MAIL_SERVER', 'smtp.gmail.com')
    MAIL_PORT = int(os.environ.get('MAIL_PORT', 587))
    MAIL_USE_TLS = _env_flag('MAIL_USE_TLS', True)
    MAIL_USERNAME = os.environ.get('MAIL_USERNAME')
    MAIL_PASSWORD = os.environ.get('MAIL_PASSWORD')
    MAIL_DEFAULT_SENDER = os.environ.get('MAIL_DEFAULT_SENDER', 'noreply@studymate.local')
    MAIL_FROM_NAME = os.environ.get('MAIL_FROM_NAME', APP_NAME)
    MAIL_SUPPRESS_SEND = _env_flag('MAIL_SUPPRESS_SEND')
    MAIL_TIMEOUT = 10

    # Security
    PASSWORD_RESET_TOKEN_EXPIRY = 3600  # seconds
    PASSWORD_MIN_LENGTH = 8
    MAX_LOGIN_ATTEMPTS = 5
    LOGIN_LOCKOUT_SECONDS = 900

    # Pomodoro (minutes)
    POMODORO_WORK_MINUTES = 25
    POMODORO_SHORT_BREAK_MINUTES = 5
    POMODORO_LONG_BREAK_MINUTES = 15
    POMODORO_SESSIONS_BEFORE_LONG_BREAK = 4

    FLASHCARD_REVIEW_BATCH = 10
    ITEMS_PER_PAGE = 12
    SYSTEM_TIMEZONE = 'UTC'

    # Uploads
    UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER') or os.path.join(BASE_DIR, 'uploads')
    AVATAR_SUBDIR = 'avatars'
    ALLOWED_AVATAR_EXTENSIONS = ('jpg', 'jpeg', 'png', 'gif', 'webp')
    MAX_CONTENT_LENGTH = 5 * 1024 * 1024

    # Background jobs
    SCHEDULER_ENABLED = _env_flag('SCHEDULER_ENABLED', True)
    SCHEDULER_API_ENABLED = False

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_TO_FILE = _env_flag('LOG_TO_FILE')
    LOG_DIR = os.environ.get('LOG_DIR') or os.path.join(BASE_DIR, 'logs')

    @classmethod
    def init_app(cls, app):
        """Create the directories the app writes to."""
        url = make_url(app.config['SQLALCHEMY_DATABASE_URI'])
        if url.get_backend_name() == 'sqlite' and url.database and url.database != ':memory:':
            database_dir = os.path.dirname(os.path.abspath(url.database))
            os.makedirs(database_dir, exist_ok=True)
        os.makedirs(os.path.join(app.config['UPLOAD_FOLDER'], app.config['AVATAR_SUBDIR']), exist_ok=True)
