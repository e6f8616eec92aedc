# File: studymate_app/modules/auth/tasks.py
# Scheduled housekeeping jobs for the auth module.

from studymate_app.core.extensions import scheduler

from .services.password_reset_service import PasswordResetService


def purge_expired_password_resets():
    """Daily job: drop used and expired password reset tokens."""
    app = scheduler.app
    with app.app_context():
        removed = PasswordResetService.purge_expired()
        app.logger.info(f"[Scheduler] Purged {removed} stale password reset token(s)")
