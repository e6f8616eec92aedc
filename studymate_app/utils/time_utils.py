"""
Centralized Utilities for Time Handling in StudyMate.
Goal: Ensure consistent UTC storage and User-Timezone display.
"""
from datetime import date, datetime, timezone
from typing import Optional

import pytz
from flask import current_app
from flask_login import current_user


def utcnow() -> datetime:
    """
    Get the current timezone-aware UTC datetime.
    Always use this instead of datetime.utcnow() or datetime.now().
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """SQLite hands back naive datetimes; treat those as UTC."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def get_user_timezone(user=None):
    """pytz timezone of ``user`` (or current_user), falling back to SYSTEM_TIMEZONE."""
    tz_name = current_app.config.get('SYSTEM_TIMEZONE', 'UTC')
    target_user = user or current_user
    if target_user is not None and getattr(target_user, 'is_authenticated', False):
        tz_name = getattr(target_user, 'timezone', None) or tz_name
    try:
        return pytz.timezone(tz_name)
    except pytz.UnknownTimeZoneError:
        return pytz.UTC


def to_user_timezone(dt: Optional[datetime], user=None) -> Optional[datetime]:
    """
    Convert a timezone-aware (or naive-as-UTC) datetime to the user's timezone.

    Args:
        dt: The datetime object to convert (usually UTC).
        user: The user object (optional). If None, tries current_user.
    """
    if dt is None:
        return None
    return ensure_utc(dt).astimezone(get_user_timezone(user))


def user_today(user=None) -> date:
    """The current calendar date in the user's timezone."""
    return utcnow().astimezone(get_user_timezone(user)).date()
