"""
Custom Jinja2 template filters for StudyMate.
"""
from datetime import datetime

import mistune
from markupsafe import Markup

from .time_utils import ensure_utc, to_user_timezone, utcnow

# Raw HTML in notes is escaped; only markdown syntax produces markup.
_markdown = mistune.create_markdown(escape=True, plugins=['strikethrough', 'table'])


def format_datetime_filter(dt, format='%b %d, %Y %H:%M'):
    """Format a UTC datetime in the current user's timezone."""
    if not dt:
        return ""
    if not isinstance(dt, datetime):
        return str(dt)
    return to_user_timezone(dt).strftime(format)


def format_date_filter(dt, format='%b %d, %Y'):
    return format_datetime_filter(dt, format)


def time_ago_filter(dt):
    """'Just now', '5 minutes ago', '3 days ago', then a plain date after a week."""
    if not dt:
        return ""
    diff = int((utcnow() - ensure_utc(dt)).total_seconds())

    if diff < 60:
        return 'Just now'
    if diff < 3600:
        mins = diff // 60
        return f"{mins} minute{'s' if mins > 1 else ''} ago"
    if diff < 86400:
        hours = diff // 3600
        return f"{hours} hour{'s' if hours > 1 else ''} ago"
    if diff < 604800:
        days = diff // 86400
        return f"{days} day{'s' if days > 1 else ''} ago"
    return format_date_filter(dt)


def truncate_text_filter(text, length=150, suffix='...'):
    if not text:
        return ''
    if len(text) <= length:
        return text
    return text[:length] + suffix


def markdown_filter(text):
    """Render note content written in markdown."""
    if not text:
        return Markup('')
    return Markup(_markdown(text))


def register_template_filters(app):
    app.jinja_env.filters['format_datetime'] = format_datetime_filter
    app.jinja_env.filters['format_date'] = format_date_filter
    app.jinja_env.filters['time_ago'] = time_ago_filter
    app.jinja_env.filters['truncate_text'] = truncate_text_filter
    app.jinja_env.filters['markdown'] = markdown_filter
