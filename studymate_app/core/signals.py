"""
Central Signal Registry for Event-Driven Architecture.

Uses blinker namespaces so modules can publish events without importing
each other. The activity module subscribes to most of these to build the
per-user activity feed.

Usage:
    # Publisher (sender)
    from studymate_app.core.signals import content_created
    content_created.send(None, user_id=1, entity_type='note', entity_id=2, title='...')

    # Subscriber (receiver) - in module's events.py
    @content_created.connect
    def on_content_created(sender, **kwargs):
        ...
"""
from blinker import Namespace

# ============================================
# Account Signals
# ============================================
account_signals = Namespace()

# Payload: user
user_registered = account_signals.signal('user_registered')

# Payload: user
user_logged_in = account_signals.signal('user_logged_in')

# Payload: email
password_reset_requested = account_signals.signal('password_reset_requested')

# Payload: user
password_reset_completed = account_signals.signal('password_reset_completed')

# Payload: user, changes (list of field names)
profile_updated = account_signals.signal('profile_updated')

# ============================================
# Content Signals (modules, notes, flashcards, groups)
# ============================================
content_signals = Namespace()

# Payload: user_id, entity_type, entity_id, title
content_created = content_signals.signal('content_created')
content_updated = content_signals.signal('content_updated')
content_deleted = content_signals.signal('content_deleted')

# Payload: user_id, note_id, shared_with_id, permission
note_shared = content_signals.signal('note_shared')

# ============================================
# Study Signals
# ============================================
study_signals = Namespace()

# Payload: user_id, flashcard_id, correct, next_review
flashcard_reviewed = study_signals.signal('flashcard_reviewed')

# Payload: user_id, session_id, duration_minutes, session_type
study_session_completed = study_signals.signal('study_session_completed')
