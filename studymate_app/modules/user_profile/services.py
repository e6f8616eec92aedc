"""
User Profile Service - Logic for profile management.

Handles avatar uploads, profile updates, password changes and the
light/dark theme preference.
"""
import os
import secrets

from flask import current_app
from werkzeug.utils import secure_filename

from studymate_app.core.error_handlers import ValidationError
from studymate_app.core.extensions import db
from studymate_app.core.signals import profile_updated

from ..auth.models import User


class UserProfileService:
    """Service for managing user profiles."""

    @staticmethod
    def update_profile_info(user: User, username=None, email=None, timezone=None):
        """
        Update basic profile information.

        Returns:
            list[str]: names of the fields that changed.
        """
        changes = []

        if username and user.username != username:
            user.username = username
            changes.append('username')

        if email and user.email != email:
            user.email = email
            changes.append('email')

        if timezone and user.timezone != timezone:
            user.timezone = timezone
            changes.append('timezone')

        if changes:
            db.session.commit()
            profile_updated.send(current_app._get_current_object(), user=user, changes=changes)

        return changes

    @staticmethod
    def _avatar_dir():
        return os.path.join(current_app.config['UPLOAD_FOLDER'], current_app.config.get('AVATAR_SUBDIR', 'avatars'))

    @staticmethod
    def _remove_avatar_file(relative_path):
        if not relative_path or relative_path.startswith(('http://', 'https://')):
            return
        path = os.path.join(current_app.config['UPLOAD_FOLDER'], relative_path)
        try:
            if os.path.isfile(path):
                os.remove(path)
        except OSError as e:
            current_app.logger.warning(f"Could not remove old avatar {path}: {e}")

    @staticmethod
    def update_avatar(user: User, file_storage):
        """
        Save an uploaded avatar and point the user at it.

        The stored filename is generated, the client's name only supplies
        the extension. The previous avatar file is removed.
        """
        if not file_storage or not file_storage.filename:
            return None

        original = secure_filename(file_storage.filename)
        ext = original.rsplit('.', 1)[-1].lower() if '.' in original else ''
        if ext not in current_app.config.get('ALLOWED_AVATAR_EXTENSIONS', ()):
            raise ValidationError('Only JPG, PNG, GIF and WEBP images are allowed.',
                                  redirect_endpoint='user_profile.index')

        avatar_dir = UserProfileService._avatar_dir()
        os.makedirs(avatar_dir, exist_ok=True)

        filename = f"avatar_{user.user_id}_{secrets.token_hex(8)}.{ext}"
        file_storage.save(os.path.join(avatar_dir, filename))

        previous = user.avatar
        user.avatar = f"{current_app.config.get('AVATAR_SUBDIR', 'avatars')}/{filename}"
        db.session.commit()
        UserProfileService._remove_avatar_file(previous)

        current_app.logger.info(f"Avatar updated for user {user.user_id}")
        profile_updated.send(current_app._get_current_object(), user=user, changes=['avatar'])
        return user.avatar

    @staticmethod
    def change_password(user: User, current_password, new_password):
        """Change the password after re-checking the current one."""
        if not user.check_password(current_password):
            raise ValidationError('Current password is incorrect.', redirect_endpoint='user_profile.index')
        user.set_password(new_password)
        db.session.commit()
        current_app.logger.info(f"Password changed for user {user.user_id}")
        profile_updated.send(current_app._get_current_object(), user=user, changes=['password'])
        return True

    @staticmethod
    def set_theme(user: User, theme):
        if theme not in User.THEMES:
            raise ValidationError('Unknown theme.', redirect_endpoint='user_profile.index')
        user.theme = theme
        db.session.commit()
        return theme
