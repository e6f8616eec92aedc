# File: studymate_app/modules/user_profile/forms.py

import pytz
from flask_wtf import FlaskForm
from flask_wtf.file import FileAllowed, FileField, FileRequired
from wtforms import PasswordField, SelectField, StringField, SubmitField
from wtforms.validators import DataRequired, EqualTo, Length, Regexp, ValidationError

from ..auth.forms import EMAIL_PATTERN, USERNAME_PATTERN, PasswordPolicy, normalize_email
from ..auth.models import User

AVATAR_EXTENSIONS = ['jpg', 'jpeg', 'png', 'gif', 'webp']


class ProfileForm(FlaskForm):
    username = StringField('Username', validators=[
        DataRequired(message='Username is required.'),
        Length(min=3, max=50, message='Username must be between 3 and 50 characters.'),
        Regexp(USERNAME_PATTERN, message='Username may only contain letters, numbers and underscores.'),
    ])
    email = StringField('Email', filters=[normalize_email], validators=[
        DataRequired(message='Email is required.'),
        Length(max=120),
        Regexp(EMAIL_PATTERN, message='Please enter a valid email address.'),
    ])
    timezone = SelectField('Timezone', choices=[(tz, tz) for tz in pytz.common_timezones], default='UTC')
    submit = SubmitField('Save profile')

    def __init__(self, *args, user=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user = user

    def validate_username(self, field):
        existing = User.query.filter(User.username == field.data).first()
        if existing and (self.user is None or existing.user_id != self.user.user_id):
            raise ValidationError('This username is already taken.')

    def validate_email(self, field):
        existing = User.query.filter(User.email == field.data).first()
        if existing and (self.user is None or existing.user_id != self.user.user_id):
            raise ValidationError('This email is already registered.')


class ChangePasswordForm(FlaskForm):
    current_password = PasswordField('Current password', validators=[
        DataRequired(message='Please enter your current password.')])
    new_password = PasswordField('New password', validators=[
        DataRequired(message='Please choose a new password.'), PasswordPolicy()])
    confirm_password = PasswordField('Confirm new password', validators=[
        DataRequired(message='Please confirm your new password.'),
        EqualTo('new_password', message='Passwords do not match.'),
    ])
    submit = SubmitField('Change password')


class AvatarForm(FlaskForm):
    avatar = FileField('Avatar', validators=[
        FileRequired(message='Please choose an image.'),
        FileAllowed(AVATAR_EXTENSIONS, 'Only JPG, PNG, GIF and WEBP images are allowed.'),
    ])
    submit = SubmitField('Upload')
