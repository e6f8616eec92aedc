# File: studymate_app/modules/auth/forms.py
# Login, registration and password reset forms.

import re

from flask import current_app
from flask_wtf import FlaskForm
from wtforms import BooleanField, HiddenField, PasswordField, StringField, SubmitField
from wtforms.validators import DataRequired, EqualTo, Length, Regexp, ValidationError

from .models import User

EMAIL_PATTERN = r'^[^@\s]+@[^@\s]+\.[^@\s]+$'
USERNAME_PATTERN = r'^[A-Za-z0-9_]+$'


def normalize_email(value):
    return (value or '').strip().lower()


def password_policy_errors(password, min_length=8):
    """
    Check a password against the policy.

    Returns:
        list[str]: one message per broken rule, empty when the password is acceptable.
    """
    password = password or ''
    errors = []
    if len(password) < min_length:
        errors.append(f'Password must be at least {min_length} characters long.')
    if not re.search(r'[A-Z]', password):
        errors.append('Password must contain at least one uppercase letter.')
    if not re.search(r'[a-z]', password):
        errors.append('Password must contain at least one lowercase letter.')
    if not re.search(r'[0-9]', password):
        errors.append('Password must contain at least one number.')
    return errors


class PasswordPolicy:
    """WTForms validator wrapping password_policy_errors."""

    def __call__(self, form, field):
        min_length = current_app.config.get('PASSWORD_MIN_LENGTH', 8)
        errors = password_policy_errors(field.data, min_length)
        if errors:
            raise ValidationError(errors[0])


class LoginForm(FlaskForm):
    identifier = StringField('Username or email', validators=[DataRequired(message='Please enter your username or email.')])
    password = PasswordField('Password', validators=[DataRequired(message='Please enter your password.')])
    remember_me = BooleanField('Remember me')
    submit = SubmitField('Log in')


class RegistrationForm(FlaskForm):
    username = StringField('Username', validators=[
        DataRequired(message='Please choose a username.'),
        Length(min=3, max=50, message='Username must be between 3 and 50 characters.'),
        Regexp(USERNAME_PATTERN, message='Username may only contain letters, numbers and underscores.'),
    ])
    email = StringField('Email', filters=[normalize_email], validators=[
        DataRequired(message='Please enter your email.'),
        Length(max=120),
        Regexp(EMAIL_PATTERN, message='Please enter a valid email address.'),
    ])
    password = PasswordField('Password', validators=[DataRequired(message='Please choose a password.'), PasswordPolicy()])
    confirm_password = PasswordField('Confirm password', validators=[
        DataRequired(message='Please confirm your password.'),
        EqualTo('password', message='Passwords do not match.'),
    ])
    submit = SubmitField('Create account')

    def validate_username(self, username):
        if User.query.filter_by(username=username.data).first() is not None:
            raise ValidationError('This username is already taken.')

    def validate_email(self, email):
        if User.query.filter_by(email=email.data).first() is not None:
            raise ValidationError('This email is already registered.')


class ForgotPasswordForm(FlaskForm):
    email = StringField('Email', filters=[normalize_email], validators=[
        DataRequired(message='Please enter your email.'),
        Regexp(EMAIL_PATTERN, message='Please enter a valid email address.'),
    ])
    submit = SubmitField('Send reset link')


class ResetPasswordForm(FlaskForm):
    email = HiddenField(filters=[normalize_email], validators=[DataRequired()])
    token = HiddenField(validators=[DataRequired()])
    password = PasswordField('New password', validators=[DataRequired(message='Please choose a password.'), PasswordPolicy()])
    confirm_password = PasswordField('Confirm new password', validators=[
        DataRequired(message='Please confirm your password.'),
        EqualTo('password', message='Passwords do not match.'),
    ])
    submit = SubmitField('Reset password')
