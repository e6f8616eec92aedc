# File: studymate_app/modules/auth/routes.py
from urllib.parse import urlparse

from flask import current_app, flash, redirect, render_template, request, session, url_for
from flask_login import current_user, login_required, login_user, logout_user

from . import auth_bp as blueprint
from .forms import ForgotPasswordForm, LoginForm, RegistrationForm, ResetPasswordForm
from .services import AuthService, PasswordResetService

RESET_REQUESTED_MESSAGE = 'If an account exists with that email, a password reset link has been sent.'
INVALID_RESET_LINK_MESSAGE = 'This password reset link is invalid or has expired.'


def _safe_next_url(target):
    if not target:
        return None
    parsed = urlparse(target)
    if parsed.netloc or parsed.scheme or not target.startswith('/'):
        return None
    return target


@blueprint.route('/login', methods=['GET', 'POST'])
def login():
    if current_user.is_authenticated:
        return redirect(url_for('dashboard.index'))

    form = LoginForm()
    if form.validate_on_submit():
        result = AuthService.authenticate_user(form.identifier.data, form.password.data)
        if not result.success:
            flash(result.message, 'error')
            return render_template('auth/login.html', form=form)

        session.permanent = True
        login_user(result.user, remember=form.remember_me.data)
        flash(f'Welcome back, {result.user.username}!', 'success')

        next_page = _safe_next_url(request.args.get('next'))
        return redirect(next_page or url_for('dashboard.index'))

    return render_template('auth/login.html', form=form)


@blueprint.route('/logout', methods=['POST'])
@login_required
def logout():
    logout_user()
    flash('You have been logged out.', 'info')
    return redirect(url_for('landing.index'))


@blueprint.route('/register', methods=['GET', 'POST'])
def register():
    if current_user.is_authenticated:
        return redirect(url_for('dashboard.index'))

    form = RegistrationForm()
    if form.validate_on_submit():
        AuthService.register_user(
            username=form.username.data,
            email=form.email.data,
            password=form.password.data,
        )
        flash('Registration successful! Please log in.', 'success')
        return redirect(url_for('auth.login'))

    return render_template('auth/register.html', form=form)


@blueprint.route('/forgot-password', methods=['GET', 'POST'])
def forgot_password():
    if current_user.is_authenticated:
        return redirect(url_for('dashboard.index'))

    form = ForgotPasswordForm()
    if form.validate_on_submit():
        # Same answer whether or not the account exists
        PasswordResetService.request_reset(form.email.data)
        flash(RESET_REQUESTED_MESSAGE, 'success')
        return redirect(url_for('auth.login'))

    return render_template('auth/forgot_password.html', form=form)


@blueprint.route('/reset-password', methods=['GET', 'POST'])
def reset_password():
    form = ResetPasswordForm()
    if request.method == 'GET':
        form.email.data = request.args.get('email', '')
        form.token.data = request.args.get('token', '')
        if PasswordResetService.find_valid_reset(form.email.data, form.token.data) is None:
            flash(INVALID_RESET_LINK_MESSAGE, 'error')
            return redirect(url_for('auth.forgot_password'))
        return render_template('auth/reset_password.html', form=form)

    if form.validate_on_submit():
        if PasswordResetService.reset_password(form.email.data, form.token.data, form.password.data):
            flash('Your password has been reset. Please log in.', 'success')
            return redirect(url_for('auth.login'))
        current_app.logger.info("Rejected password reset with invalid or expired token")
        flash(INVALID_RESET_LINK_MESSAGE, 'error')
        return redirect(url_for('auth.forgot_password'))

    if form.email.errors or form.token.errors:
        flash(INVALID_RESET_LINK_MESSAGE, 'error')
        return redirect(url_for('auth.forgot_password'))

    return render_template('auth/reset_password.html', form=form)
