# File: studymate_app/modules/user_profile/routes.py
from flask import flash, jsonify, redirect, render_template, request, url_for
from flask_login import current_user, login_required

from studymate_app.core.error_handlers import wants_json

from . import user_profile_bp as blueprint
from .forms import AvatarForm, ChangePasswordForm, ProfileForm
from .services import UserProfileService


@blueprint.before_request
@login_required
def profile_required():
    pass


def _render_profile(profile_form=None, password_form=None, avatar_form=None):
    user = current_user._get_current_object()
    if profile_form is None:
        profile_form = ProfileForm(obj=user, user=user)
        profile_form.timezone.data = user.timezone or 'UTC'
    return render_template(
        'user_profile/index.html',
        user=user,
        profile_form=profile_form,
        password_form=password_form or ChangePasswordForm(formdata=None),
        avatar_form=avatar_form or AvatarForm(formdata=None),
    )


@blueprint.route('/', methods=['GET', 'POST'])
def index():
    user = current_user._get_current_object()
    if request.method == 'GET':
        return _render_profile()

    form = ProfileForm(user=user)
    if form.validate_on_submit():
        changes = UserProfileService.update_profile_info(
            user, username=form.username.data, email=form.email.data, timezone=form.timezone.data
        )
        flash('Profile updated successfully!' if changes else 'No changes to save.', 'success' if changes else 'info')
        return redirect(url_for('user_profile.index'))
    return _render_profile(profile_form=form)


@blueprint.route('/password', methods=['POST'])
def change_password():
    form = ChangePasswordForm()
    if form.validate_on_submit():
        UserProfileService.change_password(current_user._get_current_object(),
                                           form.current_password.data, form.new_password.data)
        flash('Your password has been changed.', 'success')
        return redirect(url_for('user_profile.index'))
    return _render_profile(password_form=form)


@blueprint.route('/avatar', methods=['POST'])
def upload_avatar():
    form = AvatarForm()
    if form.validate_on_submit():
        UserProfileService.update_avatar(current_user._get_current_object(), form.avatar.data)
        flash('Avatar updated!', 'success')
        return redirect(url_for('user_profile.index'))
    return _render_profile(avatar_form=form)


@blueprint.route('/theme', methods=['POST'])
def set_theme():
    payload = request.get_json(silent=True) or request.form
    theme = UserProfileService.set_theme(current_user._get_current_object(), payload.get('theme'))
    if wants_json():
        return jsonify({'success': True, 'theme': theme})
    return redirect(request.referrer or url_for('dashboard.index'))
