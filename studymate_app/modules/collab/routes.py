# File: studymate_app/modules/collab/routes.py
from flask import flash, redirect, render_template, url_for
from flask_login import current_user, login_required

from studymate_app.core.error_handlers import ValidationError

from . import collab_bp as blueprint
from ..notes.services import NoteService
from .forms import JoinGroupForm, ShareNoteForm, SharedNoteEditForm, StudyGroupForm
from .services import GroupService, ShareService


# ---------------------------------------------------------------------------
# Study groups
# ---------------------------------------------------------------------------

@blueprint.route('/groups', methods=['GET', 'POST'])
@login_required
def groups():
    form = StudyGroupForm()
    if form.validate_on_submit():
        group = GroupService.create_group(current_user.user_id, form.name.data, form.description.data)
        flash(f'Study group created. Invite code: {group.invite_code}', 'success')
        return redirect(url_for('collab.group_detail', group_id=group.group_id))

    return render_template(
        'collab/groups.html',
        form=form,
        join_form=JoinGroupForm(formdata=None),
        groups=GroupService.list_user_groups(current_user.user_id),
    )


@blueprint.route('/groups/join', methods=['POST'])
@login_required
def join_group():
    form = JoinGroupForm()
    if not form.validate_on_submit():
        flash('Please enter an invite code.', 'error')
        return redirect(url_for('collab.groups'))

    group, joined = GroupService.join_group(current_user.user_id, form.invite_code.data)
    if joined:
        flash(f'You joined {group.name}!', 'success')
    else:
        flash(f'You are already a member of {group.name}.', 'info')
    return redirect(url_for('collab.group_detail', group_id=group.group_id))


@blueprint.route('/groups/<int:group_id>')
@login_required
def group_detail(group_id):
    group = GroupService.get_group_for_member(current_user.user_id, group_id)
    return render_template('collab/group_detail.html', group=group,
                           membership=group.membership_for(current_user.user_id))


@blueprint.route('/groups/<int:group_id>/leave', methods=['POST'])
@login_required
def leave_group(group_id):
    group = GroupService.leave_group(current_user.user_id, group_id)
    flash(f'You left {group.name}.', 'success')
    return redirect(url_for('collab.groups'))


@blueprint.route('/groups/<int:group_id>/delete', methods=['POST'])
@login_required
def delete_group(group_id):
    GroupService.delete_group(current_user.user_id, group_id)
    flash('Study group deleted.', 'success')
    return redirect(url_for('collab.groups'))


# ---------------------------------------------------------------------------
# Note sharing
# ---------------------------------------------------------------------------

@blueprint.route('/notes/<int:note_id>/share', methods=['GET', 'POST'])
@login_required
def share_note(note_id):
    note = NoteService.get_owned_note(current_user.user_id, note_id)
    form = ShareNoteForm()
    if form.validate_on_submit():
        try:
            share = ShareService.share_note(current_user.user_id, note_id, form.recipient.data, form.permission.data)
        except ValidationError as e:
            flash(e.message, 'error')
        else:
            flash(f'Note shared with {share.recipient.username}.', 'success')
            return redirect(url_for('collab.share_note', note_id=note_id))

    return render_template('collab/share.html', note=note, form=form,
                           shares=ShareService.list_shares_for_note(current_user.user_id, note_id))


@blueprint.route('/shares/<int:share_id>/revoke', methods=['POST'])
@login_required
def revoke_share(share_id):
    note_id = ShareService.revoke_share(current_user.user_id, share_id)
    flash('Access revoked.', 'success')
    return redirect(url_for('collab.share_note', note_id=note_id))


@blueprint.route('/shared')
@login_required
def shared():
    return render_template('collab/shared.html', shares=ShareService.list_shared_with(current_user.user_id))


@blueprint.route('/shared/<int:share_id>')
@login_required
def shared_view(share_id):
    share = ShareService.get_share_for_recipient(current_user.user_id, share_id)
    return render_template('collab/shared_view.html', share=share, note=share.note)


@blueprint.route('/shared/<int:share_id>/edit', methods=['GET', 'POST'])
@login_required
def shared_edit(share_id):
    share = ShareService.get_share_for_recipient(current_user.user_id, share_id)
    if not share.can_edit:
        flash('You only have view access to this note.', 'error')
        return redirect(url_for('collab.shared_view', share_id=share_id))

    form = SharedNoteEditForm(obj=share.note)
    if form.validate_on_submit():
        ShareService.update_shared_note(current_user.user_id, share_id, form.title.data, form.content.data)
        flash('Shared note updated.', 'success')
        return redirect(url_for('collab.shared_view', share_id=share_id))

    return render_template('collab/shared_edit.html', share=share, form=form)
