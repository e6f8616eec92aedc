# File: studymate_app/modules/notes/routes.py
from flask import flash, redirect, render_template, request, url_for
from flask_login import current_user, login_required

from studymate_app.utils.pagination import get_pagination_data

from . import notes_bp as blueprint
from ..study_modules.services import ModuleService
from .forms import NoteForm
from .services import NoteService, TagService


def _load_module_choices(form):
    modules = ModuleService.list_modules(current_user.user_id)
    form.set_module_choices(modules)
    return modules


@blueprint.route('/')
@login_required
def index():
    filters = {
        'module_id': request.args.get('module', type=int),
        'tag_id': request.args.get('tag', type=int),
        'search': request.args.get('q', '').strip(),
        'archived': request.args.get('archived') == '1',
    }
    pagination = get_pagination_data(
        NoteService.build_notes_query(current_user.user_id, **filters),
        request.args.get('page', 1, type=int),
    )
    return render_template(
        'notes/index.html',
        notes=pagination.items,
        pagination=pagination,
        filters=filters,
        modules=ModuleService.list_modules(current_user.user_id),
        tags=TagService.list_tags(current_user.user_id),
    )


@blueprint.route('/new', methods=['GET', 'POST'])
@login_required
def create():
    form = NoteForm()
    if not _load_module_choices(form):
        flash('Create a module before adding notes.', 'info')
        return redirect(url_for('study_modules.index'))

    if request.method == 'GET' and request.args.get('module', type=int):
        form.module_id.data = request.args.get('module', type=int)

    if form.validate_on_submit():
        note = NoteService.create_note(
            current_user.user_id, form.title.data, form.content.data, form.module_id.data, form.tags.data
        )
        flash('Note created successfully!', 'success')
        return redirect(url_for('notes.view', note_id=note.note_id))

    return render_template('notes/form.html', form=form, note=None)


@blueprint.route('/<int:note_id>')
@login_required
def view(note_id):
    note = NoteService.get_owned_note(current_user.user_id, note_id)
    return render_template('notes/view.html', note=note)


@blueprint.route('/<int:note_id>/edit', methods=['GET', 'POST'])
@login_required
def edit(note_id):
    note = NoteService.get_owned_note(current_user.user_id, note_id)
    form = NoteForm(obj=note)
    _load_module_choices(form)
    if request.method == 'GET':
        form.tags.data = ', '.join(note.tag_names)

    if form.validate_on_submit():
        NoteService.update_note(
            current_user.user_id, note_id, form.title.data, form.content.data, form.module_id.data, form.tags.data
        )
        flash('Note updated successfully!', 'success')
        return redirect(url_for('notes.view', note_id=note_id))

    return render_template('notes/form.html', form=form, note=note)


@blueprint.route('/<int:note_id>/delete', methods=['POST'])
@login_required
def delete(note_id):
    NoteService.delete_note(current_user.user_id, note_id)
    flash('Note deleted.', 'success')
    return redirect(url_for('notes.index'))


@blueprint.route('/<int:note_id>/archive', methods=['POST'])
@login_required
def toggle_archive(note_id):
    note = NoteService.toggle_archive(current_user.user_id, note_id)
    flash('Note archived.' if note.is_archived else 'Note restored.', 'success')
    return redirect(url_for('notes.index'))


@blueprint.route('/tags/<int:tag_id>/delete', methods=['POST'])
@login_required
def delete_tag(tag_id):
    TagService.delete_tag(current_user.user_id, tag_id)
    flash('Tag deleted.', 'success')
    return redirect(url_for('notes.index'))
