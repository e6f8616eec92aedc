# File: studymate_app/modules/flashcards/routes.py
from flask import flash, jsonify, redirect, render_template, request, url_for
from flask_login import current_user, login_required

from studymate_app.core.error_handlers import wants_json

from . import flashcards_bp as blueprint
from ..study_modules.services import ModuleService
from .forms import FlashcardForm
from .services import FlashcardService


def _is_truthy(value):
    return str(value).strip().lower() in ('1', 'true', 'yes', 'on', 'correct')


@blueprint.route('/', methods=['GET', 'POST'])
@login_required
def index():
    module_id = request.args.get('module', type=int)
    modules = ModuleService.list_modules(current_user.user_id)
    form = FlashcardForm()
    form.set_module_choices(modules)
    if request.method == 'GET' and module_id:
        form.module_id.data = module_id

    if form.validate_on_submit():
        FlashcardService.create_flashcard(current_user.user_id, form.module_id.data, form.question.data, form.answer.data)
        flash('Flashcard created successfully!', 'success')
        return redirect(url_for('flashcards.index', module=form.module_id.data))

    return render_template(
        'flashcards/index.html',
        form=form,
        modules=modules,
        current_module_id=module_id,
        flashcards=FlashcardService.list_flashcards(current_user.user_id, module_id),
        due_count=FlashcardService.count_due(current_user.user_id, module_id),
    )


@blueprint.route('/<int:flashcard_id>/edit', methods=['GET', 'POST'])
@login_required
def edit(flashcard_id):
    card = FlashcardService.get_owned_flashcard(current_user.user_id, flashcard_id)
    form = FlashcardForm(obj=card)
    form.set_module_choices(ModuleService.list_modules(current_user.user_id))

    if form.validate_on_submit():
        FlashcardService.update_flashcard(
            current_user.user_id, flashcard_id, form.module_id.data, form.question.data, form.answer.data
        )
        flash('Flashcard updated successfully!', 'success')
        return redirect(url_for('flashcards.index'))

    return render_template('flashcards/edit.html', form=form, flashcard=card)


@blueprint.route('/<int:flashcard_id>/delete', methods=['POST'])
@login_required
def delete(flashcard_id):
    FlashcardService.delete_flashcard(current_user.user_id, flashcard_id)
    flash('Flashcard deleted.', 'success')
    return redirect(url_for('flashcards.index'))


@blueprint.route('/review')
@login_required
def review():
    module_id = request.args.get('module', type=int)
    cards = FlashcardService.get_due_flashcards(current_user.user_id, module_id)
    return render_template(
        'flashcards/review.html',
        flashcards=cards,
        modules=ModuleService.list_modules(current_user.user_id),
        current_module_id=module_id,
    )


@blueprint.route('/<int:flashcard_id>/review', methods=['POST'])
@login_required
def submit_review(flashcard_id):
    payload = request.get_json(silent=True) or request.form
    outcome = FlashcardService.record_review(current_user.user_id, flashcard_id, _is_truthy(payload.get('correct')))

    if wants_json():
        return jsonify({
            'success': True,
            'times_reviewed': outcome.times_reviewed,
            'times_correct': outcome.times_correct,
            'accuracy': round(outcome.accuracy * 100),
            'next_review': outcome.next_review.isoformat(),
        })
    return redirect(url_for('flashcards.review', module=request.args.get('module', type=int)))
