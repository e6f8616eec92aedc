from flask import flash, redirect, render_template, url_for
from flask_login import current_user, login_required

from . import study_modules_bp as blueprint
from .forms import ModuleForm
from .services import ModuleService


@blueprint.route('/', methods=['GET', 'POST'])
@login_required
def index():
    form = ModuleForm()
    if form.validate_on_submit():
        ModuleService.create_module(current_user.user_id, form.name.data, form.color.data, form.description.data)
        flash('Module created successfully!', 'success')
        return redirect(url_for('study_modules.index'))

    modules = ModuleService.list_with_note_counts(current_user.user_id)
    return render_template('study_modules/index.html', form=form, modules=modules)


@blueprint.route('/<int:module_id>/edit', methods=['GET', 'POST'])
@login_required
def edit(module_id):
    module = ModuleService.get_owned_module(current_user.user_id, module_id)
    form = ModuleForm(obj=module)
    if form.validate_on_submit():
        ModuleService.update_module(current_user.user_id, module_id, form.name.data, form.color.data, form.description.data)
        flash('Module updated successfully!', 'success')
        return redirect(url_for('study_modules.index'))
    return render_template('study_modules/edit.html', form=form, module=module)


@blueprint.route('/<int:module_id>/delete', methods=['POST'])
@login_required
def delete(module_id):
    ModuleService.delete_module(current_user.user_id, module_id)
    flash('Module and its notes deleted.', 'success')
    return redirect(url_for('study_modules.index'))
