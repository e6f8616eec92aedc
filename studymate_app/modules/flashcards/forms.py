from flask_wtf import FlaskForm
from wtforms import SelectField, SubmitField, TextAreaField
from wtforms.validators import DataRequired, Length


class FlashcardForm(FlaskForm):
    module_id = SelectField('Module', coerce=int, validators=[DataRequired(message='Please select a module.')])
    question = TextAreaField('Question', validators=[
        DataRequired(message='Question is required.'), Length(max=2000)])
    answer = TextAreaField('Answer', validators=[
        DataRequired(message='Answer is required.'), Length(max=2000)])
    submit = SubmitField('Save flashcard')

    def set_module_choices(self, modules):
        self.module_id.choices = [(module.module_id, module.name) for module in modules]
