from flask_wtf import FlaskForm
from wtforms import SelectField, StringField, SubmitField, TextAreaField
from wtforms.validators import DataRequired, Length, Optional


class NoteForm(FlaskForm):
    title = StringField('Title', validators=[
        DataRequired(message='Title is required.'),
        Length(max=255, message='Title must be at most 255 characters.'),
    ])
    module_id = SelectField('Module', coerce=int, validators=[DataRequired(message='Please select a module.')])
    content = TextAreaField('Content', validators=[Optional()])
    tags = StringField('Tags', description='Comma-separated, e.g. exam, chapter-1',
                       validators=[Optional(), Length(max=500)])
    submit = SubmitField('Save note')

    def set_module_choices(self, modules):
        self.module_id.choices = [(module.module_id, module.name) for module in modules]
