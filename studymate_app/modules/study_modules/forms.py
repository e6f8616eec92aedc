from flask_wtf import FlaskForm
from wtforms import StringField, SubmitField, TextAreaField
from wtforms.validators import DataRequired, Length, Optional, Regexp

from .models import DEFAULT_MODULE_COLOR


class ModuleForm(FlaskForm):
    name = StringField('Module name', validators=[
        DataRequired(message='Module name is required.'),
        Length(max=100, message='Module name must be at most 100 characters.'),
    ])
    color = StringField('Color', default=DEFAULT_MODULE_COLOR, validators=[
        Optional(),
        Regexp(r'^#[0-9A-Fa-f]{6}$', message='Color must be a hex value like #3B82F6.'),
    ])
    description = TextAreaField('Description', validators=[Optional(), Length(max=255)])
    submit = SubmitField('Save module')
