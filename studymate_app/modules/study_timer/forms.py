from flask_wtf import FlaskForm
from wtforms import IntegerField, SelectField, SubmitField
from wtforms.validators import DataRequired, NumberRange

from .models import StudySession


class StudySessionForm(FlaskForm):
    """Manual entry of a study session done away from the timer."""
    duration = IntegerField('Minutes', validators=[
        DataRequired(message='Please enter the session length.'),
        NumberRange(min=1, max=600, message='Duration must be between 1 and 600 minutes.'),
    ])
    module_id = SelectField('Module', coerce=int, default=0)
    type = SelectField('Type', default=StudySession.TYPE_MANUAL, choices=[
        (StudySession.TYPE_MANUAL, 'Manual'),
        (StudySession.TYPE_POMODORO, 'Pomodoro'),
    ])
    submit = SubmitField('Log session')

    def set_module_choices(self, modules):
        self.module_id.choices = [(0, 'No module')] + [(m.module_id, m.name) for m in modules]
