from flask_wtf import FlaskForm
from wtforms import SelectField, StringField, SubmitField, TextAreaField
from wtforms.validators import DataRequired, Length, Optional

from .models import SharedNote


class StudyGroupForm(FlaskForm):
    name = StringField('Group name', validators=[
        DataRequired(message='Group name is required.'),
        Length(max=100, message='Group name must be at most 100 characters.'),
    ])
    description = TextAreaField('Description', validators=[Optional(), Length(max=1000)])
    submit = SubmitField('Create group')


class JoinGroupForm(FlaskForm):
    invite_code = StringField('Invite code', validators=[
        DataRequired(message='Please enter an invite code.'), Length(max=16)])
    submit = SubmitField('Join')


class ShareNoteForm(FlaskForm):
    recipient = StringField('Share with (username or email)', validators=[
        DataRequired(message='Please enter a username or email.'), Length(max=120)])
    permission = SelectField('Permission', default=SharedNote.PERMISSION_VIEW, choices=[
        (SharedNote.PERMISSION_VIEW, 'Can view'),
        (SharedNote.PERMISSION_EDIT, 'Can edit'),
    ])
    submit = SubmitField('Share')


class SharedNoteEditForm(FlaskForm):
    title = StringField('Title', validators=[
        DataRequired(message='Title is required.'), Length(max=255)])
    content = TextAreaField('Content', validators=[Optional()])
    submit = SubmitField('Save changes')
