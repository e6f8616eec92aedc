"""Row builders shared by the route and service tests."""
from studymate_app import db
from studymate_app.models import Flashcard, Module, Note, StudySession


def make_module(app, user_id, name='Biology'):
    with app.app_context():
        module = Module(user_id=user_id, name=name)
        db.session.add(module)
        db.session.commit()
        return module.module_id


def make_note(app, user_id, module_id, title='Cells', content='Mitochondria'):
    with app.app_context():
        note = Note(user_id=user_id, module_id=module_id, title=title, content=content)
        db.session.add(note)
        db.session.commit()
        return note.note_id


def make_flashcard(app, user_id, module_id, question='2 + 2?', answer='4'):
    with app.app_context():
        card = Flashcard(user_id=user_id, module_id=module_id, question=question, answer=answer)
        db.session.add(card)
        db.session.commit()
        return card.flashcard_id


def make_session(app, user_id, module_id=None, duration=25):
    with app.app_context():
        session = StudySession(user_id=user_id, module_id=module_id, duration_minutes=duration,
                               session_type=StudySession.TYPE_POMODORO, completed=True)
        db.session.add(session)
        db.session.commit()
        return session.session_id
