"""
Tests for subject modules: CRUD through the routes and the cascade on
delete.
"""
from studymate_app import db
from studymate_app.models import Flashcard, Module, Note, StudySession, Tag, note_tags
from studymate_app.modules.notes.services import NoteService
from studymate_app.modules.study_modules.services import ModuleService

from helpers import make_flashcard, make_module, make_note, make_session


class TestModuleCrud:

    def test_create(self, app, alice, alice_client):
        response = alice_client.post('/modules/', data={
            'name': '  Organic Chemistry ', 'color': '#10B981', 'description': 'Year 2',
        })
        assert response.status_code == 302
        with app.app_context():
            module = Module.query.filter_by(user_id=alice).one()
            assert module.name == 'Organic Chemistry'
            assert module.color == '#10B981'

    def test_default_color(self, app, alice, alice_client):
        alice_client.post('/modules/', data={'name': 'History', 'color': ''})
        with app.app_context():
            assert Module.query.filter_by(user_id=alice).one().color == '#3B82F6'

    def test_rejects_bad_color(self, app, alice, alice_client):
        response = alice_client.post('/modules/', data={'name': 'History', 'color': 'blue'})
        assert response.status_code == 200
        assert b'Color must be a hex value' in response.data
        with app.app_context():
            assert Module.query.count() == 0

    def test_rename(self, app, alice, alice_client):
        module_id = make_module(app, alice, 'Maths')
        alice_client.post(f'/modules/{module_id}/edit', data={'name': 'Further Maths', 'color': '#F59E0B'})
        with app.app_context():
            assert db.session.get(Module, module_id).name == 'Further Maths'

    def test_list_includes_note_counts(self, app, alice):
        maths = make_module(app, alice, 'Maths')
        make_module(app, alice, 'Art')
        make_note(app, alice, maths, 'Algebra')
        make_note(app, alice, maths, 'Calculus')
        with app.app_context():
            counts = {module.name: count for module, count in ModuleService.list_with_note_counts(alice)}
        assert counts == {'Art': 0, 'Maths': 2}


class TestModuleDeleteCascade:

    def test_delete_removes_notes_and_flashcards(self, app, alice, alice_client):
        module_id = make_module(app, alice)
        note_ids = [make_note(app, alice, module_id, f'Note {i}') for i in range(3)]
        card_id = make_flashcard(app, alice, module_id)

        response = alice_client.post(f'/modules/{module_id}/delete')
        assert response.status_code == 302

        with app.app_context():
            assert db.session.get(Module, module_id) is None
            assert all(db.session.get(Note, note_id) is None for note_id in note_ids)
            assert db.session.get(Flashcard, card_id) is None

    def test_delete_leaves_other_modules_alone(self, app, alice):
        doomed = make_module(app, alice, 'Doomed')
        kept = make_module(app, alice, 'Kept')
        kept_note = make_note(app, alice, kept, 'Survivor')
        make_note(app, alice, doomed, 'Casualty')

        with app.app_context():
            ModuleService.delete_module(alice, doomed)
            assert db.session.get(Note, kept_note) is not None
            assert Note.query.count() == 1

    def test_delete_unlinks_tags_but_keeps_them(self, app, alice):
        module_id = make_module(app, alice)
        with app.app_context():
            NoteService.create_note(alice, 'Tagged', 'body', module_id, 'exam, week-1')
            ModuleService.delete_module(alice, module_id)

            assert db.session.execute(db.select(db.func.count()).select_from(note_tags)).scalar() == 0
            assert sorted(tag.name for tag in Tag.query.all()) == ['exam', 'week-1']

    def test_study_sessions_survive_without_module(self, app, alice):
        module_id = make_module(app, alice)
        session_id = make_session(app, alice, module_id, duration=50)

        with app.app_context():
            ModuleService.delete_module(alice, module_id)
            session = db.session.get(StudySession, session_id)
            assert session is not None
            assert session.module_id is None
            assert session.duration_minutes == 50
