"""Tests for notes: tags, list filters, search, archiving and rendering."""
import pytest

from studymate_app import db
from studymate_app.models import Note, Tag
from studymate_app.modules.notes.services import NoteService, TagService

from helpers import make_module, make_note


@pytest.fixture
def module_id(app, alice):
    return make_module(app, alice, 'Biology')


class TestTagParsing:

    def test_splits_and_trims(self):
        assert TagService.parse_tag_input(' exam , chapter-1,,  ') == ['exam', 'chapter-1']

    def test_dedupes_case_insensitively(self):
        assert TagService.parse_tag_input('Exam, exam, EXAM, revision') == ['Exam', 'revision']

    def test_truncates_long_names(self):
        assert TagService.parse_tag_input('x' * 80) == ['x' * 50]

    def test_empty_input(self):
        assert TagService.parse_tag_input(None) == []
        assert TagService.parse_tag_input(' , ') == []


class TestNoteTags:

    def test_tags_reused_across_notes(self, app, alice, module_id):
        with app.app_context():
            NoteService.create_note(alice, 'One', '', module_id, 'exam, cells')
            NoteService.create_note(alice, 'Two', '', module_id, 'Exam')
            assert Tag.query.filter_by(user_id=alice).count() == 2

    def test_update_replaces_tags(self, app, alice, module_id):
        with app.app_context():
            note = NoteService.create_note(alice, 'One', '', module_id, 'exam, cells')
            NoteService.update_note(alice, note.note_id, 'One', '', module_id, 'revision')
            assert db.session.get(Note, note.note_id).tag_names == ['revision']

    def test_tags_are_per_user(self, app, alice, bob, module_id):
        bob_module = make_module(app, bob, 'Physics')
        with app.app_context():
            NoteService.create_note(alice, 'A', '', module_id, 'exam')
            NoteService.create_note(bob, 'B', '', bob_module, 'exam')
            assert Tag.query.count() == 2

    def test_delete_tag_keeps_notes(self, app, alice, alice_client, module_id):
        with app.app_context():
            note = NoteService.create_note(alice, 'Tagged', '', module_id, 'exam')
            note_id = note.note_id
            tag_id = note.tags[0].tag_id

        alice_client.post(f'/notes/tags/{tag_id}/delete')
        with app.app_context():
            assert db.session.get(Tag, tag_id) is None
            assert db.session.get(Note, note_id).tags == []


class TestNoteRoutes:

    def test_create_redirects_without_modules(self, alice_client):
        response = alice_client.get('/notes/new')
        assert response.status_code == 302
        assert response.headers['Location'].endswith('/modules/')

    def test_create(self, app, alice, alice_client, module_id):
        response = alice_client.post('/notes/new', data={
            'title': 'Photosynthesis', 'content': '# Light reactions', 'module_id': module_id, 'tags': 'exam',
        })
        assert response.status_code == 302
        with app.app_context():
            note = Note.query.filter_by(user_id=alice).one()
            assert note.title == 'Photosynthesis'
            assert note.tag_names == ['exam']
            assert response.headers['Location'].endswith(f'/notes/{note.note_id}')

    def test_create_requires_title(self, app, alice_client, module_id):
        response = alice_client.post('/notes/new', data={'title': '', 'module_id': module_id})
        assert response.status_code == 200
        assert b'Title is required.' in response.data
        with app.app_context():
            assert Note.query.count() == 0

    def test_edit(self, app, alice, alice_client, module_id):
        note_id = make_note(app, alice, module_id)
        alice_client.post(f'/notes/{note_id}/edit', data={
            'title': 'Cell biology', 'content': 'updated', 'module_id': module_id, 'tags': '',
        })
        with app.app_context():
            note = db.session.get(Note, note_id)
            assert note.title == 'Cell biology'
            assert note.content == 'updated'

    def test_delete(self, app, alice, alice_client, module_id):
        note_id = make_note(app, alice, module_id)
        alice_client.post(f'/notes/{note_id}/delete')
        with app.app_context():
            assert db.session.get(Note, note_id) is None

    def test_view_renders_markdown(self, app, alice, alice_client, module_id):
        note_id = make_note(app, alice, module_id, content='**bold** move')
        response = alice_client.get(f'/notes/{note_id}')
        assert b'<strong>bold</strong>' in response.data

    def test_view_escapes_raw_html(self, app, alice, alice_client, module_id):
        note_id = make_note(app, alice, module_id, content='<script>alert(1)</script>')
        response = alice_client.get(f'/notes/{note_id}')
        assert b'<script>alert(1)</script>' not in response.data
        assert b'&lt;script&gt;' in response.data


class TestNoteFilters:

    @pytest.fixture
    def notes(self, app, alice, module_id):
        other_module = make_module(app, alice, 'Chemistry')
        with app.app_context():
            ids = {
                'cells': NoteService.create_note(alice, 'Cells', 'mitochondria', module_id, 'exam').note_id,
                'genes': NoteService.create_note(alice, 'Genes', 'DNA replication', module_id, '').note_id,
                'acids': NoteService.create_note(alice, 'Acids', 'pH scale', other_module, 'exam').note_id,
            }
            ids['other_module'] = other_module
            ids['exam_tag'] = Tag.query.filter_by(name='exam').one().tag_id
        return ids

    def titles(self, app, user_id, **filters):
        with app.app_context():
            return sorted(note.title for note in NoteService.list_notes(user_id, **filters))

    def test_by_module(self, app, alice, notes, module_id):
        assert self.titles(app, alice, module_id=module_id) == ['Cells', 'Genes']

    def test_by_tag(self, app, alice, notes):
        assert self.titles(app, alice, tag_id=notes['exam_tag']) == ['Acids', 'Cells']

    def test_search_title_and_content(self, app, alice, notes):
        assert self.titles(app, alice, search='dna') == ['Genes']
        assert self.titles(app, alice, search='CELL') == ['Cells']

    def test_search_wildcards_match_literally(self, app, alice, notes, module_id):
        assert self.titles(app, alice, search='%') == []
        assert self.titles(app, alice, search='_') == []

        with app.app_context():
            NoteService.create_note(alice, 'Yield', 'scored 100% on the quiz', module_id, '')
            NoteService.create_note(alice, 'snake_case', 'naming', module_id, '')
        assert self.titles(app, alice, search='100%') == ['Yield']
        assert self.titles(app, alice, search='e_c') == ['snake_case']

    def test_combined_filters(self, app, alice, notes, module_id):
        assert self.titles(app, alice, module_id=module_id, tag_id=notes['exam_tag']) == ['Cells']

    def test_archived_notes_hidden_by_default(self, app, alice, alice_client, notes):
        alice_client.post(f"/notes/{notes['genes']}/archive")
        assert self.titles(app, alice) == ['Acids', 'Cells']
        assert self.titles(app, alice, archived=True) == ['Genes']

        alice_client.post(f"/notes/{notes['genes']}/archive")
        assert self.titles(app, alice, archived=True) == []

    def test_list_route_filters(self, alice_client, notes):
        response = alice_client.get('/notes/', query_string={'q': 'pH'})
        assert b'Acids' in response.data
        assert b'Genes' not in response.data

    def test_newest_edit_first(self, app, alice, notes, module_id):
        with app.app_context():
            NoteService.update_note(alice, notes['cells'], 'Cells', 'edited', module_id, 'exam')
            first = NoteService.list_notes(alice)[0]
            assert first.note_id == notes['cells']
