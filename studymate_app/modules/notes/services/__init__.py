from .note_service import NoteService
from .tag_service import TagService

__all__ = ['NoteService', 'TagService']
