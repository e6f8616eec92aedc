from .flashcard_service import FlashcardService

__all__ = ['FlashcardService']
