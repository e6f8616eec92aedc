"""
Flashcard Service - CRUD plus the review queue.

The scheduling rule itself is in ``logics.spaced_repetition``; this layer
loads the card, applies the outcome and persists it.
"""
from flask import current_app
from sqlalchemy import func, or_

from studymate_app.core.error_handlers import NotFoundError, ValidationError
from studymate_app.core.extensions import db
from studymate_app.core.signals import (
    content_created,
    content_deleted,
    content_updated,
    flashcard_reviewed,
)
from studymate_app.utils.time_utils import utcnow

from ...study_modules.models import Module
from ..logics.spaced_repetition import schedule_review
from ..models import Flashcard


class FlashcardService:

    @staticmethod
    def list_flashcards(user_id, module_id=None):
        query = Flashcard.query.filter_by(user_id=user_id)
        if module_id:
            query = query.filter_by(module_id=module_id)
        return query.order_by(Flashcard.created_at.desc(), Flashcard.flashcard_id.desc()).all()

    @staticmethod
    def get_owned_flashcard(user_id, flashcard_id):
        card = Flashcard.query.filter_by(flashcard_id=flashcard_id, user_id=user_id).first()
        if card is None:
            raise NotFoundError('Flashcard not found.', redirect_endpoint='flashcards.index', resource='flashcard')
        return card

    @staticmethod
    def _require_owned_module(user_id, module_id):
        if Module.query.filter_by(module_id=module_id, user_id=user_id).first() is None:
            raise ValidationError('Please select a valid module.', redirect_endpoint='flashcards.index')

    @staticmethod
    def create_flashcard(user_id, module_id, question, answer):
        FlashcardService._require_owned_module(user_id, module_id)
        card = Flashcard(user_id=user_id, module_id=module_id, question=question.strip(), answer=answer.strip())
        db.session.add(card)
        db.session.commit()
        content_created.send(current_app._get_current_object(), user_id=user_id,
                             entity_type='flashcard', entity_id=card.flashcard_id, title=card.question[:100])
        return card

    @staticmethod
    def update_flashcard(user_id, flashcard_id, module_id, question, answer):
        card = FlashcardService.get_owned_flashcard(user_id, flashcard_id)
        FlashcardService._require_owned_module(user_id, module_id)
        card.module_id = module_id
        card.question = question.strip()
        card.answer = answer.strip()
        db.session.commit()
        content_updated.send(current_app._get_current_object(), user_id=user_id,
                             entity_type='flashcard', entity_id=card.flashcard_id, title=card.question[:100])
        return card

    @staticmethod
    def delete_flashcard(user_id, flashcard_id):
        card = FlashcardService.get_owned_flashcard(user_id, flashcard_id)
        title = card.question[:100]
        db.session.delete(card)
        db.session.commit()
        content_deleted.send(current_app._get_current_object(), user_id=user_id,
                             entity_type='flashcard', entity_id=flashcard_id, title=title)

    @staticmethod
    def _due_filter(user_id, module_id, now):
        conditions = [
            Flashcard.user_id == user_id,
            or_(Flashcard.next_review.is_(None), Flashcard.next_review <= now),
        ]
        if module_id:
            conditions.append(Flashcard.module_id == module_id)
        return conditions

    @staticmethod
    def get_due_flashcards(user_id, module_id=None, limit=None, now=None):
        """
        Cards due for review: never reviewed first, then the most overdue,
        ties broken randomly. At most FLASHCARD_REVIEW_BATCH cards.
        """
        now = now or utcnow()
        if limit is None:
            limit = current_app.config.get('FLASHCARD_REVIEW_BATCH', 10)
        return db.session.execute(
            db.select(Flashcard)
            .where(*FlashcardService._due_filter(user_id, module_id, now))
            .order_by(Flashcard.next_review.asc().nulls_first(), func.random())
            .limit(limit)
        ).scalars().all()

    @staticmethod
    def count_due(user_id, module_id=None, now=None):
        now = now or utcnow()
        return db.session.execute(
            db.select(func.count(Flashcard.flashcard_id))
            .where(*FlashcardService._due_filter(user_id, module_id, now))
        ).scalar() or 0

    @staticmethod
    def record_review(user_id, flashcard_id, correct, now=None):
        """
        Apply one review answer.

        Returns:
            ReviewOutcome: the updated counters and next review time.
        """
        now = now or utcnow()
        card = FlashcardService.get_owned_flashcard(user_id, flashcard_id)
        outcome = schedule_review(card.times_reviewed, card.times_correct, bool(correct), now)

        card.times_reviewed = outcome.times_reviewed
        card.times_correct = outcome.times_correct
        card.last_reviewed = now
        card.next_review = outcome.next_review
        db.session.commit()

        flashcard_reviewed.send(current_app._get_current_object(), user_id=user_id,
                                flashcard_id=card.flashcard_id, correct=bool(correct),
                                next_review=outcome.next_review)
        return outcome
