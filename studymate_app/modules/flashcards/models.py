from __future__ import annotations

from studymate_app.core.extensions import db
from studymate_app.utils.time_utils import ensure_utc, utcnow


class Flashcard(db.Model):
    """Question/answer card scheduled by the spaced-repetition rules."""
    __tablename__ = 'flashcards'

    flashcard_id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False, index=True)
    module_id = db.Column(db.Integer, db.ForeignKey('modules.module_id', ondelete='CASCADE'), nullable=False, index=True)
    question = db.Column(db.Text, nullable=False)
    answer = db.Column(db.Text, nullable=False)
    times_reviewed = db.Column(db.Integer, default=0, nullable=False)
    times_correct = db.Column(db.Integer, default=0, nullable=False)
    last_reviewed = db.Column(db.DateTime(timezone=True), nullable=True)
    # NULL means the card was never reviewed and is always due
    next_review = db.Column(db.DateTime(timezone=True), nullable=True, index=True)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)

    @property
    def accuracy(self) -> int:
        if not self.times_reviewed:
            return 0
        return round(100 * self.times_correct / self.times_reviewed)

    def is_due(self, now=None) -> bool:
        if self.next_review is None:
            return True
        return ensure_utc(self.next_review) <= (now or utcnow())

    def __repr__(self):
        return f'<Flashcard {self.flashcard_id}>'
