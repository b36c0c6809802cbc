from ..extensions import db
from .base import TimestampMixin

class EvaluationProgress(db.Model, TimestampMixin):
    __tablename__ = "evaluation_progress"

    id = db.Column(db.Integer, primary_key=True)
    evaluator_id = db.Column(db.Integer, db.ForeignKey("evaluators.id", ondelete="CASCADE"), nullable=False, index=True)
    candidate_id = db.Column(db.Integer, db.ForeignKey("candidates.id", ondelete="CASCADE"), nullable=False, index=True)
    total_items = db.Column(db.Integer, nullable=False, default=0)
    completed_items = db.Column(db.Integer, nullable=False, default=0)
    progress_percentage = db.Column(db.Float, nullable=False, default=0)
    is_submitted = db.Column(db.Boolean, nullable=False, default=False)
    submitted_at = db.Column(db.DateTime)
    general_comment = db.Column(db.Text)

    __table_args__ = (
        db.UniqueConstraint('evaluator_id', 'candidate_id', name='uq_progress_evaluator_candidate'),
    )

    def __repr__(self):
        return f"<EvaluationProgress evaluator_id={self.evaluator_id} candidate_id={self.candidate_id} {self.progress_percentage}%>"
