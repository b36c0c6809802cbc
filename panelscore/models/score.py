from ..extensions import db
from .base import TimestampMixin

class Score(db.Model, TimestampMixin):
    __tablename__ = "scores"

    id = db.Column(db.Integer, primary_key=True)
    evaluator_id = db.Column(db.Integer, db.ForeignKey("evaluators.id", ondelete="CASCADE"), nullable=False, index=True)
    candidate_id = db.Column(db.Integer, db.ForeignKey("candidates.id", ondelete="CASCADE"), nullable=False, index=True)
    item_id = db.Column(db.Integer, db.ForeignKey("evaluation_items.id", ondelete="CASCADE"), nullable=False)
    score = db.Column(db.Float, nullable=False, default=0)
    # 입력 시점의 item.max_score
    max_score = db.Column(db.Float)
    comments = db.Column(db.Text)
    is_final = db.Column(db.Boolean, nullable=False, default=False, index=True)

    __table_args__ = (
        db.UniqueConstraint('evaluator_id', 'candidate_id', 'item_id', name='uq_scores_evaluator_candidate_item'),
    )

    def __repr__(self):
        return f"<Score evaluator_id={self.evaluator_id} candidate_id={self.candidate_id} item_id={self.item_id} score={self.score}>"
