from ..extensions import db
from .base import ActiveMixin, TimestampMixin

class EvaluationItem(db.Model, ActiveMixin, TimestampMixin):
    __tablename__ = "evaluation_items"

    id = db.Column(db.Integer, primary_key=True)
    category_id = db.Column(db.Integer, db.ForeignKey("evaluation_categories.id", ondelete="CASCADE"), nullable=False, index=True)
    item_code = db.Column(db.String(40), nullable=False)
    item_name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    max_score = db.Column(db.Float, nullable=False, default=100)
    weight = db.Column(db.Float, nullable=False, default=1.0)
    sort_order = db.Column(db.Integer, nullable=False, default=0)

    category = db.relationship("EvaluationCategory", back_populates="items")

    def __repr__(self) -> str:
        return f"<EvaluationItem id={self.id} code={self.item_code!r}>"
