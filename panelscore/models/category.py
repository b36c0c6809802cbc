from ..extensions import db
from .base import ActiveMixin, TimestampMixin

class EvaluationCategory(db.Model, ActiveMixin, TimestampMixin):
    __tablename__ = "evaluation_categories"

    id = db.Column(db.Integer, primary_key=True)
    category_code = db.Column(db.String(20), nullable=False, unique=True)
    category_name = db.Column(db.String(120), nullable=False)
    description = db.Column(db.Text)
    sort_order = db.Column(db.Integer, nullable=False, default=0)

    items = db.relationship(
        "EvaluationItem",
        back_populates="category",
        cascade="all, delete-orphan",
        order_by="EvaluationItem.sort_order",
    )

    def __repr__(self) -> str:
        return f"<EvaluationCategory id={self.id} code={self.category_code!r}>"
