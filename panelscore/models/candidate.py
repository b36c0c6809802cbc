from ..extensions import db
from .base import ActiveMixin, TimestampMixin

class Candidate(db.Model, ActiveMixin, TimestampMixin):
    __tablename__ = "candidates"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    department = db.Column(db.String(120))
    position = db.Column(db.String(120))
    category = db.Column(db.String(120))
    description = db.Column(db.Text)
    # 표시 순서이자 순위 동점 시 기준
    sort_order = db.Column(db.Integer, nullable=False, default=0, index=True)

    def __repr__(self) -> str:
        return f"<Candidate id={self.id} name={self.name!r}>"
