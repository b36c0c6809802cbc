from ..extensions import db
from .base import TimestampMixin


class Setting(db.Model, TimestampMixin):
    __tablename__ = 'settings'
    id = db.Column(db.Integer, primary_key=True)
    key = db.Column(db.String(128), nullable=False, unique=True, index=True)
    value = db.Column(db.Text, nullable=True)

    def __repr__(self):
        return f"<Setting key={self.key} value={self.value}>"
