from ..extensions import db
from flask_login import UserMixin
from .base import ActiveMixin, TimestampMixin
from werkzeug.security import generate_password_hash, check_password_hash

# ActiveMixin must precede UserMixin so the column shadows UserMixin.is_active
class Evaluator(db.Model, ActiveMixin, TimestampMixin, UserMixin):
    __tablename__ = "evaluators"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False, unique=True, index=True)
    email = db.Column(db.String(254))
    department = db.Column(db.String(120))
    password_hash = db.Column(db.String(255), nullable=False)

    role = "evaluator"

    def get_id(self):
        return f"evaluator:{self.id}"

    @property
    def display_name(self):
        return self.name

    def set_password(self, raw):
        self.password_hash = generate_password_hash(raw)

    def check_password(self, raw):
        return check_password_hash(self.password_hash, raw)

    def __repr__(self) -> str:
        return f"<Evaluator id={self.id} name={self.name!r}>"
