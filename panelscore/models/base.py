from ..extensions import db

class ActiveMixin:
    is_active = db.Column(db.Boolean, nullable=False, default=True, server_default=db.true(), index=True)

class TimestampMixin:
    created_at = db.Column(db.DateTime, server_default=db.func.now())
    updated_at = db.Column(db.DateTime, server_default=db.func.now(), onupdate=db.func.now())
