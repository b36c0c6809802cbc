"""Request-scoped view of who is logged in.

Views read the signed-in account through ``current_session()`` instead of
poking at ``current_user`` attributes; the object is rebuilt for each request
from the Flask-Login user and stored on ``flask.g``.
"""
from dataclasses import dataclass

from flask import g
from flask_login import current_user

ADMIN = "admin"
EVALUATOR = "evaluator"


@dataclass(frozen=True, slots=True)
class EvaluationSession:
    role: str
    account_id: int
    display_name: str

    @property
    def is_admin(self):
        return self.role == ADMIN

    @property
    def is_evaluator(self):
        return self.role == EVALUATOR

    @classmethod
    def from_user(cls, user):
        return cls(role=user.role, account_id=user.id, display_name=user.display_name)


def load_session():
    if current_user.is_authenticated:
        g.eval_session = EvaluationSession.from_user(current_user)
    else:
        g.eval_session = None


def current_session():
    return g.get("eval_session")
