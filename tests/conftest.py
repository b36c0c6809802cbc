import os
import sys
from types import SimpleNamespace

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from panelscore import create_app
from panelscore.extensions import db
from panelscore.models.admin import Admin
from panelscore.models.candidate import Candidate
from panelscore.models.category import EvaluationCategory
from panelscore.models.evaluator import Evaluator
from panelscore.models.item import EvaluationItem

ADMIN_EMAIL = 'admin@example.com'
ADMIN_PASSWORD = 'admin-pass-1'
EVALUATOR_PASSWORD = 'pw1234'


@pytest.fixture
def app():
    app = create_app('config.TestConfig')
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def ctx(app):
    """Pushed app context for tests that call services directly."""
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def seed(app):
    """One admin, one category with two items (A1 max 10 w1, A2 max 20 w2),
    two candidates and two evaluators. Returns ids only."""
    with app.app_context():
        admin = Admin(email=ADMIN_EMAIL)
        admin.set_password(ADMIN_PASSWORD)
        cat = EvaluationCategory(category_code='A', category_name='직무역량', sort_order=1)
        db.session.add_all([admin, cat])
        db.session.flush()
        i1 = EvaluationItem(category_id=cat.id, item_code='A1', item_name='전문성', max_score=10, weight=1, sort_order=1)
        i2 = EvaluationItem(category_id=cat.id, item_code='A2', item_name='의사소통', max_score=20, weight=2, sort_order=2)
        c1 = Candidate(name='김철수', department='개발팀', sort_order=1)
        c2 = Candidate(name='이영희', department='기획팀', sort_order=2)
        e1 = Evaluator(name='평가위원1')
        e2 = Evaluator(name='평가위원2')
        for e in (e1, e2):
            e.set_password(EVALUATOR_PASSWORD)
        db.session.add_all([i1, i2, c1, c2, e1, e2])
        db.session.commit()
        return SimpleNamespace(
            admin_id=admin.id,
            category_id=cat.id,
            item_ids=[i1.id, i2.id],
            candidate_ids=[c1.id, c2.id],
            evaluator_ids=[e1.id, e2.id],
        )


def login_admin(client):
    return client.post('/auth/admin/login', data={'email': ADMIN_EMAIL, 'password': ADMIN_PASSWORD})


def login_evaluator(client, name='평가위원1'):
    return client.post('/auth/evaluator/login', data={'name': name, 'password': EVALUATOR_PASSWORD})
