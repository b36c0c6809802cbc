from flask import current_app

from ..extensions import db
from ..models.setting import Setting

TITLE_KEY = 'evaluation_title'


def get_setting(key, default=None):
    row = Setting.query.filter_by(key=key).first()
    if row is None or row.value is None:
        return default
    return row.value


def set_setting(key, value):
    """Upsert a setting. Caller commits."""
    s = Setting.query.filter_by(key=key).first()
    if s:
        s.value = value
    else:
        s = Setting(key=key, value=value)
        db.session.add(s)
    db.session.flush()
    return s


def evaluation_title():
    return get_setting(TITLE_KEY, current_app.config.get('EVALUATION_TITLE'))


def reset_all_data():
    """Delete every candidate, evaluator, rubric row, score and progress row.

    Admin accounts and settings are kept so the system stays reachable.
    Caller commits.
    """
    from ..models.score import Score
    from ..models.progress import EvaluationProgress
    from ..models.item import EvaluationItem
    from ..models.category import EvaluationCategory
    from ..models.candidate import Candidate
    from ..models.evaluator import Evaluator

    counts = {}
    for model in (Score, EvaluationProgress, EvaluationItem, EvaluationCategory, Candidate, Evaluator):
        counts[model.__tablename__] = model.query.delete()
    db.session.flush()
    current_app.logger.warning('System reset: %s', counts)
    return counts
