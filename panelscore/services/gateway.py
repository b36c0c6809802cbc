"""Database access for the evaluation core.

Reads return validated records (see ``records.py``); writes work on ORM rows
and leave committing to the caller so one user action maps to one
transaction.
"""
from ..extensions import db
from ..models.candidate import Candidate
from ..models.evaluator import Evaluator
from ..models.item import EvaluationItem
from ..models.category import EvaluationCategory
from ..models.score import Score
from ..models.progress import EvaluationProgress
from ..records import (
    CandidateRecord, EvaluatorRecord, ItemRecord, ScoreRecord, ProgressRecord, to_records,
)


def fetch_candidates(active_only=True):
    q = Candidate.query
    if active_only:
        q = q.filter_by(is_active=True)
    return to_records(CandidateRecord, q.order_by(Candidate.sort_order.asc(), Candidate.id.asc()).all())


def fetch_evaluators(active_only=True):
    q = Evaluator.query
    if active_only:
        q = q.filter_by(is_active=True)
    return to_records(EvaluatorRecord, q.order_by(Evaluator.name.asc()).all())


def fetch_items(active_only=True):
    """Items ordered by category then item sort order."""
    q = EvaluationItem.query.join(EvaluationCategory)
    if active_only:
        q = q.filter(EvaluationItem.is_active.is_(True), EvaluationCategory.is_active.is_(True))
    q = q.order_by(EvaluationCategory.sort_order.asc(), EvaluationItem.sort_order.asc(), EvaluationItem.id.asc())
    return to_records(ItemRecord, q.all())


def fetch_final_scores():
    return to_records(ScoreRecord, Score.query.filter_by(is_final=True).all())


def fetch_scores(evaluator_id, candidate_id):
    rows = Score.query.filter_by(evaluator_id=evaluator_id, candidate_id=candidate_id).all()
    return to_records(ScoreRecord, rows)


def fetch_progress(evaluator_id=None):
    q = EvaluationProgress.query
    if evaluator_id is not None:
        q = q.filter_by(evaluator_id=evaluator_id)
    return to_records(ProgressRecord, q.all())


def get_progress_row(evaluator_id, candidate_id):
    return EvaluationProgress.query.filter_by(evaluator_id=evaluator_id, candidate_id=candidate_id).first()


def get_active_candidate(candidate_id):
    c = Candidate.query.filter_by(id=candidate_id, is_active=True).first()
    return to_records(CandidateRecord, [c])[0] if c else None


def upsert_score(evaluator_id, candidate_id, item_id, score, max_score=None, comments=None, is_final=False):
    """Insert or overwrite the score keyed by (evaluator, candidate, item)."""
    row = Score.query.filter_by(evaluator_id=evaluator_id, candidate_id=candidate_id, item_id=item_id).first()
    if row is None:
        row = Score(evaluator_id=evaluator_id, candidate_id=candidate_id, item_id=item_id)
        db.session.add(row)
    row.score = score
    row.max_score = max_score
    row.comments = comments
    row.is_final = is_final
    db.session.flush()
    return row


def upsert_progress(evaluator_id, candidate_id, **values):
    """Insert or overwrite the progress row keyed by (evaluator, candidate)."""
    row = get_progress_row(evaluator_id, candidate_id)
    if row is None:
        row = EvaluationProgress(evaluator_id=evaluator_id, candidate_id=candidate_id)
        db.session.add(row)
    for k, v in values.items():
        setattr(row, k, v)
    db.session.flush()
    return row
