from dataclasses import dataclass

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from ..errors import ScoreOutOfRangeError
from ..extensions import db
from ..models.score import Score
from . import gateway
from .progress import record_draft, record_final, ensure_editable


@dataclass(slots=True)
class ScoreEntry:
    item_id: int
    score: float | None
    comments: str | None = None


def validate_entries(entries, items):
    """Check every entered score lies within 0..max_score of its item."""
    items_by_id = {i.id: i for i in items}
    for e in entries:
        item = items_by_id.get(e.item_id)
        if item is None or e.score is None:
            continue
        if e.score < 0 or e.score > item.max_score:
            raise ScoreOutOfRangeError(e.item_id, e.score, item.max_score)


def save_evaluation(evaluator_id, candidate_id, entries, items, final=False, general_comment=None):
    """Write one evaluator's scores for one candidate and update progress.

    Blank entries remove any stored score for that item. Everything happens
    in one transaction; on a database error the session is rolled back and
    the error propagates so the caller can report it.
    """
    validate_entries(entries, items)
    ensure_editable(evaluator_id, candidate_id)
    items_by_id = {i.id: i for i in items}
    total_items = len(items)
    scored = 0
    try:
        for e in entries:
            item = items_by_id.get(e.item_id)
            if item is None:
                continue
            if e.score is None:
                Score.query.filter_by(evaluator_id=evaluator_id, candidate_id=candidate_id, item_id=e.item_id).delete()
                continue
            gateway.upsert_score(
                evaluator_id, candidate_id, e.item_id, e.score,
                max_score=item.max_score, comments=e.comments or None, is_final=final,
            )
            scored += 1
        if final:
            # 미입력 항목이 있어도 제출 시 100%로 처리
            progress = record_final(evaluator_id, candidate_id, total_items, general_comment=general_comment, commit=False)
        else:
            progress = record_draft(evaluator_id, candidate_id, scored, total_items, general_comment=general_comment, commit=False)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception('Saving evaluation failed: evaluator=%s candidate=%s', evaluator_id, candidate_id)
        raise
    return progress
