"""Per (evaluator, candidate) completion tracking.

A pair moves from not started to in progress to submitted. Submission is
final; no call in this module takes a submitted pair back to draft.
"""
from __future__ import annotations

import enum
from datetime import datetime, timezone

from flask import current_app

from ..errors import AlreadySubmittedError
from ..extensions import db
from ..records import ProgressRecord, to_record
from . import gateway


class ProgressStatus(enum.Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    SUBMITTED = "submitted"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    ProgressStatus.NOT_STARTED: "미평가",
    ProgressStatus.IN_PROGRESS: "평가중",
    ProgressStatus.SUBMITTED: "평가완료",
}


def classify(progress: ProgressRecord | None) -> ProgressStatus:
    if progress is None:
        return ProgressStatus.NOT_STARTED
    if progress.is_submitted:
        return ProgressStatus.SUBMITTED
    if progress.completed_items == 0:
        return ProgressStatus.NOT_STARTED
    return ProgressStatus.IN_PROGRESS


def draft_percentage(items_scored: int, total_items: int) -> float:
    if total_items <= 0:
        return 0.0
    return items_scored / total_items * 100


def ensure_editable(evaluator_id: int, candidate_id: int):
    row = gateway.get_progress_row(evaluator_id, candidate_id)
    if row is not None and row.is_submitted:
        raise AlreadySubmittedError(evaluator_id, candidate_id)
    return row


def record_draft(evaluator_id: int, candidate_id: int, items_scored: int, total_items: int,
                 general_comment: str | None = None, commit: bool = True) -> ProgressRecord:
    """Store a partial evaluation. Raises AlreadySubmittedError on a finalized pair."""
    if items_scored < 0 or total_items < 0:
        raise ValueError("item counts must be non-negative")
    if items_scored > total_items:
        raise ValueError(f"items_scored {items_scored} exceeds total_items {total_items}")
    ensure_editable(evaluator_id, candidate_id)
    values = dict(
        total_items=total_items,
        completed_items=items_scored,
        progress_percentage=draft_percentage(items_scored, total_items),
        is_submitted=False,
        submitted_at=None,
    )
    # None leaves the stored comment alone; an empty string clears it
    if general_comment is not None:
        values['general_comment'] = general_comment or None
    row = gateway.upsert_progress(evaluator_id, candidate_id, **values)
    if commit:
        db.session.commit()
    current_app.logger.info('Draft saved: evaluator=%s candidate=%s %s/%s',
                            evaluator_id, candidate_id, items_scored, total_items)
    return to_record(ProgressRecord, row)


def record_final(evaluator_id: int, candidate_id: int, total_items: int,
                 general_comment: str | None = None, commit: bool = True) -> ProgressRecord:
    """Mark the pair submitted. Percentage is forced to 100 whatever was scored."""
    if total_items < 0:
        raise ValueError("total_items must be non-negative")
    ensure_editable(evaluator_id, candidate_id)
    values = dict(
        total_items=total_items,
        completed_items=total_items,
        progress_percentage=100.0,
        is_submitted=True,
        submitted_at=datetime.now(timezone.utc),
    )
    # None leaves the stored comment alone; an empty string clears it
    if general_comment is not None:
        values['general_comment'] = general_comment or None
    row = gateway.upsert_progress(evaluator_id, candidate_id, **values)
    if commit:
        db.session.commit()
    current_app.logger.info('Evaluation submitted: evaluator=%s candidate=%s', evaluator_id, candidate_id)
    return to_record(ProgressRecord, row)


def start_evaluation(evaluator_id: int, candidate_id: int, total_items: int, commit: bool = True) -> ProgressRecord:
    """Create a zeroed progress row unless one already exists."""
    row = gateway.get_progress_row(evaluator_id, candidate_id)
    if row is None:
        row = gateway.upsert_progress(
            evaluator_id, candidate_id,
            total_items=total_items, completed_items=0,
            progress_percentage=0.0, is_submitted=False,
        )
        if commit:
            db.session.commit()
    return to_record(ProgressRecord, row)
