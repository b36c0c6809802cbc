import pytest

from panelscore.errors import RecordValidationError
from panelscore.records import ItemRecord, ScoreRecord, ProgressRecord, to_record


def test_valid_mapping_becomes_record():
    rec = to_record(ItemRecord, {'id': 1, 'category_id': 1, 'item_code': 'A1', 'item_name': '전문성',
                                 'max_score': 10, 'weight': 2})
    assert rec.kind == 'item'
    assert rec.weighted_max == 20


def test_missing_field_is_rejected():
    with pytest.raises(RecordValidationError) as exc:
        to_record(ItemRecord, {'id': 3, 'category_id': 1, 'item_code': 'A1', 'item_name': 'x', 'max_score': 10})
    assert exc.value.kind == 'item'
    assert exc.value.row_id == 3


def test_unknown_key_is_rejected():
    with pytest.raises(RecordValidationError):
        to_record(ScoreRecord, {'evaluator_id': 1, 'candidate_id': 1, 'item_id': 1, 'score': 1, 'bogus': True})


def test_score_above_snapshot_max_is_rejected():
    with pytest.raises(RecordValidationError):
        to_record(ScoreRecord, {'evaluator_id': 1, 'candidate_id': 1, 'item_id': 1, 'score': 11, 'max_score': 10})


def test_progress_percentage_bounds():
    with pytest.raises(RecordValidationError):
        to_record(ProgressRecord, {'evaluator_id': 1, 'candidate_id': 1, 'total_items': 1,
                                   'completed_items': 1, 'progress_percentage': 120})


def test_non_finite_numbers_are_rejected():
    base = {'id': 1, 'category_id': 1, 'item_code': 'A1', 'item_name': 'x', 'max_score': 10, 'weight': 1}
    with pytest.raises(RecordValidationError):
        to_record(ItemRecord, base | {'weight': float('inf')})
    with pytest.raises(RecordValidationError):
        to_record(ItemRecord, base | {'max_score': float('nan')})
    with pytest.raises(RecordValidationError):
        to_record(ScoreRecord, {'evaluator_id': 1, 'candidate_id': 1, 'item_id': 1, 'score': float('inf')})
