from panelscore.records import CandidateRecord, EvaluatorRecord, ItemRecord, ScoreRecord, ProgressRecord
from panelscore.services.aggregation import (
    compute_results, evaluator_totals, item_breakdown, max_possible_score, completion_matrix, submitted_counts,
)
from panelscore.services.progress import ProgressStatus


def _cand(id, sort_order=None, name=None):
    return CandidateRecord(id=id, name=name or f'c{id}', sort_order=sort_order if sort_order is not None else id)


def _ev(id):
    return EvaluatorRecord(id=id, name=f'e{id}')


def _item(id, max_score=50, weight=1.0):
    return ItemRecord(id=id, category_id=1, item_code=f'A{id}', item_name=f'i{id}', max_score=max_score, weight=weight)


def _score(ev, cand, item, score, final=True):
    return ScoreRecord(evaluator_id=ev, candidate_id=cand, item_id=item, score=score, is_final=final)


def test_single_evaluator_scenario():
    items = [_item(1), _item(2)]
    scores = [_score(1, 1, 1, 40), _score(1, 1, 2, 30)]
    [r] = compute_results([_cand(1)], [_ev(1)], items, scores)
    assert r.evaluator_totals == {1: 70}
    assert r.average_score == 70
    assert r.max_possible_score == 100
    assert r.percentage == 70
    assert r.rank == 1


def test_two_evaluators_are_averaged():
    items = [_item(1), _item(2)]
    scores = [
        _score(1, 1, 1, 40), _score(1, 1, 2, 30),
        _score(2, 1, 1, 45), _score(2, 1, 2, 45),
    ]
    [r] = compute_results([_cand(1)], [_ev(1), _ev(2)], items, scores)
    assert r.average_score == 80
    assert r.evaluator_count == 2


def test_no_scores_gives_zero_without_division_error():
    results = compute_results([_cand(1), _cand(2)], [_ev(1)], [_item(1)], [])
    assert [r.average_score for r in results] == [0, 0]
    assert [r.percentage for r in results] == [0, 0]


def test_no_items_gives_zero_percentage():
    [r] = compute_results([_cand(1)], [_ev(1)], [], [])
    assert r.max_possible_score == 0
    assert r.percentage == 0


def test_higher_percentage_ranks_first():
    items = [_item(1, max_score=100)]
    scores = [_score(1, 1, 1, 80), _score(1, 2, 1, 92.5)]
    results = compute_results([_cand(1), _cand(2)], [_ev(1)], items, scores)
    assert [r.candidate.id for r in results] == [2, 1]
    assert results[0].percentage == 92.5
    assert [r.rank for r in results] == [1, 2]


def test_unscored_candidate_is_listed_last():
    items = [_item(1)]
    scores = [_score(1, 2, 1, 10)]
    results = compute_results([_cand(1), _cand(2)], [_ev(1)], items, scores)
    assert results[-1].candidate.id == 1
    assert results[-1].percentage == 0


def test_ties_keep_fetch_order():
    items = [_item(1)]
    scores = [_score(1, c, 1, 25) for c in (1, 2, 3)]
    results = compute_results([_cand(3), _cand(1), _cand(2)], [_ev(1)], items, scores)
    assert [r.candidate.id for r in results] == [3, 1, 2]


def test_draft_scores_are_ignored():
    items = [_item(1)]
    scores = [_score(1, 1, 1, 50, final=False)]
    [r] = compute_results([_cand(1)], [_ev(1)], items, scores)
    assert r.average_score == 0
    assert r.score_count == 0


def test_weight_applies_to_numerator_and_denominator():
    items = [_item(1, max_score=10, weight=1), _item(2, max_score=20, weight=2)]
    assert max_possible_score(items) == 50
    scores = [_score(1, 1, 1, 10), _score(1, 1, 2, 10)]
    [r] = compute_results([_cand(1)], [_ev(1)], items, scores)
    assert r.average_score == 30
    assert r.percentage == 60


def test_zero_weight_item_adds_nothing():
    items = [_item(1, max_score=50), _item(2, max_score=50, weight=0)]
    scores = [_score(1, 1, 1, 25), _score(1, 1, 2, 50)]
    [r] = compute_results([_cand(1)], [_ev(1)], items, scores)
    assert r.max_possible_score == 50
    assert r.percentage == 50


def test_raising_weight_of_strong_item_raises_percentage():
    scores = [_score(1, 1, 1, 50), _score(1, 1, 2, 10)]
    low = compute_results([_cand(1)], [_ev(1)], [_item(1), _item(2)], scores)[0].percentage
    high = compute_results([_cand(1)], [_ev(1)], [_item(1, weight=3), _item(2)], scores)[0].percentage
    assert high > low


def test_scores_for_unknown_items_and_evaluators_are_ignored():
    items = [_item(1)]
    scores = [_score(1, 1, 1, 30), _score(1, 1, 99, 50), _score(7, 1, 1, 50)]
    [r] = compute_results([_cand(1)], [_ev(1)], items, scores)
    assert r.evaluator_totals == {1: 30}
    assert r.score_count == 1


def test_evaluator_totals_filters_by_candidate():
    items_by_id = {1: _item(1)}
    scores = [_score(1, 1, 1, 10), _score(1, 2, 1, 20)]
    assert evaluator_totals(2, scores, items_by_id) == {1: 20}


def test_item_breakdown_groups_final_scores():
    items = [_item(1), _item(2)]
    scores = [_score(1, 1, 1, 40), _score(2, 1, 1, 20), _score(1, 1, 2, 10, final=False)]
    rows = item_breakdown(1, [_ev(1), _ev(2)], items, scores)
    assert [len(b.entries) for b in rows] == [2, 0]
    assert rows[0].average == 30
    assert rows[1].average == 0


def test_completion_matrix_covers_every_pair():
    progress = [
        ProgressRecord(evaluator_id=1, candidate_id=1, total_items=2, completed_items=2,
                       progress_percentage=100, is_submitted=True),
        ProgressRecord(evaluator_id=1, candidate_id=2, total_items=2, completed_items=1,
                       progress_percentage=50),
    ]
    matrix = completion_matrix([_cand(1), _cand(2)], [_ev(1), _ev(2)], progress)
    assert matrix[(1, 1)] is ProgressStatus.SUBMITTED
    assert matrix[(1, 2)] is ProgressStatus.IN_PROGRESS
    assert matrix[(2, 1)] is ProgressStatus.NOT_STARTED
    assert submitted_counts(matrix) == {1: 1, 2: 0}
