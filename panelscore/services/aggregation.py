"""Score aggregation and ranking.

Everything here is a pure function of the records passed in. Results are
recomputed from the full row set on every request; nothing is cached or
stored.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from ..records import CandidateRecord, EvaluatorRecord, ItemRecord, ProgressRecord, ScoreRecord
from .progress import ProgressStatus, classify


@dataclass(slots=True)
class CandidateResult:
    """Aggregated view of one candidate."""

    candidate: CandidateRecord
    evaluator_totals: dict[int, float]
    average_score: float
    max_possible_score: float
    percentage: float
    score_count: int
    rank: int = 0

    @property
    def evaluator_count(self) -> int:
        return len(self.evaluator_totals)

    @property
    def total_score(self) -> float:
        # shown as the candidate's total in reports; equals the evaluator average
        return self.average_score


@dataclass(slots=True)
class ItemBreakdown:
    item: ItemRecord
    entries: list[tuple[EvaluatorRecord, ScoreRecord]] = field(default_factory=list)

    @property
    def average(self) -> float:
        if not self.entries:
            return 0.0
        return sum(s.score for _, s in self.entries) / len(self.entries)


@dataclass(slots=True)
class SummaryStats:
    candidate_count: int
    evaluated_candidate_count: int
    evaluator_count: int
    item_count: int


def max_possible_score(items: Iterable[ItemRecord]) -> float:
    """Sum of ``max_score * weight`` over all items (zero-weight items add 0)."""
    return sum(item.max_score * item.weight for item in items)


def evaluator_totals(candidate_id: int, scores: Iterable[ScoreRecord], items_by_id: dict[int, ItemRecord], evaluator_ids=None) -> dict[int, float]:
    """Weighted total per evaluator for one candidate.

    Scores for items outside ``items_by_id`` (inactive or deleted) and, when
    ``evaluator_ids`` is given, from evaluators outside it are ignored.
    Insertion order follows the first score seen per evaluator.
    """
    totals: dict[int, float] = {}
    for s in scores:
        if s.candidate_id != candidate_id:
            continue
        item = items_by_id.get(s.item_id)
        if item is None:
            continue
        if evaluator_ids is not None and s.evaluator_id not in evaluator_ids:
            continue
        totals[s.evaluator_id] = totals.get(s.evaluator_id, 0.0) + s.score * item.weight
    return totals


def compute_results(candidates, evaluators, items, scores) -> list[CandidateResult]:
    """Rank candidates by percentage of the maximum weighted score.

    ``candidates`` must already be in fetch order (sort_order, id); ties in
    percentage keep that order since ``sorted`` is stable. Only final scores
    are counted.
    """
    items = list(items)
    items_by_id = {i.id: i for i in items}
    evaluator_ids = {e.id for e in evaluators}
    final_scores = [s for s in scores if s.is_final]
    max_total = max_possible_score(items)

    by_candidate: dict[int, list[ScoreRecord]] = {}
    for s in final_scores:
        by_candidate.setdefault(s.candidate_id, []).append(s)

    results = []
    for c in candidates:
        c_scores = [
            s for s in by_candidate.get(c.id, [])
            if s.item_id in items_by_id and s.evaluator_id in evaluator_ids
        ]
        totals = evaluator_totals(c.id, c_scores, items_by_id)
        average = sum(totals.values()) / len(totals) if totals else 0.0
        percentage = (average / max_total * 100) if max_total > 0 else 0.0
        results.append(CandidateResult(
            candidate=c,
            evaluator_totals=totals,
            average_score=average,
            max_possible_score=max_total,
            percentage=percentage,
            score_count=len(c_scores),
        ))

    ranked = sorted(results, key=lambda r: r.percentage, reverse=True)
    for idx, r in enumerate(ranked, start=1):
        r.rank = idx
    return ranked


def item_breakdown(candidate_id: int, evaluators, items, scores) -> list[ItemBreakdown]:
    """Per-item list of (evaluator, score) pairs for one candidate, final scores only."""
    evaluators_by_id = {e.id: e for e in evaluators}
    rows = [ItemBreakdown(item=i) for i in items]
    by_item = {b.item.id: b for b in rows}
    for s in scores:
        if not s.is_final or s.candidate_id != candidate_id:
            continue
        b = by_item.get(s.item_id)
        ev = evaluators_by_id.get(s.evaluator_id)
        if b is None or ev is None:
            continue
        b.entries.append((ev, s))
    return rows


def summary_stats(results: list[CandidateResult], evaluators, items) -> SummaryStats:
    return SummaryStats(
        candidate_count=len(results),
        evaluated_candidate_count=sum(1 for r in results if r.score_count > 0),
        evaluator_count=len(list(evaluators)),
        item_count=len(list(items)),
    )


def completion_matrix(candidates, evaluators, progress_rows: Iterable[ProgressRecord]) -> dict[tuple[int, int], ProgressStatus]:
    """Status of every (evaluator_id, candidate_id) pair, including pairs with no row."""
    by_pair = {(p.evaluator_id, p.candidate_id): p for p in progress_rows}
    matrix = {}
    for e in evaluators:
        for c in candidates:
            matrix[(e.id, c.id)] = classify(by_pair.get((e.id, c.id)))
    return matrix


def submitted_counts(matrix: dict[tuple[int, int], ProgressStatus]) -> dict[int, int]:
    """Number of evaluators who submitted, keyed by candidate id."""
    counts: dict[int, int] = {}
    for (_, candidate_id), status in matrix.items():
        counts.setdefault(candidate_id, 0)
        if status is ProgressStatus.SUBMITTED:
            counts[candidate_id] += 1
    return counts
