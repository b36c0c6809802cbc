from io import BytesIO
from flask import render_template, send_file, abort
from . import bp
from ...services import gateway
from ...services.aggregation import (
    compute_results, item_breakdown, summary_stats, completion_matrix, submitted_counts,
)
from ...services.export import results_csv
from ...utils.decorators import admin_required


def _load():
    candidates = gateway.fetch_candidates()
    evaluators = gateway.fetch_evaluators()
    items = gateway.fetch_items()
    scores = gateway.fetch_final_scores()
    return candidates, evaluators, items, scores


@bp.get("")
@admin_required
def index():
    candidates, evaluators, items, scores = _load()
    results = compute_results(candidates, evaluators, items, scores)
    matrix = completion_matrix(candidates, evaluators, gateway.fetch_progress())
    return render_template(
        "results/index.html",
        results=results,
        stats=summary_stats(results, evaluators, items),
        submitted=submitted_counts(matrix),
        evaluator_total=len(evaluators),
    )


@bp.get("/progress")
@admin_required
def progress_matrix():
    candidates = gateway.fetch_candidates()
    evaluators = gateway.fetch_evaluators()
    matrix = completion_matrix(candidates, evaluators, gateway.fetch_progress())
    return render_template("results/progress.html", candidates=candidates, evaluators=evaluators, matrix=matrix)


@bp.get("/<int:candidate_id>")
@admin_required
def detail(candidate_id):
    candidates, evaluators, items, scores = _load()
    results = compute_results(candidates, evaluators, items, scores)
    result = next((r for r in results if r.candidate.id == candidate_id), None)
    if result is None:
        abort(404)
    breakdown = item_breakdown(candidate_id, evaluators, items, scores)
    evaluators_by_id = {e.id: e for e in evaluators}
    comments = [
        (evaluators_by_id[p.evaluator_id], p.general_comment)
        for p in gateway.fetch_progress()
        if p.candidate_id == candidate_id and p.is_submitted and p.general_comment and p.evaluator_id in evaluators_by_id
    ]
    return render_template(
        "results/detail.html",
        result=result,
        breakdown=breakdown,
        evaluators_by_id=evaluators_by_id,
        comments=comments,
    )


@bp.get("/export.csv")
@admin_required
def export_csv():
    results = compute_results(*_load())
    bio = BytesIO(results_csv(results))
    bio.seek(0)
    return send_file(bio, as_attachment=True, download_name="evaluation_results.csv", mimetype="text/csv")


@bp.get("/report")
@admin_required
def report():
    """Printable report: ranking plus per-candidate item tables."""
    candidates, evaluators, items, scores = _load()
    results = compute_results(candidates, evaluators, items, scores)
    breakdowns = {r.candidate.id: item_breakdown(r.candidate.id, evaluators, items, scores) for r in results}
    return render_template("results/report.html", results=results, breakdowns=breakdowns, items=items)
