import math

from flask import current_app, render_template, request, redirect, url_for, flash
from sqlalchemy.exc import SQLAlchemyError

from . import bp
from ...extensions import db
from .forms import EvaluationForm
from ...errors import AlreadySubmittedError, ScoreOutOfRangeError
from ...services import gateway
from ...services.evaluation import ScoreEntry, save_evaluation
from ...services.progress import classify, start_evaluation, ProgressStatus
from ...session import current_session
from ...utils.decorators import evaluator_required


def _parse_score(raw):
    if raw is None or raw.strip() == "":
        return None
    value = float(raw)
    if not math.isfinite(value):
        raise ValueError(raw)
    return value


def _entries_from_form(items):
    """Read score_<id>/comment_<id> fields. Raises ValueError on a non-numeric score."""
    entries = []
    for item in items:
        entries.append(ScoreEntry(
            item_id=item.id,
            score=_parse_score(request.form.get(f"score_{item.id}")),
            comments=(request.form.get(f"comment_{item.id}") or "").strip() or None,
        ))
    return entries


@bp.get("/")
@evaluator_required
def dashboard():
    s = current_session()
    candidates = gateway.fetch_candidates()
    progress = {p.candidate_id: p for p in gateway.fetch_progress(evaluator_id=s.account_id)}
    rows = [(c, progress.get(c.id), classify(progress.get(c.id))) for c in candidates]
    done = sum(1 for _, _, st in rows if st is ProgressStatus.SUBMITTED)
    return render_template("evaluator/dashboard.html", rows=rows, done=done, Status=ProgressStatus)


@bp.post("/start/<int:candidate_id>")
@evaluator_required
def start(candidate_id):
    s = current_session()
    if gateway.get_active_candidate(candidate_id) is None:
        return render_template("evaluator/not_found.html"), 404
    try:
        start_evaluation(s.account_id, candidate_id, len(gateway.fetch_items()))
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception('Starting evaluation failed')
        flash("평가를 시작할 수 없습니다.", "danger")
        return redirect(url_for("evaluator.dashboard"))
    return redirect(url_for("evaluator.form", candidate_id=candidate_id))


@bp.route("/form/<int:candidate_id>", methods=["GET", "POST"])
@evaluator_required
def form(candidate_id):
    s = current_session()
    candidate = gateway.get_active_candidate(candidate_id)
    if candidate is None:
        return render_template("evaluator/not_found.html"), 404

    items = gateway.fetch_items()
    progress_row = gateway.get_progress_row(s.account_id, candidate_id)
    locked = bool(progress_row and progress_row.is_submitted)
    form = EvaluationForm()
    if request.method == "GET" and progress_row is not None:
        form.general_comment.data = progress_row.general_comment

    values = {sc.item_id: sc for sc in gateway.fetch_scores(s.account_id, candidate_id)}

    if form.validate_on_submit():
        if locked:
            flash("이미 제출된 평가는 수정할 수 없습니다.", "warning")
            return redirect(url_for("evaluator.form", candidate_id=candidate_id))
        final = bool(form.submit_final.data)
        try:
            entries = _entries_from_form(items)
            save_evaluation(
                s.account_id, candidate_id, entries, items,
                final=final, general_comment=(form.general_comment.data or "").strip(),
            )
        except ValueError:
            flash("점수는 숫자로 입력하세요.", "danger")
        except ScoreOutOfRangeError as e:
            flash(f"점수는 0 이상 {e.max_score:g} 이하로 입력하세요.", "danger")
        except AlreadySubmittedError:
            flash("이미 제출된 평가는 수정할 수 없습니다.", "warning")
            return redirect(url_for("evaluator.form", candidate_id=candidate_id))
        except SQLAlchemyError:
            flash("저장에 실패했습니다.", "danger")
        else:
            if final:
                flash("평가가 완료되었습니다.", "success")
                return redirect(url_for("evaluator.dashboard"))
            flash("임시 저장되었습니다.", "success")
            return redirect(url_for("evaluator.form", candidate_id=candidate_id))
        # keep what the evaluator typed when re-rendering after an error
        submitted = {i.id: (request.form.get(f"score_{i.id}", ""), request.form.get(f"comment_{i.id}", "")) for i in items}
    else:
        submitted = {
            i.id: (f"{values[i.id].score:g}" if i.id in values else "", (values[i.id].comments or "") if i.id in values else "")
            for i in items
        }

    scored = sum(1 for v, _ in submitted.values() if v != "")
    percentage = 100.0 if locked else (scored / len(items) * 100 if items else 0.0)
    return render_template(
        "evaluator/form.html",
        candidate=candidate,
        items=items,
        form=form,
        submitted=submitted,
        locked=locked,
        percentage=percentage,
        scored=scored,
    )
