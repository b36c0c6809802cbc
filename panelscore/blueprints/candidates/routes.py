from flask import current_app, render_template, redirect, url_for, flash
from sqlalchemy.exc import SQLAlchemyError
from . import bp
from .forms import CandidateForm, UploadForm
from ...extensions import db
from ...errors import ImportFormatError
from ...models.candidate import Candidate
from ...services.importer import read_rows, import_candidates
from ...services.rubric import next_candidate_sort_order
from ...utils.decorators import admin_required
from ...utils.db import commit_or_flash


@bp.get("")
@admin_required
def list_candidates():
    items = Candidate.query.order_by(Candidate.sort_order.asc(), Candidate.id.asc()).all()
    return render_template("candidates/list.html", items=items, upload_form=UploadForm())


@bp.route("/create", methods=["GET", "POST"])
@admin_required
def create_candidate():
    form = CandidateForm()
    if form.validate_on_submit():
        c = Candidate(
            name=form.name.data,
            department=form.department.data or None,
            position=form.position.data or None,
            category=form.category.data or None,
            description=form.description.data or None,
            sort_order=form.sort_order.data if form.sort_order.data is not None else next_candidate_sort_order(),
        )
        db.session.add(c)
        if commit_or_flash("평가 대상자를 추가했습니다."):
            return redirect(url_for("candidates.list_candidates"))
    return render_template("candidates/form.html", form=form, candidate=None)


@bp.route("/<int:candidate_id>/edit", methods=["GET", "POST"])
@admin_required
def edit_candidate(candidate_id):
    c = db.get_or_404(Candidate, candidate_id)
    form = CandidateForm(obj=c)
    if form.validate_on_submit():
        c.name = form.name.data
        c.department = form.department.data or None
        c.position = form.position.data or None
        c.category = form.category.data or None
        c.description = form.description.data or None
        if form.sort_order.data is not None:
            c.sort_order = form.sort_order.data
        if commit_or_flash("평가 대상자 정보를 수정했습니다."):
            return redirect(url_for("candidates.list_candidates"))
    return render_template("candidates/form.html", form=form, candidate=c)


@bp.post("/<int:candidate_id>/toggle")
@admin_required
def toggle_candidate(candidate_id):
    c = db.get_or_404(Candidate, candidate_id)
    c.is_active = not c.is_active
    commit_or_flash("활성화했습니다." if c.is_active else "비활성화했습니다.", "상태 변경에 실패했습니다.")
    return redirect(url_for("candidates.list_candidates"))


@bp.post("/<int:candidate_id>/delete")
@admin_required
def delete_candidate(candidate_id):
    c = db.get_or_404(Candidate, candidate_id)
    # scores and progress for this candidate go with it
    from ...models.score import Score
    from ...models.progress import EvaluationProgress
    Score.query.filter_by(candidate_id=c.id).delete()
    EvaluationProgress.query.filter_by(candidate_id=c.id).delete()
    db.session.delete(c)
    commit_or_flash("삭제했습니다.", "삭제에 실패했습니다.")
    return redirect(url_for("candidates.list_candidates"))


@bp.post("/upload")
@admin_required
def upload_candidates():
    form = UploadForm()
    if not form.validate_on_submit():
        for errors in form.errors.values():
            for e in errors:
                flash(e, "warning")
        return redirect(url_for("candidates.list_candidates"))
    f = form.file.data
    try:
        rows = read_rows(f.filename, f.read())
        created = import_candidates(rows, mode=form.mode.data)
    except ImportFormatError as e:
        db.session.rollback()
        flash(str(e), "danger")
        return redirect(url_for("candidates.list_candidates"))
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception('Candidate upload failed')
        flash("엑셀 업로드에 실패했습니다.", "danger")
        return redirect(url_for("candidates.list_candidates"))
    commit_or_flash(f"{created}명의 평가 대상자를 업로드했습니다.", "엑셀 업로드에 실패했습니다.")
    return redirect(url_for("candidates.list_candidates"))
