from flask import current_app, render_template, redirect, url_for, flash
from sqlalchemy.exc import SQLAlchemyError
from . import bp
from .forms import EvaluatorForm
from ..candidates.forms import UploadForm
from ...extensions import db
from ...errors import ImportFormatError
from ...models.evaluator import Evaluator
from ...models.score import Score
from ...models.progress import EvaluationProgress
from ...services.importer import read_rows, import_evaluators
from ...utils.decorators import admin_required
from ...utils.db import commit_or_flash


def _name_taken(name, exclude_id=None):
    q = Evaluator.query.filter_by(name=name)
    if exclude_id is not None:
        q = q.filter(Evaluator.id != exclude_id)
    return q.first() is not None


@bp.get("")
@admin_required
def list_evaluators():
    items = Evaluator.query.order_by(Evaluator.name.asc()).all()
    return render_template("evaluators/list.html", items=items, upload_form=UploadForm())


@bp.route("/create", methods=["GET", "POST"])
@admin_required
def create_evaluator():
    form = EvaluatorForm()
    if form.validate_on_submit():
        if _name_taken(form.name.data):
            flash("같은 이름의 평가위원이 이미 있습니다.", "danger")
        else:
            ev = Evaluator(
                name=form.name.data,
                email=form.email.data or None,
                department=form.department.data or None,
            )
            ev.set_password(form.password.data or current_app.config["DEFAULT_EVALUATOR_PASSWORD"])
            db.session.add(ev)
            if commit_or_flash("평가위원을 추가했습니다."):
                return redirect(url_for("evaluators.list_evaluators"))
    return render_template("evaluators/form.html", form=form, evaluator=None)


@bp.route("/<int:evaluator_id>/edit", methods=["GET", "POST"])
@admin_required
def edit_evaluator(evaluator_id):
    ev = db.get_or_404(Evaluator, evaluator_id)
    form = EvaluatorForm(obj=ev)
    if form.validate_on_submit():
        if _name_taken(form.name.data, exclude_id=ev.id):
            flash("같은 이름의 평가위원이 이미 있습니다.", "danger")
        else:
            ev.name = form.name.data
            ev.email = form.email.data or None
            ev.department = form.department.data or None
            if form.password.data:
                ev.set_password(form.password.data)
            if commit_or_flash("평가위원 정보를 수정했습니다."):
                return redirect(url_for("evaluators.list_evaluators"))
    return render_template("evaluators/form.html", form=form, evaluator=ev)


@bp.post("/<int:evaluator_id>/toggle")
@admin_required
def toggle_evaluator(evaluator_id):
    ev = db.get_or_404(Evaluator, evaluator_id)
    ev.is_active = not ev.is_active
    commit_or_flash("활성화했습니다." if ev.is_active else "비활성화했습니다.", "상태 변경에 실패했습니다.")
    return redirect(url_for("evaluators.list_evaluators"))


@bp.post("/<int:evaluator_id>/delete")
@admin_required
def delete_evaluator(evaluator_id):
    ev = db.get_or_404(Evaluator, evaluator_id)
    Score.query.filter_by(evaluator_id=ev.id).delete()
    EvaluationProgress.query.filter_by(evaluator_id=ev.id).delete()
    db.session.delete(ev)
    commit_or_flash("삭제했습니다.", "삭제에 실패했습니다.")
    return redirect(url_for("evaluators.list_evaluators"))


@bp.post("/upload")
@admin_required
def upload_evaluators():
    form = UploadForm()
    if not form.validate_on_submit():
        for errors in form.errors.values():
            for e in errors:
                flash(e, "warning")
        return redirect(url_for("evaluators.list_evaluators"))
    f = form.file.data
    try:
        rows = read_rows(f.filename, f.read())
        created, skipped = import_evaluators(rows)
    except ImportFormatError as e:
        db.session.rollback()
        flash(str(e), "danger")
        return redirect(url_for("evaluators.list_evaluators"))
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception('Evaluator upload failed')
        flash("엑셀 업로드에 실패했습니다.", "danger")
        return redirect(url_for("evaluators.list_evaluators"))
    msg = f"{created}명의 평가위원을 업로드했습니다."
    if skipped:
        msg += f" (중복 {skipped}명 제외)"
    commit_or_flash(msg, "엑셀 업로드에 실패했습니다.")
    return redirect(url_for("evaluators.list_evaluators"))
