from flask import abort, current_app, jsonify, render_template, redirect, request, url_for, flash
from sqlalchemy.exc import SQLAlchemyError
from . import bp
from .forms import CategoryForm, ItemForm
from ..candidates.forms import UploadForm
from ...extensions import db
from ...errors import ImportFormatError
from ...models.category import EvaluationCategory
from ...models.item import EvaluationItem
from ...models.score import Score
from ...services.importer import read_rows, import_rubric
from ...services.rubric import (
    next_category_sort_order, next_item_code, next_item_sort_order, reorder_items_by_category,
)
from ...utils.decorators import admin_required
from ...utils.db import commit_or_flash


def _category_choices():
    cats = EvaluationCategory.query.order_by(EvaluationCategory.sort_order.asc()).all()
    return [(c.id, f"{c.category_code} - {c.category_name}") for c in cats]


@bp.get("")
@admin_required
def index():
    categories = EvaluationCategory.query.order_by(EvaluationCategory.category_code.asc(), EvaluationCategory.sort_order.asc()).all()
    items = (
        EvaluationItem.query.join(EvaluationCategory)
        .order_by(EvaluationCategory.sort_order.asc(), EvaluationItem.sort_order.asc())
        .all()
    )
    max_total = sum(i.max_score * i.weight for i in items if i.is_active and i.category.is_active)
    return render_template("rubric/index.html", categories=categories, items=items, max_total=max_total, upload_form=UploadForm())


# --- categories

@bp.route("/categories/create", methods=["GET", "POST"])
@admin_required
def create_category():
    form = CategoryForm()
    if form.validate_on_submit():
        if EvaluationCategory.query.filter_by(category_code=form.category_code.data).first():
            flash("같은 코드의 카테고리가 이미 있습니다.", "danger")
        else:
            db.session.add(EvaluationCategory(
                category_code=form.category_code.data,
                category_name=form.category_name.data,
                description=form.description.data or None,
                sort_order=form.sort_order.data if form.sort_order.data is not None else next_category_sort_order(),
            ))
            if commit_or_flash("카테고리를 추가했습니다."):
                return redirect(url_for("rubric.index"))
    return render_template("rubric/category_form.html", form=form, category=None)


@bp.route("/categories/<int:category_id>/edit", methods=["GET", "POST"])
@admin_required
def edit_category(category_id):
    cat = db.get_or_404(EvaluationCategory, category_id)
    form = CategoryForm(obj=cat)
    if form.validate_on_submit():
        dup = EvaluationCategory.query.filter(EvaluationCategory.category_code == form.category_code.data, EvaluationCategory.id != cat.id).first()
        if dup:
            flash("같은 코드의 카테고리가 이미 있습니다.", "danger")
        else:
            cat.category_code = form.category_code.data
            cat.category_name = form.category_name.data
            cat.description = form.description.data or None
            if form.sort_order.data is not None:
                cat.sort_order = form.sort_order.data
            if commit_or_flash("카테고리를 수정했습니다."):
                return redirect(url_for("rubric.index"))
    return render_template("rubric/category_form.html", form=form, category=cat)


@bp.post("/categories/<int:category_id>/toggle")
@admin_required
def toggle_category(category_id):
    cat = db.get_or_404(EvaluationCategory, category_id)
    cat.is_active = not cat.is_active
    commit_or_flash("활성화했습니다." if cat.is_active else "비활성화했습니다.", "상태 변경에 실패했습니다.")
    return redirect(url_for("rubric.index"))


@bp.post("/categories/<int:category_id>/delete")
@admin_required
def delete_category(category_id):
    """Deletes the category together with its items and their scores."""
    cat = db.get_or_404(EvaluationCategory, category_id)
    item_ids = [i.id for i in cat.items]
    if item_ids:
        Score.query.filter(Score.item_id.in_(item_ids)).delete(synchronize_session=False)
    db.session.delete(cat)
    commit_or_flash("카테고리를 삭제했습니다.", "삭제에 실패했습니다.")
    return redirect(url_for("rubric.index"))


# --- items

@bp.get("/next-code")
@admin_required
def next_code():
    category_id = request.args.get("category_id", type=int)
    if category_id is None:
        abort(404)
    cat = db.get_or_404(EvaluationCategory, category_id)
    return jsonify({"item_code": next_item_code(cat), "sort_order": next_item_sort_order(cat.id)})


@bp.route("/create", methods=["GET", "POST"])
@admin_required
def create_item():
    form = ItemForm()
    form.category_id.choices = _category_choices()
    if request.method == "GET" and request.args.get("category_id", type=int):
        form.category_id.data = request.args.get("category_id", type=int)
    if form.validate_on_submit():
        cat = db.get_or_404(EvaluationCategory, form.category_id.data)
        db.session.add(EvaluationItem(
            category_id=cat.id,
            item_code=form.item_code.data or next_item_code(cat),
            item_name=form.item_name.data,
            description=form.description.data or None,
            max_score=form.max_score.data,
            weight=form.weight.data if form.weight.data is not None else 1.0,
            sort_order=form.sort_order.data if form.sort_order.data is not None else next_item_sort_order(cat.id),
        ))
        db.session.flush()
        reorder_items_by_category()
        if commit_or_flash("평가 항목을 추가했습니다."):
            return redirect(url_for("rubric.index"))
    return render_template("rubric/item_form.html", form=form, item=None)


@bp.route("/<int:item_id>/edit", methods=["GET", "POST"])
@admin_required
def edit_item(item_id):
    item = db.get_or_404(EvaluationItem, item_id)
    form = ItemForm(obj=item)
    form.category_id.choices = _category_choices()
    if form.validate_on_submit():
        cat = db.get_or_404(EvaluationCategory, form.category_id.data)
        item.category_id = cat.id
        item.item_code = form.item_code.data or item.item_code
        item.item_name = form.item_name.data
        item.description = form.description.data or None
        item.max_score = form.max_score.data
        item.weight = form.weight.data if form.weight.data is not None else item.weight
        if form.sort_order.data is not None:
            item.sort_order = form.sort_order.data
        db.session.flush()
        reorder_items_by_category()
        if commit_or_flash("평가 항목을 수정했습니다."):
            return redirect(url_for("rubric.index"))
    return render_template("rubric/item_form.html", form=form, item=item)


@bp.post("/<int:item_id>/toggle")
@admin_required
def toggle_item(item_id):
    item = db.get_or_404(EvaluationItem, item_id)
    item.is_active = not item.is_active
    commit_or_flash("활성화했습니다." if item.is_active else "비활성화했습니다.", "상태 변경에 실패했습니다.")
    return redirect(url_for("rubric.index"))


@bp.post("/<int:item_id>/delete")
@admin_required
def delete_item(item_id):
    item = db.get_or_404(EvaluationItem, item_id)
    Score.query.filter_by(item_id=item.id).delete()
    db.session.delete(item)
    db.session.flush()
    reorder_items_by_category()
    commit_or_flash("평가 항목을 삭제했습니다.", "삭제에 실패했습니다.")
    return redirect(url_for("rubric.index"))


@bp.post("/upload")
@admin_required
def upload_rubric():
    form = UploadForm()
    if not form.validate_on_submit():
        for errors in form.errors.values():
            for e in errors:
                flash(e, "warning")
        return redirect(url_for("rubric.index"))
    f = form.file.data
    try:
        rows = read_rows(f.filename, f.read())
        cats, items = import_rubric(rows)
        reorder_items_by_category()
    except ImportFormatError as e:
        db.session.rollback()
        flash(str(e), "danger")
        return redirect(url_for("rubric.index"))
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception('Rubric upload failed')
        flash("엑셀 업로드에 실패했습니다.", "danger")
        return redirect(url_for("rubric.index"))
    commit_or_flash(f"카테고리 {cats}개, 평가 항목 {items}개를 업로드했습니다.", "엑셀 업로드에 실패했습니다.")
    return redirect(url_for("rubric.index"))
