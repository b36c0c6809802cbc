from flask import render_template, redirect, url_for, flash
from . import bp
from .forms import TitleForm, PasswordForm, ResetForm
from ...extensions import db
from ...models.admin import Admin
from ...services.settings import TITLE_KEY, evaluation_title, set_setting, reset_all_data
from ...session import current_session
from ...utils.decorators import admin_required
from ...utils.db import commit_or_flash


def _render(title_form=None, password_form=None, reset_form=None):
    if title_form is None:
        title_form = TitleForm(evaluation_title=evaluation_title())
    return render_template(
        "settings/index.html",
        title_form=title_form,
        password_form=password_form or PasswordForm(),
        reset_form=reset_form or ResetForm(),
    )


@bp.get("")
@admin_required
def index():
    return _render()


@bp.post("/title")
@admin_required
def update_title():
    form = TitleForm()
    if form.validate_on_submit():
        set_setting(TITLE_KEY, form.evaluation_title.data)
        if commit_or_flash("시스템 이름을 저장했습니다."):
            return redirect(url_for("settings.index"))
    return _render(title_form=form)


@bp.post("/password")
@admin_required
def change_password():
    form = PasswordForm()
    if form.validate_on_submit():
        admin = db.get_or_404(Admin, current_session().account_id)
        admin.set_password(form.password.data)
        if commit_or_flash("비밀번호를 변경했습니다.", "비밀번호 변경에 실패했습니다."):
            return redirect(url_for("settings.index"))
    return _render(password_form=form)


@bp.post("/reset")
@admin_required
def reset_system():
    form = ResetForm()
    if form.validate_on_submit():
        reset_all_data()
        if commit_or_flash("모든 평가 데이터를 삭제했습니다.", "초기화에 실패했습니다."):
            return redirect(url_for("settings.index"))
    else:
        flash("초기화하려면 확인 문구를 정확히 입력하세요.", "warning")
    return _render(reset_form=form)
