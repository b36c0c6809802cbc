from flask import current_app, render_template, request, redirect, url_for, flash, abort
from flask_login import login_user, logout_user, login_required
from . import bp
from ...extensions import db
from .forms import AdminLoginForm, AdminSignupForm, EvaluatorLoginForm
from ...models.admin import Admin
from ...models.evaluator import Evaluator
from ...session import current_session
from ...utils.db import commit_or_flash


def _safe_next(default):
    nxt = request.args.get("next")
    # only same-site relative paths
    if nxt and nxt.startswith("/") and not nxt.startswith("//"):
        return nxt
    return default


@bp.route("/admin/login", methods=["GET", "POST"])
def admin_login():
    form = AdminLoginForm()
    if form.validate_on_submit():
        admin = Admin.query.filter_by(email=form.email.data).first()
        if admin and admin.check_password(form.password.data):
            login_user(admin)
            current_app.logger.info('Admin login: %s', admin.email)
            return redirect(_safe_next(url_for("admin_dashboard")))
        flash("이메일 또는 비밀번호가 올바르지 않습니다.", "danger")
    return render_template("auth/admin_login.html", form=form, can_signup=Admin.query.first() is None)


@bp.route("/admin/signup", methods=["GET", "POST"])
def admin_signup():
    """First admin: anyone may create. Afterwards: admins only."""
    admin_exists = Admin.query.first() is not None
    s = current_session()
    if admin_exists and (s is None or not s.is_admin):
        return abort(403)

    form = AdminSignupForm()
    if form.validate_on_submit():
        if Admin.query.filter_by(email=form.email.data).first():
            flash("같은 이메일의 관리자가 이미 있습니다.", "danger")
        else:
            admin = Admin(email=form.email.data)
            admin.set_password(form.password.data)
            db.session.add(admin)
            if commit_or_flash("관리자 계정을 만들었습니다. 로그인해 주세요.", "관리자 계정을 만들지 못했습니다."):
                return redirect(url_for("auth.admin_login"))
    return render_template("auth/signup.html", form=form, admin_exists=admin_exists)


@bp.route("/evaluator/login", methods=["GET", "POST"])
def evaluator_login():
    form = EvaluatorLoginForm()
    evaluators = Evaluator.query.filter_by(is_active=True).order_by(Evaluator.name.asc()).all()
    form.name.choices = [(e.name, e.name) for e in evaluators]
    if form.validate_on_submit():
        ev = Evaluator.query.filter_by(name=form.name.data, is_active=True).first()
        if ev and ev.check_password(form.password.data):
            login_user(ev)
            current_app.logger.info('Evaluator login: %s', ev.name)
            return redirect(url_for("evaluator.dashboard"))
        flash("이름 또는 비밀번호가 올바르지 않습니다.", "danger")
    return render_template("auth/evaluator_login.html", form=form)


@bp.route("/logout", methods=["POST"])
@login_required
def logout():
    s = current_session()
    logout_user()
    if s is not None and s.is_admin:
        return redirect(url_for("auth.admin_login"))
    return redirect(url_for("auth.evaluator_login"))
