from functools import wraps
from flask import abort, redirect, request, url_for
from ..session import current_session

def admin_required(view):
    @wraps(view)
    def wrapped(*args, **kwargs):
        s = current_session()
        if s is None:
            return redirect(url_for("auth.admin_login", next=request.path))
        if not s.is_admin:
            abort(403)
        return view(*args, **kwargs)
    return wrapped

def evaluator_required(view):
    @wraps(view)
    def wrapped(*args, **kwargs):
        s = current_session()
        if s is None:
            return redirect(url_for("auth.evaluator_login"))
        if not s.is_evaluator:
            abort(403)
        return view(*args, **kwargs)
    return wrapped
