from flask import Blueprint

bp = Blueprint("evaluator", __name__)

from . import routes  # noqa: E402,F401
