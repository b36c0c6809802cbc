from flask import Blueprint

bp = Blueprint("evaluators", __name__)

from . import routes  # noqa: E402,F401
