from flask import Blueprint

bp = Blueprint("rubric", __name__)

from . import routes  # noqa: E402,F401
