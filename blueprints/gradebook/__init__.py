from flask import Blueprint

bp = Blueprint("gradebook", __name__)
from . import routes  # noqa: E402,F401
