from flask import Blueprint

bp = Blueprint("errors", __name__)

from maizebiz.errors import handlers  # noqa: F401, E402
