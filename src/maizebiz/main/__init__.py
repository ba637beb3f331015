from flask import Blueprint

bp = Blueprint("main_bp", __name__)

from maizebiz.main import routes  # noqa: F401, E402
