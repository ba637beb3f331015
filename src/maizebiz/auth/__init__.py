from flask import Blueprint

bp = Blueprint("auth_bp", __name__)

from maizebiz.auth import routes  # noqa: F401, E402
