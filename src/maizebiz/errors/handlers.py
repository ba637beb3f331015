import logging
from flask import render_template, request, jsonify
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from maizebiz.errors import bp
from maizebiz import db

logger = logging.getLogger(__name__)

ERROR_MESSAGES = {
    400: "Bad request",
    401: "Authentication required",
    403: "Forbidden",
    404: "Not found",
    500: "Internal server error",
    503: "Service unavailable",
}


def _safe_rollback():
    """Rollback the DB session; a dead connection is logged, not raised."""
    try:
        db.session.rollback()
    except SQLAlchemyError as e:
        logger.warning("Rollback failed: %s", e)
    finally:
        try:
            db.session.remove()
        except SQLAlchemyError as e:
            logger.warning("Session cleanup failed: %s", e)


def _wants_json():
    return request.path.startswith("/api/")


def _error_response(status):
    """JSON body for API calls, the errors/<status>.html page otherwise."""
    if _wants_json():
        return jsonify({"error": ERROR_MESSAGES[status]}), status
    return render_template(f"errors/{status}.html"), status


# ── HTTP error handlers ───────────────────────────────────────────────────────

@bp.app_errorhandler(400)
def bad_request_error(error):
    return _error_response(400)


@bp.app_errorhandler(401)
def unauthorized_error(error):
    return _error_response(401)


@bp.app_errorhandler(403)
def forbidden_error(error):
    return _error_response(403)


@bp.app_errorhandler(404)
def not_found_error(error):
    return _error_response(404)


@bp.app_errorhandler(500)
def internal_error(error):
    _safe_rollback()
    logger.error("500 Internal Server Error: %s", error)
    return _error_response(500)


@bp.app_errorhandler(503)
def service_unavailable_error(error):
    _safe_rollback()
    return _error_response(503)


# ── Database / connectivity exception handlers ────────────────────────────────
# SQLAlchemy exceptions that escape a view land here instead of the generic
# 500 page.

@bp.app_errorhandler(OperationalError)
def db_operational_error(error):
    """Database unreachable or connection dropped."""
    _safe_rollback()
    logger.error("Database OperationalError: %s", error)
    return _error_response(503)


@bp.app_errorhandler(SQLAlchemyError)
def db_generic_error(error):
    _safe_rollback()
    logger.error("SQLAlchemyError: %s", error)
    return _error_response(500)
