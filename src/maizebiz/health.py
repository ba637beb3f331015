"""
Health check endpoints for monitoring and load balancer integration.
"""

from flask import Blueprint, jsonify, current_app
from maizebiz import db
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

health_bp = Blueprint('health', __name__)

APP_VERSION = '1.0.0'


@health_bp.route('/health')
def health_check():
    """
    Returns 200 whenever the process is serving requests, with the database
    state reported in the body.
    """
    try:
        db.session.execute(text('SELECT 1'))
        db_status = 'connected'
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.warning(f"Health check database error: {e}")
        db_status = f'error: {str(e)}'

    return jsonify({
        'status': 'healthy',
        'database': db_status,
        'app': 'MaizeBiz',
        'version': APP_VERSION
    }), 200


@health_bp.route('/health/ready')
def readiness_check():
    """
    Readiness check - 200 only if the database answers.
    """
    checks = {
        'database': False,
        'status': 'unhealthy'
    }

    try:
        with db.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        checks['database'] = True
    except SQLAlchemyError as e:
        checks['database_error'] = str(e)
        return jsonify(checks), 503

    checks['status'] = 'ready'
    return jsonify(checks), 200


@health_bp.route('/health/live')
def liveness_check():
    """Liveness check, no external dependencies."""
    return jsonify({
        'status': 'alive',
        'debug': current_app.debug
    }), 200
