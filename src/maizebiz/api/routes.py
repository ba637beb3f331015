"""
MaizeBiz API v1 - JSON endpoints for the three record collections.
All routes except /health require an active Flask session (login_required).
"""
from flask import jsonify, request, current_app, abort
from flask_login import login_required, current_user
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.datastructures import MultiDict

from maizebiz.api import api_bp
from maizebiz.core.calculator import DERIVERS
from maizebiz.core.search import SEARCH_FIELDS, filter_records
from maizebiz.main.forms import RECORD_FORMS
from maizebiz.main.utils import get_dashboard_data, parse_range_param
from maizebiz.store import get_store, UnknownCollection

# Keys of to_dict() that are never form input
READ_ONLY_KEYS = {"id", "user_id", "created_at"}


# ── Helpers ───────────────────────────────────────────────────────────────────
def _require_kind(kind):
    """404 for anything other than purchases, sales or laborers."""
    try:
        get_store().model_for(kind)
    except UnknownCollection:
        abort(404)


def _as_formdata(payload: dict) -> MultiDict:
    """JSON values -> form strings. null entries are dropped (treated as empty)."""
    cleaned = MultiDict()
    for key, value in payload.items():
        if value is None or isinstance(value, (dict, list)):
            continue
        cleaned[key] = str(value)
    return cleaned


def _validated_data(kind, payload):
    """
    Run the kind's form over a JSON payload.

    Returns (data, None) on success or (None, field_errors).
    """
    form = RECORD_FORMS[kind](formdata=_as_formdata(payload), meta={"csrf": False})
    if not form.validate():
        return None, form.errors
    return form.record_data(), None


def _json_body():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return None
    return payload


def _validation_error(fields):
    return jsonify({"error": "Validation failed", "fields": fields}), 400


# ── Health check ──────────────────────────────────────────────────────────────
@api_bp.route("/health", methods=["GET"])
def health():
    """Tiny response used by clients to verify connectivity."""
    return jsonify({"status": "ok"}), 200


# ── Dashboard ─────────────────────────────────────────────────────────────────
@api_bp.route("/dashboard", methods=["GET"])
@login_required
def dashboard():
    range_key, window_days = parse_range_param(request.args.get("range"))
    data = get_dashboard_data(current_user.id, window_days)
    stats = data["stats"]

    return jsonify({
        "range": range_key,
        "reference_date": data["reference_date"].isoformat(),
        "stats": {
            "total_purchases":   stats.total_purchases,
            "total_sales":       stats.total_sales,
            "profit":            stats.profit,
            "stock_remaining":   stats.stock_remaining,
            "today_purchases":   stats.today_purchases,
            "today_sales":       stats.today_sales,
            "weekly_purchases":  stats.weekly_purchases,
            "weekly_sales":      stats.weekly_sales,
            "monthly_purchases": stats.monthly_purchases,
            "monthly_sales":     stats.monthly_sales,
        },
        "series": [
            {
                "day":       point.day.isoformat(),
                "label":     point.label,
                "purchases": point.purchases,
                "sales":     point.sales,
                "profit":    point.profit,
            }
            for point in data["series"]
        ],
    }), 200


# ── Derived-field preview ─────────────────────────────────────────────────────
@api_bp.route("/derive/<kind>", methods=["POST"])
@login_required
def derive(kind):
    """
    Recompute the derived fields for raw input values without saving anything.
    Lets the entry forms show totals while the user is typing.
    """
    if kind not in DERIVERS:
        abort(404)
    payload = _json_body()
    if payload is None:
        return jsonify({"error": "Invalid JSON body"}), 400
    return jsonify(DERIVERS[kind](payload)), 200


# ── Collections ───────────────────────────────────────────────────────────────
@api_bp.route("/<kind>", methods=["GET"])
@login_required
def list_records(kind):
    _require_kind(kind)
    records = get_store().list(kind, current_user.id)
    records = filter_records(records, request.args.get("q", ""), SEARCH_FIELDS[kind])
    return jsonify({kind: [record.to_dict() for record in records]}), 200


@api_bp.route("/<kind>", methods=["POST"])
@login_required
def create_record(kind):
    _require_kind(kind)
    payload = _json_body()
    if payload is None:
        return jsonify({"error": "Invalid JSON body"}), 400

    data, errors = _validated_data(kind, payload)
    if errors:
        return _validation_error(errors)

    try:
        record = get_store().create(kind, current_user.id, data)
    except SQLAlchemyError:
        return jsonify({"error": f"Server error while saving the {kind} record"}), 500

    return jsonify(record.to_dict()), 201


@api_bp.route("/<kind>/<int:record_id>", methods=["GET"])
@login_required
def get_record(kind, record_id):
    _require_kind(kind)
    record = get_store().get(kind, current_user.id, record_id)
    if record is None:
        abort(404)
    return jsonify(record.to_dict()), 200


@api_bp.route("/<kind>/<int:record_id>", methods=["PUT"])
@login_required
def update_record(kind, record_id):
    _require_kind(kind)
    store = get_store()
    record = store.get(kind, current_user.id, record_id)
    if record is None:
        abort(404)

    payload = _json_body()
    if payload is None:
        return jsonify({"error": "Invalid JSON body"}), 400

    # Partial updates: fields not sent keep their stored values
    merged = {k: v for k, v in record.to_dict().items() if k not in READ_ONLY_KEYS}
    merged.update(payload)

    data, errors = _validated_data(kind, merged)
    if errors:
        return _validation_error(errors)

    try:
        record = store.update(kind, current_user.id, record_id, data)
    except SQLAlchemyError:
        return jsonify({"error": f"Server error while updating the {kind} record"}), 500

    return jsonify(record.to_dict()), 200


@api_bp.route("/<kind>/<int:record_id>", methods=["DELETE"])
@login_required
def delete_record(kind, record_id):
    _require_kind(kind)
    try:
        deleted = get_store().delete(kind, current_user.id, record_id)
    except SQLAlchemyError:
        return jsonify({"error": f"Server error while deleting the {kind} record"}), 500

    if not deleted:
        abort(404)

    current_app.logger.info(f"[API] {kind} #{record_id} deleted by user #{current_user.id}")
    return jsonify({"status": "deleted", "id": record_id}), 200
