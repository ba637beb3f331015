from maizebiz.main import bp
from flask import render_template, request, flash, redirect, url_for, abort, current_app
from flask_login import login_required, current_user
from sqlalchemy.exc import SQLAlchemyError

from maizebiz.core import aggregator
from maizebiz.core.search import SEARCH_FIELDS, filter_records
from maizebiz.store import get_store
from maizebiz.main.utils import (
    RANGE_OPTIONS,
    get_dashboard_data,
    get_paginated_results,
    parse_range_param,
)
from maizebiz.main.forms import RECORD_FORMS, DeleteConfirmForm


# Display settings for each collection
RECORD_VIEWS = {
    "purchases": {
        "label": "Purchase",
        "list_endpoint": "main_bp.purchases",
        "template": "main/purchases.html",
        "per_page_key": "PURCHASES_PER_PAGE",
    },
    "sales": {
        "label": "Sale",
        "list_endpoint": "main_bp.sales",
        "template": "main/sales.html",
        "per_page_key": "SALES_PER_PAGE",
    },
    "laborers": {
        "label": "Laborer payment",
        "list_endpoint": "main_bp.laborers",
        "template": "main/laborers.html",
        "per_page_key": "LABORERS_PER_PAGE",
    },
}


@bp.route("/")
@bp.route("/index")
@login_required
def index():
    range_key, window_days = parse_range_param(request.args.get("range"))
    data = get_dashboard_data(current_user.id, window_days)

    return render_template(
        "main/index.html",
        segment="index",
        range_key=range_key,
        range_options=RANGE_OPTIONS,
        chart_labels=[point.label for point in data["series"]],
        chart_purchases=[point.purchases for point in data["series"]],
        chart_sales=[point.sales for point in data["series"]],
        chart_profit=[point.profit for point in data["series"]],
        **data,
    )


# ===========================================
# Shared record views
# ===========================================

def _list_totals(kind, records):
    """Summary cards shown above each list, over all of the user's records."""
    if kind == "purchases":
        return {
            "total_amount": aggregator.sum_field(records, "total_amount_paid"),
            "total_quantity": aggregator.sum_field(records, "quantity_bought"),
        }
    if kind == "sales":
        return {
            "total_amount": aggregator.sum_field(records, "total_amount_received"),
            "total_quantity": aggregator.sum_field(records, "quantity_sold"),
            "total_bags": aggregator.sum_field(records, "number_of_bags"),
            "total_deposited": aggregator.sum_field(records, "deposited_amount"),
        }
    return {"laborer_summary": aggregator.laborer_summary(records)}


def render_record_list(kind):
    view = RECORD_VIEWS[kind]
    query = request.args.get("q", "", type=str)

    records = get_store().list(kind, current_user.id)
    filtered = filter_records(records, query, SEARCH_FIELDS[kind])

    page, next_url, prev_url = get_paginated_results(
        filtered,
        endpoint_name=view["list_endpoint"],
        per_page_config_key=view["per_page_key"],
        q=query or None,
    )

    return render_template(
        view["template"],
        segment=kind,
        records=page.items,
        pagination=page,
        next_url=next_url,
        prev_url=prev_url,
        query=query,
        total_records=len(records),
        **_list_totals(kind, records),
    )


def save_record(kind, record_id=None):
    """Create (record_id None) or edit a record through its form."""
    view = RECORD_VIEWS[kind]
    store = get_store()

    record = None
    if record_id is not None:
        record = store.get(kind, current_user.id, record_id)
        if record is None:
            abort(404)

    form = RECORD_FORMS[kind](obj=record)

    if form.validate_on_submit():
        try:
            if record is None:
                store.create(kind, current_user.id, form.record_data())
                flash(f"{view['label']} recorded successfully!", "success")
            else:
                store.update(kind, current_user.id, record_id, form.record_data())
                flash(f"{view['label']} updated successfully!", "success")
            return redirect(url_for(view["list_endpoint"]))
        except SQLAlchemyError:
            flash(f"Error saving {view['label'].lower()}. Please try again.", "danger")

    elif form.errors:
        current_app.logger.debug(f"{kind} form errors: {form.errors}")
        flash("Please correct the errors in the form.", "danger")

    return render_template(
        "main/record_form.html",
        form=form,
        kind=kind,
        record=record,
        label=view["label"],
        cancel_url=url_for(view["list_endpoint"]),
        segment=kind,
    )


def delete_record(kind, record_id):
    view = RECORD_VIEWS[kind]
    store = get_store()

    record = store.get(kind, current_user.id, record_id)
    if record is None:
        abort(404)

    confirm_form = DeleteConfirmForm()

    if request.method == "POST":
        if not confirm_form.validate_on_submit():
            flash("Deletion was not confirmed.", "warning")
            return redirect(url_for(view["list_endpoint"]))
        try:
            store.delete(kind, current_user.id, record_id)
            flash(f"{view['label']} deleted successfully!", "success")
        except SQLAlchemyError as e:
            flash(f"An error occurred while deleting: {e}", "danger")
        return redirect(url_for(view["list_endpoint"]))

    return render_template(
        "main/confirm_delete.html",
        record=record,
        kind=kind,
        label=view["label"],
        confirm_form=confirm_form,
        cancel_url=url_for(view["list_endpoint"]),
        segment=kind,
    )


# ===========================================
# Purchases
# ===========================================

@bp.route("/purchases")
@login_required
def purchases():
    return render_record_list("purchases")


@bp.route("/purchases/new", methods=["GET", "POST"])
@login_required
def new_purchase():
    return save_record("purchases")


@bp.route("/purchases/<int:record_id>/edit", methods=["GET", "POST"])
@login_required
def edit_purchase(record_id):
    return save_record("purchases", record_id)


@bp.route("/purchases/<int:record_id>/delete", methods=["GET", "POST"])
@login_required
def delete_purchase(record_id):
    return delete_record("purchases", record_id)


# ===========================================
# Sales
# ===========================================

@bp.route("/sales")
@login_required
def sales():
    return render_record_list("sales")


@bp.route("/sales/new", methods=["GET", "POST"])
@login_required
def new_sale():
    return save_record("sales")


@bp.route("/sales/<int:record_id>/edit", methods=["GET", "POST"])
@login_required
def edit_sale(record_id):
    return save_record("sales", record_id)


@bp.route("/sales/<int:record_id>/delete", methods=["GET", "POST"])
@login_required
def delete_sale(record_id):
    return delete_record("sales", record_id)


# ===========================================
# Laborer payments
# ===========================================

@bp.route("/laborers")
@login_required
def laborers():
    return render_record_list("laborers")


@bp.route("/laborers/new", methods=["GET", "POST"])
@login_required
def new_laborer():
    return save_record("laborers")


@bp.route("/laborers/<int:record_id>/edit", methods=["GET", "POST"])
@login_required
def edit_laborer(record_id):
    return save_record("laborers", record_id)


@bp.route("/laborers/<int:record_id>/delete", methods=["GET", "POST"])
@login_required
def delete_laborer(record_id):
    return delete_record("laborers", record_id)
