# ============================================================
# PDF DOWNLOAD ROUTE
# ============================================================

from flask import Blueprint, send_file, redirect, url_for, flash, current_app, request
from flask_login import login_required, current_user
from reportlab.platypus.doctemplate import LayoutError

from maizebiz.main.utils import get_dashboard_data, parse_range_param
from maizebiz.main.pdf_utils import generate_summary_pdf

pdf_bp = Blueprint('pdf_bp', __name__)


@pdf_bp.route("/reports/summary.pdf", methods=["GET"])
@login_required
def download_summary_pdf():
    """
    Dashboard figures and daily series as a downloadable PDF.
    Takes the same ?range= parameter as the dashboard.
    """
    range_key, window_days = parse_range_param(request.args.get("range"))
    data = get_dashboard_data(current_user.id, window_days)
    reference_date = data["reference_date"].isoformat()

    try:
        pdf_buffer = generate_summary_pdf(
            stats=data["stats"],
            series=data["series"],
            reference_date=reference_date,
            range_label=range_key,
            owner_name=current_user.username,
            currency=current_app.config.get("CURRENCY", "KES"),
        )
    except LayoutError as e:
        current_app.logger.error(f"Error generating PDF: {e}", exc_info=True)
        flash("Error while generating the PDF.", "danger")
        return redirect(url_for('main_bp.index', range=range_key))

    filename = f"summary_{reference_date}_{range_key}.pdf"

    return send_file(
        pdf_buffer,
        mimetype='application/pdf',
        as_attachment=True,
        download_name=filename
    )
