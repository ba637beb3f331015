# ============================================================
# PDF GENERATION UTILITY
# ============================================================

from io import BytesIO
from datetime import datetime
from xml.sax.saxutils import escape

# ReportLab imports
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import cm
from reportlab.platypus import (
    SimpleDocTemplate,
    Table,
    TableStyle,
    Paragraph,
    Spacer,
    HRFlowable,
    KeepTogether,
)
from reportlab.lib.enums import TA_CENTER

from maizebiz.core.calculator import round2, to_number

PRIMARY_COLOR = '#2dce89'
HEADER_TEXT_COLOR = '#32325d'


def format_number(value, decimals=2):
    """Thousand separators, rounded half away from zero to 2 places."""
    return f"{round2(to_number(value)):,.{decimals}f}"


def _grid_style(has_totals_row=False):
    commands = [
        # Header
        ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor(PRIMARY_COLOR)),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, 0), 10),
        ('ALIGN', (0, 0), (-1, 0), 'CENTER'),
        ('BOTTOMPADDING', (0, 0), (-1, 0), 8),
        ('TOPPADDING', (0, 0), (-1, 0), 8),

        # Body
        ('FONTNAME', (0, 1), (-1, -1), 'Helvetica'),
        ('FONTSIZE', (0, 1), (-1, -1), 9),
        ('ALIGN', (0, 1), (0, -1), 'LEFT'),
        ('ALIGN', (1, 1), (-1, -1), 'RIGHT'),
        ('ROWBACKGROUNDS', (0, 1), (-1, -1),
         [colors.white, colors.HexColor('#f6f9fc')]),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.HexColor('#dee2e6')),
    ]
    if has_totals_row:
        commands += [
            ('BACKGROUND', (0, -1), (-1, -1), colors.HexColor(PRIMARY_COLOR)),
            ('TEXTCOLOR', (0, -1), (-1, -1), colors.white),
            ('FONTNAME', (0, -1), (-1, -1), 'Helvetica-Bold'),
        ]
    return TableStyle(commands)


def generate_summary_pdf(
    stats,
    series: list,
    reference_date: str,
    range_label: str,
    owner_name: str = "MaizeBiz",
    currency: str = "KES",
) -> BytesIO:
    """
    Generate a PDF of the dashboard figures and the daily breakdown.

    Args:
        stats: DashboardStats for the user
        series: list of ChartPoint, oldest day first
        reference_date: Day the figures were computed for (YYYY-MM-DD)
        range_label: Chart window shown in the subtitle (e.g. '7days')
        owner_name: Name printed in the header
        currency: Currency code printed next to amounts

    Returns:
        BytesIO buffer containing the PDF
    """

    buffer = BytesIO()

    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=1.5*cm,
        leftMargin=1.5*cm,
        topMargin=1.5*cm,
        bottomMargin=1.5*cm
    )

    styles = getSampleStyleSheet()

    title_style = ParagraphStyle(
        'CustomTitle',
        parent=styles['Heading1'],
        fontSize=18,
        alignment=TA_CENTER,
        spaceAfter=6,
        textColor=colors.HexColor(PRIMARY_COLOR)
    )

    subtitle_style = ParagraphStyle(
        'CustomSubtitle',
        parent=styles['Normal'],
        fontSize=12,
        alignment=TA_CENTER,
        spaceAfter=12,
        textColor=colors.grey
    )

    section_style = ParagraphStyle(
        'SectionHeader',
        parent=styles['Heading2'],
        fontSize=13,
        spaceBefore=8,
        spaceAfter=6,
        textColor=colors.HexColor(HEADER_TEXT_COLOR)
    )

    footer_style = ParagraphStyle(
        'Footer',
        parent=styles['Normal'],
        fontSize=8,
        alignment=TA_CENTER,
        textColor=colors.grey
    )

    available_width = A4[0] - 3*cm
    story = []

    # === HEADER ===
    story.append(Paragraph(escape(owner_name), title_style))
    story.append(Paragraph(
        f"Business Summary - {reference_date} ({range_label})", subtitle_style))
    story.append(HRFlowable(
        width="100%",
        thickness=1,
        color=colors.HexColor('#e9ecef'),
        spaceBefore=10,
        spaceAfter=20
    ))

    # === OVERVIEW ===
    story.append(Paragraph("Overview", section_style))

    overview_data = [
        ['', f'Purchases ({currency})', f'Sales ({currency})'],
        ['Today', format_number(stats.today_purchases), format_number(stats.today_sales)],
        ['Last 7 days', format_number(stats.weekly_purchases), format_number(stats.weekly_sales)],
        ['Last 30 days', format_number(stats.monthly_purchases), format_number(stats.monthly_sales)],
        ['All time', format_number(stats.total_purchases), format_number(stats.total_sales)],
    ]
    overview = Table(overview_data, colWidths=[
        available_width * 0.34, available_width * 0.33, available_width * 0.33])
    overview.setStyle(_grid_style(has_totals_row=True))
    story.append(overview)

    story.append(Spacer(1, 12))

    # === DAILY BREAKDOWN ===
    story.append(Paragraph("Daily Breakdown", section_style))

    daily_data = [['Day', 'Purchases', 'Sales', 'Profit']]
    for point in series:
        daily_data.append([
            point.label,
            format_number(point.purchases),
            format_number(point.sales),
            format_number(point.profit),
        ])
    daily_data.append([
        'TOTAL',
        format_number(sum(p.purchases for p in series)),
        format_number(sum(p.sales for p in series)),
        format_number(sum(p.profit for p in series)),
    ])

    daily = Table(daily_data, colWidths=[available_width * 0.25] * 4, repeatRows=1)
    daily.setStyle(_grid_style(has_totals_row=True))
    story.append(daily)

    # === SUMMARY + FOOTER, kept on the same page ===
    summary_data = [
        ['Profit:', f"{format_number(stats.profit)} {currency}"],
        ['Stock Remaining:', f"{format_number(stats.stock_remaining)} kg"],
    ]
    summary_table = Table(summary_data, colWidths=[
                          available_width * 0.3, available_width * 0.3])
    summary_table.setStyle(TableStyle([
        ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
        ('FONTNAME', (1, 0), (1, -1), 'Helvetica'),
        ('FONTSIZE', (0, 0), (-1, -1), 9),
        ('ALIGN', (0, 0), (0, -1), 'RIGHT'),
        ('ALIGN', (1, 0), (1, -1), 'LEFT'),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 4),
        ('TOPPADDING', (0, 0), (-1, -1), 4),
    ]))

    generated_at = datetime.now().strftime("%d/%m/%Y at %H:%M")

    story.append(KeepTogether([
        Spacer(1, 10),
        Paragraph("Summary", section_style),
        summary_table,
        Spacer(1, 12),
        HRFlowable(
            width="100%",
            thickness=0.5,
            color=colors.HexColor('#e9ecef'),
            spaceBefore=4,
            spaceAfter=6,
        ),
        Paragraph(f"Generated on {generated_at} • MaizeBiz", footer_style),
    ]))

    doc.build(story)
    buffer.seek(0)

    return buffer
