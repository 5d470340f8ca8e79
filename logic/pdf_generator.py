import io
from datetime import datetime
from xml.sax.saxutils import escape

from reportlab.lib.pagesizes import A4
from reportlab.lib import colors
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.enums import TA_LEFT

from logic.form_steps import TEXT_FIELDS, BUSINESS_TYPES, field_label
from logic.score_engine import DEFAULT_WEIGHTS, get_rating


# --- Styles ---
def _get_styles():
    styles = getSampleStyleSheet()
    styles.add(ParagraphStyle(
        name="Heading",
        fontSize=16,
        leading=18,
        textColor=colors.HexColor("#4f46e5"),
        spaceAfter=10,
        alignment=TA_LEFT
    ))
    styles.add(ParagraphStyle(
        name="Body",
        fontSize=11,
        leading=14,
        alignment=TA_LEFT
    ))
    return styles


def metric_rows(result):
    """Label/value pairs shown on the results screen and in the PDF."""
    payback = "never" if result.payback_days == DEFAULT_WEIGHTS.payback_never else f"{result.payback_days} days"
    return [
        ("Margin per unit", f"{result.margin:.2f} EUR ({result.margin_pct:.1f}%)"),
        ("Buyers per day", str(result.daily_buyers)),
        ("Profit per day", f"{result.daily_profit:.2f} EUR"),
        ("Profit per month", f"{result.monthly_profit} EUR"),
        ("Payback", payback),
    ]


def _answer_text(name, value):
    if name == "businessType":
        for opt in BUSINESS_TYPES:
            if opt["value"] == value:
                # drop the emoji, the base PDF fonts have no glyph for it
                return opt["label"].split(" ", 1)[-1]
    return value


# --- Main PDF Generator ---
def generate_pdf(answers: dict, result):
    """
    Build the venture report in memory.
    Returns: BytesIO positioned at the start of the PDF.
    """
    styles = _get_styles()
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=A4, title="Venture Check Report")
    story = []
    rating = get_rating(result.score)

    # --- Header ---
    story.append(Paragraph("Venture Check — Report", styles["Heading"]))
    story.append(Paragraph(f"Date: {datetime.now().strftime('%Y-%m-%d %H:%M')}", styles["Body"]))
    story.append(Spacer(1, 12))

    # --- Score & rating ---
    story.append(Paragraph(f"<b>Score:</b> {result.score}/100", styles["Body"]))
    story.append(Paragraph(f"<b>Rating:</b> {rating.label}", styles["Body"]))
    story.append(Spacer(1, 12))

    # --- Metrics ---
    table = Table([["Metric", "Value"]] + [list(row) for row in metric_rows(result)])
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#e0e7ff")),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
    ]))
    story.append(table)
    story.append(Spacer(1, 12))

    # --- Idea ---
    idea = [(name, answers.get(name)) for name in TEXT_FIELDS if answers.get(name)]
    if idea:
        story.append(Paragraph("<b>The idea:</b>", styles["Heading"]))
        for name, value in idea:
            text = escape(str(_answer_text(name, value)))
            story.append(Paragraph(f"• <b>{field_label(name)}</b>: {text}", styles["Body"]))

    # --- Build PDF ---
    doc.build(story)
    buffer.seek(0)
    return buffer
