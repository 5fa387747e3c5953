from __future__ import annotations

import logging
from typing import Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import LETTER
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from autolytiq.exceptions import ReportExportError
from autolytiq.models import ProReportSections
from autolytiq.presets import DISCLAIMER

logger = logging.getLogger(__name__)

TABLE_STYLE = TableStyle(
    [
        ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
        ("BOX", (0, 0), (-1, -1), 1, colors.black),
        ("INNERGRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
    ]
)


def build_pro_report_pdf(out_path: str, sections: ProReportSections, branding: Optional[dict] = None) -> str:
    """Write the Pro Report to ``out_path`` and return the path.

    Raises :class:`ReportExportError` when the file cannot be written.
    """
    branding = branding or {}
    styles = getSampleStyleSheet()
    body = styles["BodyText"]
    doc = SimpleDocTemplate(out_path, pagesize=LETTER, leftMargin=36, rightMargin=36, topMargin=36, bottomMargin=36)
    story = []
    title = branding.get("title", "Pro Income Report")
    story += [Paragraph(f"<b>{escape(title)}</b>", styles["Title"]), Spacer(1, 6)]
    if branding.get("name"):
        story.append(Paragraph(f"Prepared for: {escape(branding['name'])}", styles["Normal"]))
    story.append(Spacer(1, 12))

    s = sections.stability
    t = Table(
        [["Income Stability", ""], ["Score", f"{s.score} / 100"], ["Rating", s.rating]],
        hAlign="LEFT",
        colWidths=[200, 320],
    )
    t.setStyle(TABLE_STYLE)
    story += [t, Spacer(1, 6), Paragraph(escape(s.explanation), body), Spacer(1, 12)]

    r = sections.approval_readiness
    rows = [["Product", "Readiness"]] + [
        [name, Paragraph(escape(text), body)]
        for name, text in (
            ("Overall", r.overall),
            ("Credit Cards", r.credit_cards),
            ("Personal Loans", r.personal_loans),
            ("Auto Loans", r.auto_loans),
            ("Mortgage", r.mortgage),
        )
    ]
    t = Table(rows, hAlign="LEFT", colWidths=[120, 400])
    t.setStyle(TABLE_STYLE)
    story += [Paragraph("<b>Approval Readiness</b>", styles["Heading3"]), Spacer(1, 6), t, Spacer(1, 12)]

    story.append(Paragraph("<b>Top Leverage Moves</b>", styles["Heading3"]))
    for i, move in enumerate(sections.leverage_moves, start=1):
        story.append(Paragraph(f"{i}. {escape(move)}", body))
    story.append(Spacer(1, 12))

    rows = [["Week", "Actions"]] + [
        [f"Week {i}", Paragraph("<br/>".join(escape(a) for a in items), body)]
        for i, items in enumerate(sections.thirty_day_plan.weeks(), start=1)
    ]
    t = Table(rows, hAlign="LEFT", colWidths=[80, 440])
    t.setStyle(TABLE_STYLE)
    story += [Paragraph("<b>30-Day Action Plan</b>", styles["Heading3"]), Spacer(1, 6), t, Spacer(1, 12)]

    for tip in sections.expanded_tips:
        story.append(Paragraph(f"<b>{escape(tip.title)}</b>", styles["Heading4"]))
        story.append(Paragraph(escape(tip.description), body))
        for item in tip.action_items:
            story.append(Paragraph(f"&bull; {escape(item)}", body))
        story.append(Spacer(1, 6))

    story += [Spacer(1, 12), Paragraph(f"<font size=8>{escape(DISCLAIMER)}</font>", styles["Normal"])]
    try:
        doc.build(story)
    except OSError as exc:
        raise ReportExportError(f"Could not write report to {out_path}: {exc}") from exc
    logger.info("Pro report PDF written", extra={"path": str(out_path)})
    return out_path
