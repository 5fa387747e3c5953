"""Render Pro Report sections as an HTML fragment for the results email.

Pure formatting over an already computed :class:`ProReportSections`; no
figure is recalculated here.
"""
from __future__ import annotations

from html import escape

from autolytiq.models import ProReportSections

EXPLORE_MARKER = "<!-- Explore More -->"
FOOTER_MARKER = "<!-- Footer -->"
BODY_CLOSE = "</body>"

CARD_STYLE = "background-color: #171717; border: 1px solid #262626; border-radius: 12px; padding: 20px; margin-bottom: 20px;"
PRO_BADGE = (
    '<span style="background: linear-gradient(135deg, #10b981 0%, #059669 100%); color: white; '
    'padding: 4px 12px; border-radius: 20px; font-size: 12px; font-weight: 600;">PRO</span>'
)
MOVE_COLORS = ("#10b981", "#3b82f6", "#f59e0b")
PRODUCT_COLORS = {
    "Credit Cards": "#10b981",
    "Personal Loans": "#3b82f6",
    "Auto Loans": "#f59e0b",
    "Mortgage": "#8b5cf6",
}


def _card(icon: str, title: str, body: str) -> str:
    return (
        f'<div style="{CARD_STYLE}">'
        '<div style="display: flex; justify-content: space-between; align-items: center; margin-bottom: 15px;">'
        f'<h3 style="color: #10b981; font-size: 16px; margin: 0;"><span style="margin-right: 8px;">{icon}</span> '
        f"{escape(title)}</h3>{PRO_BADGE}</div>{body}</div>\n"
    )


def _items(items, color="#a3a3a3") -> str:
    lis = "".join(f'<li style="color: {color}; font-size: 12px; margin-bottom: 4px;">{escape(i)}</li>' for i in items)
    return f'<ul style="margin: 0; padding-left: 20px;">{lis}</ul>'


def build_pro_sections_html(sections: ProReportSections) -> str:
    stability = sections.stability
    parts = []

    parts.append(
        _card(
            "&#128202;",
            "Income Stability Score",
            '<div style="text-align: center; padding: 20px 0;">'
            f'<div style="color: #10b981; font-size: 48px; font-weight: bold; font-family: monospace;">{stability.score}</div>'
            f'<div style="color: #a3a3a3; font-size: 14px; margin-top: 8px;">{escape(stability.rating)}</div></div>'
            '<div style="background-color: #262626; border-radius: 8px; height: 12px; margin: 15px 0; overflow: hidden;">'
            f'<div style="background: linear-gradient(90deg, #10b981, #059669); height: 100%; width: {stability.score}%; '
            'border-radius: 8px;"></div></div>'
            f'<p style="color: #a3a3a3; font-size: 13px; margin: 15px 0 0 0; line-height: 1.5;">{escape(stability.explanation)}</p>',
        )
    )

    readiness = sections.approval_readiness
    products = {
        "Credit Cards": readiness.credit_cards,
        "Personal Loans": readiness.personal_loans,
        "Auto Loans": readiness.auto_loans,
        "Mortgage": readiness.mortgage,
    }
    rows = "".join(
        f'<div style="margin-bottom: 12px;"><strong style="color: {PRODUCT_COLORS[name]}; font-size: 12px;">{name}:</strong>'
        f'<p style="color: #a3a3a3; font-size: 13px; margin: 4px 0 0 0;">{escape(text)}</p></div>'
        for name, text in products.items()
    )
    parts.append(
        _card(
            "&#128273;",
            "Approval Readiness Analysis",
            f'<p style="color: #d4d4d4; font-size: 13px; line-height: 1.6; margin: 0 0 15px 0;">{escape(readiness.overall)}</p>'
            f'<div style="border-top: 1px solid #262626; padding-top: 15px;">{rows}</div>',
        )
    )

    moves = "".join(
        f'<div style="margin-bottom: 12px; padding-left: 20px; border-left: 3px solid {MOVE_COLORS[i % len(MOVE_COLORS)]};">'
        f'<p style="color: #d4d4d4; font-size: 13px; margin: 0; line-height: 1.6;">'
        f'<strong style="color: #e5e5e5;">{i + 1}.</strong> {escape(move)}</p></div>'
        for i, move in enumerate(sections.leverage_moves)
    )
    parts.append(_card("&#128640;", "Your Top 3 Leverage Moves", moves))

    weeks = "".join(
        f'<div style="margin-bottom: 16px;"><h4 style="color: #e5e5e5; font-size: 13px; margin: 0 0 8px 0;">Week {i + 1}</h4>'
        f"{_items(items)}</div>"
        for i, items in enumerate(sections.thirty_day_plan.weeks())
    )
    parts.append(_card("&#128197;", "Your 30-Day Action Plan", weeks))

    for tip in sections.expanded_tips:
        parts.append(
            _card(
                "&#128161;",
                tip.title,
                f'<p style="color: #d4d4d4; font-size: 13px; line-height: 1.6; margin: 0 0 15px 0;">{escape(tip.description)}</p>'
                '<div style="background-color: #262626; border-radius: 8px; padding: 12px;">'
                '<strong style="color: #a3a3a3; font-size: 11px; text-transform: uppercase; letter-spacing: 1px;">Action Items:</strong>'
                f"{_items(tip.action_items, '#d4d4d4')}</div>",
            )
        )
    return "".join(parts)


def render_pro_report_html(sections: ProReportSections, base_html: str) -> str:
    """Splice the Pro sections into ``base_html``.

    The fragment goes before the first "Explore More" marker, else before the
    footer marker, else before ``</body>``; a document with none of these gets
    the fragment appended.
    """

    fragment = build_pro_sections_html(sections)
    for marker in (EXPLORE_MARKER, FOOTER_MARKER, BODY_CLOSE):
        if marker in base_html:
            return base_html.replace(marker, fragment + "\n" + marker, 1)
    return base_html + fragment
