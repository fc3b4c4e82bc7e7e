"""Plain-text, Word and PDF renderings of a single-locale meeting record."""

from __future__ import annotations

import io
import re
from xml.sax.saxutils import escape

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.cidfonts import UnicodeCIDFont
from reportlab.platypus import HRFlowable, Paragraph, SimpleDocTemplate, Spacer

from .minutes import MeetingMinutes

EXPORT_FORMATS = ("txt", "docx", "pdf")

_CID_FONTS = {"ko": "HYSMyeongJo-Medium"}


def format_full_report(minutes: MeetingMinutes) -> str:
    """Render the clipboard-friendly text version of the minutes."""

    lines = [
        f"[{minutes.title}]",
        f"Date: {minutes.date}",
        f"Participants: {', '.join(minutes.participants)}",
        "",
        "Summary:",
        minutes.summary,
        "",
        "Discussion:",
    ]
    lines.extend(f"- {item.topic}: {item.content}" for item in minutes.discussion)
    lines.append("")
    lines.append("Decisions:")
    lines.extend(f"- {decision}" for decision in minutes.decisions)
    lines.append("")
    lines.append("Action Items:")
    lines.extend(f"- [{item.assignee}] {item.task} (Due: {item.due})" for item in minutes.action_items)
    return "\n".join(lines) + "\n"


def export_filename(minutes: MeetingMinutes, extension: str) -> str:
    title = re.sub(r"\s+", "_", minutes.title.strip()) or "Meeting"
    return f"Minutes_{title}.{extension}"


def export_docx(minutes: MeetingMinutes) -> bytes:
    doc = Document()

    heading = doc.add_heading(minutes.title, level=1)
    heading.alignment = WD_ALIGN_PARAGRAPH.CENTER
    doc.add_paragraph().add_run(f"Date: {minutes.date}").bold = True
    doc.add_paragraph().add_run(f"Participants: {', '.join(minutes.participants)}").italic = True

    doc.add_heading("Summary", level=2)
    doc.add_paragraph(minutes.summary)

    doc.add_heading("Discussion", level=2)
    for item in minutes.discussion:
        doc.add_paragraph().add_run(item.topic).bold = True
        doc.add_paragraph(item.content)

    doc.add_heading("Decisions", level=2)
    for decision in minutes.decisions:
        doc.add_paragraph(decision, style="List Bullet")

    doc.add_heading("Action Items", level=2)
    for item in minutes.action_items:
        doc.add_paragraph(f"[{item.assignee}] {item.task} (Due: {item.due})", style="List Bullet")

    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


def _font_for(lang: str) -> tuple[str, str]:
    """Return (regular, bold) font names able to render ``lang``."""

    cid_font = _CID_FONTS.get(lang)
    if cid_font is None:
        return "Helvetica", "Helvetica-Bold"
    if cid_font not in pdfmetrics.getRegisteredFontNames():
        pdfmetrics.registerFont(UnicodeCIDFont(cid_font))
    # CID fonts ship without a bold face
    return cid_font, cid_font


def export_pdf(minutes: MeetingMinutes, lang: str = "en") -> bytes:
    regular, bold = _font_for(lang)
    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        "MinutesTitle", parent=styles["Heading1"], fontName=bold,
        alignment=1, fontSize=18, spaceAfter=8, textColor=colors.HexColor("#1a1a2e"),
    )
    h2_style = ParagraphStyle(
        "MinutesH2", parent=styles["Heading2"], fontName=bold,
        fontSize=13, spaceBefore=14, spaceAfter=6, textColor=colors.HexColor("#2c3e50"),
    )
    normal_style = ParagraphStyle(
        "MinutesBody", parent=styles["Normal"], fontName=regular,
        fontSize=10, leading=15, spaceAfter=4, wordWrap="CJK",
    )
    meta_style = ParagraphStyle("MinutesMeta", parent=normal_style, textColor=colors.HexColor("#555555"))
    topic_style = ParagraphStyle("MinutesTopic", parent=normal_style, fontName=bold, spaceBefore=4)
    bullet_style = ParagraphStyle("MinutesBullet", parent=normal_style, leftIndent=12, firstLineIndent=-12)

    def para(text: str, style: ParagraphStyle) -> Paragraph:
        return Paragraph(escape(text), style)

    elements = [
        para(minutes.title, title_style),
        para(f"Date: {minutes.date}", meta_style),
        para(f"Participants: {', '.join(minutes.participants)}", meta_style),
        Spacer(1, 6),
        HRFlowable(width="100%", thickness=1.2, color=colors.HexColor("#2c3e50"), spaceAfter=8),
        para("Summary", h2_style),
        para(minutes.summary, normal_style),
        para("Discussion", h2_style),
    ]
    for item in minutes.discussion:
        elements.append(para(item.topic, topic_style))
        elements.append(para(item.content, normal_style))
    elements.append(para("Decisions", h2_style))
    elements.extend(para(f"• {decision}", bullet_style) for decision in minutes.decisions)
    elements.append(para("Action Items", h2_style))
    elements.extend(
        para(f"• [{item.assignee}] {item.task} (Due: {item.due})", bullet_style)
        for item in minutes.action_items
    )

    buffer = io.BytesIO()
    margin = 0.75 * inch
    doc = SimpleDocTemplate(
        buffer, pagesize=A4,
        leftMargin=margin, rightMargin=margin, topMargin=margin, bottomMargin=margin,
        title=minutes.title,
    )
    doc.build(elements)
    return buffer.getvalue()


__all__ = ["EXPORT_FORMATS", "export_docx", "export_filename", "export_pdf", "format_full_report"]
