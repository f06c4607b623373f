"""Pages appended after the fixed template sections.

The attendance log lists every accepted entry per company (the time-record
pages only have room for a fixed number of rows), followed by the evidence
cards the student uploaded.
"""
from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from reportlab.pdfgen import canvas

from ...config import APPENDIX_ROWS_PER_PAGE, EVIDENCE_CARDS_PER_PAGE, HORIZONTAL_MARGIN
from ...models import AttendanceEntry, CompanyAttendanceBlock, EvidenceEntry
from ..context import ComposeContext
from ..formatting import format_hours, format_short_date, format_timestamp, title_status
from ..grid import draw_grid
from ..hours import accepted_entries, sort_by_date
from ..images import draw_fitted
from ..style import color, size
from ..text_layout import chunk, draw_fitted_string, draw_lines, wrap_text
from .dtr import EMPTY_PUNCH

logger = logging.getLogger(__name__)

LOG_COLUMNS: List[Tuple[str, float]] = [
    ("Date", 70),
    ("Company", 135),
    ("AM In", 55),
    ("AM Out", 55),
    ("PM In", 55),
    ("PM Out", 55),
    ("Hours", 55),
    ("Status", 100),
]
LOG_HEADER_H = 22.0
LOG_ROW_H = 20.0

CARD_H = 200.0
CARD_GAP = 10.0
CARD_COLUMNS = 2
CARD_PADDING = 12.0


def _page_title(title: str, index: int, count: int) -> str:
    if count > 1:
        return f"{title} (Page {index + 1} of {count})"
    return title


def _section_header(ctx: ComposeContext, canv: canvas.Canvas, title: str, pw: float, ph: float) -> float:
    """Title block shared by every appendix page. Returns the y where content starts."""
    fonts = ctx.fonts
    x = HORIZONTAL_MARGIN
    y = ph - 50
    canv.setFillColor(color(ctx.style, "text_color", "#1F1F1F"))
    canv.setFont(fonts.bold.name, 18)
    canv.drawString(x, y, title)
    y -= 22
    canv.setFont(fonts.regular.name, 11)
    canv.drawString(x, y, f"Student: {ctx.student_name}")
    canv.drawString(x + 250, y, f"Email: {ctx.student_email}")
    y -= 16
    canv.setFillColor(color(ctx.style, "muted_color", "#616161"))
    canv.setFont(fonts.regular.name, 10)
    canv.drawString(x, y, f"Generated: {format_timestamp(ctx.generated_at)}")
    y -= 20
    canv.setStrokeColor(color(ctx.style, "section_border_color", "#D1D1D1"))
    canv.setLineWidth(1)
    canv.line(x, y, pw - HORIZONTAL_MARGIN, y)
    canv.setFillColor(color(ctx.style, "text_color", "#1F1F1F"))
    return y - 15


def _empty_page(ctx: ComposeContext, title: str, message: str) -> None:
    page = ctx.allocator.append()
    canv = page.canvas
    y = _section_header(ctx, canv, title, page.width, page.height)
    canv.setFont(ctx.fonts.regular.name, 12)
    canv.drawString(HORIZONTAL_MARGIN, y - 10, message)


def log_column_widths(content_width: float) -> List[float]:
    natural = sum(w for _, w in LOG_COLUMNS)
    scale = min(1.0, content_width / natural)
    return [w * scale for _, w in LOG_COLUMNS]


def _log_cells(entry: AttendanceEntry) -> List[str]:
    return [
        format_short_date(entry.date),
        entry.company_name,
        entry.am_in or EMPTY_PUNCH,
        entry.am_out or EMPTY_PUNCH,
        entry.pm_in or EMPTY_PUNCH,
        entry.pm_out or EMPTY_PUNCH,
        format_hours(entry.total_hours),
        title_status(entry.status),
    ]


def _attendance_page(
    ctx: ComposeContext, title: str, company: CompanyAttendanceBlock, rows: Sequence[AttendanceEntry]
) -> None:
    page = ctx.allocator.append()
    canv = page.canvas
    fonts = ctx.fonts
    border = color(ctx.style, "section_border_color", "#D1D1D1")
    y = _section_header(ctx, canv, title, page.width, page.height)
    widths = log_column_widths(page.width - HORIZONTAL_MARGIN * 2)
    cell = size(ctx.style, "cell_size", 9)

    draw_grid(
        canv,
        (HORIZONTAL_MARGIN, y),
        widths,
        LOG_ROW_H,
        0,
        LOG_HEADER_H,
        header_labels=[label for label, _ in LOG_COLUMNS],
        header_font=fonts.bold,
        header_size=9,
        header_fill=color(ctx.style, "header_fill", "#F7F2ED"),
        header_drop=15,
        line_color=border,
    )
    y -= LOG_HEADER_H

    for entry in rows:
        cells = _log_cells(entry)
        if not cells[1]:
            cells[1] = company.company_name
        geom = draw_grid(canv, (HORIZONTAL_MARGIN, y), widths, LOG_ROW_H, 1, 0, line_color=border)
        for col, text in enumerate(cells):
            draw_fitted_string(canv, text, geom.column_x(col) + 4, geom.row_bottom(0) + 5, fonts.regular, cell, widths[col] - 8)
        y = geom.bottom

        if entry.notes:
            lines = wrap_text(f"Notes: {entry.notes}", fonts.regular, 8, page.width - HORIZONTAL_MARGIN * 2 - 8)
            y = draw_lines(canv, lines, HORIZONTAL_MARGIN + 4, y - 10, fonts.regular, 8, 10) + 10 - 6


def compose_attendance_appendix(ctx: ComposeContext, companies: Sequence[CompanyAttendanceBlock]) -> int:
    """Append the attendance log; returns the number of pages added."""
    added = 0
    for company in companies:
        entries = sort_by_date(accepted_entries(company.attendance_entries))
        if not entries:
            continue
        pages = chunk(entries, APPENDIX_ROWS_PER_PAGE)
        base = f"Attendance Record / DTR - {company.company_name}"
        for i, rows in enumerate(pages):
            _attendance_page(ctx, _page_title(base, i, len(pages)), company, rows)
            added += 1

    if not added:
        _empty_page(ctx, "Attendance Record / DTR", "No attendance records have been submitted yet.")
        added = 1
    logger.info("Attendance appendix: %d page(s)", added)
    return added


def _evidence_card(
    ctx: ComposeContext, canv: canvas.Canvas, entry: EvidenceEntry, x: float, top: float, width: float
) -> bool:
    """Draw one card. Returns False when the attachment could not be shown."""
    fonts = ctx.fonts
    bottom = top - CARD_H
    canv.setStrokeColor(color(ctx.style, "accent_color", "#F56E0F"))
    canv.setLineWidth(1)
    canv.rect(x, bottom, width, CARD_H, stroke=1, fill=0)

    inner = width - CARD_PADDING * 2
    tx = x + CARD_PADDING
    y = top - 28
    canv.setFillColor(color(ctx.style, "text_color", "#1F1F1F"))
    draw_fitted_string(canv, entry.title or "Untitled", tx, y, fonts.bold, 12, inner)
    y -= 14
    canv.setFillColor(color(ctx.style, "muted_color", "#616161"))
    draw_fitted_string(canv, f"Company: {entry.company_name}", tx, y, fonts.regular, 9, inner)
    y -= 12
    draw_fitted_string(canv, f"Submitted: {format_timestamp(entry.submitted_at)}", tx, y, fonts.regular, 9, inner)
    if entry.notes:
        y -= 12
        first = wrap_text(f"Notes: {entry.notes}", fonts.regular, 9, inner)[0]
        canv.setFont(fonts.regular.name, 9)
        canv.drawString(tx, y, first)
    canv.setFillColor(color(ctx.style, "text_color", "#1F1F1F"))

    if not entry.image_url:
        canv.setFont(fonts.regular.name, 9)
        canv.drawString(tx, y - 16, "Attachment: No file provided")
        return True

    image = ctx.images.embed(entry.image_url)
    if image is None:
        canv.setFont(fonts.regular.name, 9)
        canv.drawString(tx, y - 16, "Attachment: Image unavailable")
        return False

    box_top = y - 10
    box_bottom = bottom + CARD_PADDING
    if box_top - box_bottom > 0:
        draw_fitted(canv, image, tx, box_bottom, inner, box_top - box_bottom)
    return True


def compose_evidence_appendix(ctx: ComposeContext, evidence: Sequence[EvidenceEntry]) -> int:
    """Append the evidence cards; returns the number of pages added."""
    entries = list(evidence)
    if not entries:
        _empty_page(ctx, "Other Attachments", "No evidence submissions have been uploaded yet.")
        return 1

    pages = chunk(entries, EVIDENCE_CARDS_PER_PAGE)
    missing = 0
    for i, cards in enumerate(pages):
        page = ctx.allocator.append()
        canv = page.canvas
        top = _section_header(ctx, canv, _page_title("Other Attachments", i, len(pages)), page.width, page.height)
        card_w = (page.width - HORIZONTAL_MARGIN * 2 - 20) / CARD_COLUMNS
        for n, entry in enumerate(cards):
            row, col = divmod(n, CARD_COLUMNS)
            x = HORIZONTAL_MARGIN + col * (card_w + 20)
            card_top = top - row * (CARD_H + CARD_GAP)
            if not _evidence_card(ctx, canv, entry, x, card_top, card_w):
                missing += 1

    if missing:
        logger.warning("%d evidence attachment(s) could not be embedded", missing)
    logger.info("Evidence appendix: %d card(s) on %d page(s)", len(entries), len(pages))
    return len(pages)
