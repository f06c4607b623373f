from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from reportlab.pdfgen import canvas

from ...config import DTR_FIRST_PAGE, DTR_LAST_PAGE, DTR_ROWS_PER_PAGE
from ...models import AttendanceEntry, CompanyAttendanceBlock
from ..context import ComposeContext
from ..fields import Field, LabelField, ValueField, render_fields
from ..formatting import format_short_date
from ..grid import GridGeometry, draw_grid
from ..style import color, size
from ..text_layout import chunk, draw_centred, draw_fitted_string, truncate

logger = logging.getLogger(__name__)

TABLE_X = 100.0
COLUMN_WIDTHS = [70, 50, 50, 52, 50, 90, 100]
HEADER_HEIGHT = 25.0
ROW_HEIGHT = 20.0
EMPTY_PUNCH = "--:--"
INSTRUCTION = "Instruction: Fill out this form as a basis of your attendance."


def header_fields(subsequent: bool) -> List[Field]:
    lift = 30 if subsequent else 0
    return [
        ValueField("Name of Student: ", lambda c: c["student"], 100, 470 + lift, max_width=350, gap=-2),
        ValueField("HTE: ", lambda c: c["company"], 100, 450 + lift, max_width=430, gap=-2),
        ValueField("Address: ", lambda c: c["address"], 100, 430 + lift, max_width=410, gap=-2),
        LabelField("Group: ", 100, 410 + lift),
        LabelField("Week: ", 380, 410 + lift),
    ]


def _punch(value: str) -> str:
    return (value or "").strip() or EMPTY_PUNCH


def _draw_table(ctx: ComposeContext, canv: canvas.Canvas, top: float) -> GridGeometry:
    fonts = ctx.fonts
    geom = draw_grid(
        canv,
        (TABLE_X, top),
        COLUMN_WIDTHS,
        ROW_HEIGHT,
        DTR_ROWS_PER_PAGE,
        HEADER_HEIGHT,
        header_fill=color(ctx.style, "header_fill", "#F7F2ED"),
    )

    canv.setFont(fonts.bold.name, 9)
    canv.drawString(geom.column_x(0) + 5, top - 18, "Date")
    draw_centred(canv, "Morning", geom.column_x(1), COLUMN_WIDTHS[1] + COLUMN_WIDTHS[2], top - 8, fonts.bold, 9)
    draw_centred(canv, "Afternoon", geom.column_x(3), COLUMN_WIDTHS[3] + COLUMN_WIDTHS[4], top - 8, fonts.bold, 9)
    for col, label in ((1, "IN"), (2, "OUT"), (3, "IN"), (4, "OUT")):
        draw_centred(canv, label, geom.column_x(col), COLUMN_WIDTHS[col], top - 18, fonts.regular, 9)
    canv.setFont(fonts.bold.name, 9)
    canv.drawString(geom.column_x(5) + 5, top - 18, "Remarks")
    draw_centred(canv, "Signature of HTE", geom.column_x(6), COLUMN_WIDTHS[6], top - 8, fonts.bold, 8)
    draw_centred(canv, "Supervisor", geom.column_x(6), COLUMN_WIDTHS[6], top - 18, fonts.bold, 8)
    return geom


def _draw_rows(
    ctx: ComposeContext,
    canv: canvas.Canvas,
    geom: GridGeometry,
    entries: Sequence[AttendanceEntry],
    signature_url: Optional[str],
) -> None:
    regular = ctx.fonts.regular
    cell = size(ctx.style, "cell_size", 9)
    for i, entry in enumerate(entries):
        y = geom.row_baseline(i, drop=10)
        cells = [
            format_short_date(entry.date),
            _punch(entry.am_in),
            _punch(entry.am_out),
            _punch(entry.pm_in),
            _punch(entry.pm_out),
            truncate(entry.verification_remarks or entry.notes or "", 15),
        ]
        for col, text in enumerate(cells):
            draw_fitted_string(canv, text, geom.column_x(col) + 5, y, regular, cell, COLUMN_WIDTHS[col] - 8)

        if signature_url:
            ctx.draw_image(canv, signature_url, geom.column_x(6) + 5, geom.row_bottom(i) + 2, 90, 16)


def _draw_footer(ctx: ComposeContext, canv: canvas.Canvas, geom: GridGeometry) -> None:
    y = geom.bottom - 30
    canv.setFont(ctx.fonts.regular.name, 10)
    canv.drawString(100, y, "Certified true and Correct:")
    canv.setLineWidth(0.5)
    canv.line(400, y, 550, y)
    draw_centred(canv, "Site Supervisor", 400, 150, y - 12, ctx.fonts.regular, 9)


def _compose_page(
    ctx: ComposeContext,
    page_index: int,
    subsequent: bool,
    company: Optional[CompanyAttendanceBlock] = None,
    entries: Sequence[AttendanceEntry] = (),
) -> None:
    canv = ctx.canvas(page_index)
    values = {
        "student": ctx.student_name,
        "company": company.company_name if company else "",
        "address": company.company_address if company else "",
    }
    render_fields(canv, ctx.fonts, header_fields(subsequent), values, ctx.style)

    lift = 30 if subsequent else 0
    canv.setFont(ctx.fonts.regular.name, size(ctx.style, "body_size", 10))
    canv.drawString(100, 390 + lift, INSTRUCTION)

    geom = _draw_table(ctx, canv, 370 + lift)
    _draw_rows(ctx, canv, geom, entries, company.signature_url if company else None)
    _draw_footer(ctx, canv, geom)


def compose_daily_time_records(ctx: ComposeContext, companies: Sequence[CompanyAttendanceBlock]) -> int:
    """Fill the time-record pages; returns the number of pages that carry entries."""
    page_index = DTR_FIRST_PAGE
    dropped = 0

    for company in companies:
        accepted = [e for e in company.attendance_entries if e.is_accepted]
        if not accepted:
            logger.debug("No accepted attendance for %s; skipped", company.company_name)
            continue
        for n, rows in enumerate(chunk(accepted, DTR_ROWS_PER_PAGE)):
            if page_index > DTR_LAST_PAGE:
                dropped += len(rows)
                continue
            _compose_page(ctx, page_index, n > 0, company, rows)
            page_index += 1

    if dropped:
        logger.warning("%d attendance entries exceed the time-record pages and were not placed", dropped)

    filled = page_index - DTR_FIRST_PAGE
    while page_index <= DTR_LAST_PAGE:
        _compose_page(ctx, page_index, page_index > DTR_FIRST_PAGE)
        page_index += 1
    logger.info("Daily time records: %d page(s) filled", filled)
    return filled
