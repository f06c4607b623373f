from __future__ import annotations

import logging
from typing import Sequence

from reportlab.pdfgen import canvas

from ...config import HORIZONTAL_MARGIN, SUMMARY_COMPANY_ROWS, SUMMARY_PAGE, TRAINING_SCHEDULE_ROWS
from ...models import CompanyAttendanceBlock, HostOrgInfoRecord, TrainingScheduleEntry
from ..context import ComposeContext
from ..formatting import format_hours, format_long_date
from ..grid import GridGeometry, draw_grid
from ..hours import CompanySummary, schedule_total, summarize_companies, totals_agree
from ..style import size
from ..text_layout import draw_centred, draw_fitted_string

logger = logging.getLogger(__name__)

TABLE_X = 60.0
COLUMN_WIDTHS = [180, 180, 132]
HOURS_HEADERS = ["Office/Company", "Immediate Supervisor", "Total Actual Hours of Internship"]
SCHEDULE_HEADERS = ["Task/Job Classification", "Tools/Device/Software Used", "Total Hours Assigned"]


def _cell(ctx: ComposeContext, canv: canvas.Canvas, geom: GridGeometry, row: int, col: int, text: str, drop: float) -> None:
    draw_fitted_string(
        canv,
        text,
        geom.column_x(col) + 5,
        geom.row_baseline(row, drop),
        ctx.fonts.regular,
        size(ctx.style, "cell_size", 9),
        COLUMN_WIDTHS[col] - 10,
    )


def _total_row(ctx: ComposeContext, canv: canvas.Canvas, geom: GridGeometry, row: int, label: str, total: float, drop: float) -> None:
    canv.setFont(ctx.fonts.bold.name, 10)
    canv.drawString(geom.column_x(1) + 5, geom.row_baseline(row, drop), label)
    if total > 0:
        canv.setFont(ctx.fonts.bold.name, 10)
        canv.drawString(geom.column_x(2) + 5, geom.row_baseline(row, drop), format_hours(total))


def _hours_table(ctx: ComposeContext, canv: canvas.Canvas, top: float, summary: CompanySummary) -> GridGeometry:
    geom = draw_grid(
        canv,
        (TABLE_X, top),
        COLUMN_WIDTHS,
        18,
        SUMMARY_COMPANY_ROWS + 1,
        22,
        header_labels=HOURS_HEADERS,
        header_font=ctx.fonts.bold,
        header_size=8,
        header_drop=15,
    )
    for row, item in enumerate(summary.rows):
        _cell(ctx, canv, geom, row, 0, item.company_name, 12)
        _cell(ctx, canv, geom, row, 1, item.supervisor, 12)
        if item.hours is not None:
            _cell(ctx, canv, geom, row, 2, format_hours(item.hours), 12)
    _total_row(ctx, canv, geom, SUMMARY_COMPANY_ROWS, "Total", summary.total, 12)
    return geom


def _schedule_table(
    ctx: ComposeContext, canv: canvas.Canvas, top: float, schedules: Sequence[TrainingScheduleEntry], total: float
) -> GridGeometry:
    geom = draw_grid(
        canv,
        (TABLE_X, top),
        COLUMN_WIDTHS,
        16,
        TRAINING_SCHEDULE_ROWS + 1,
        20,
        header_labels=SCHEDULE_HEADERS,
        header_font=ctx.fonts.bold,
        header_size=8,
        header_drop=14,
    )
    rows = list(schedules)
    if len(rows) > TRAINING_SCHEDULE_ROWS:
        logger.warning("Training schedule has %d rows; only %d fit", len(rows), TRAINING_SCHEDULE_ROWS)
    for row, item in enumerate(rows[:TRAINING_SCHEDULE_ROWS]):
        _cell(ctx, canv, geom, row, 0, item.task_classification, 11)
        _cell(ctx, canv, geom, row, 1, item.tools_device_software_used, 11)
        _cell(ctx, canv, geom, row, 2, format_hours(item.total_hours), 11)
    _total_row(ctx, canv, geom, TRAINING_SCHEDULE_ROWS, "Total Hours", total, 11)
    return geom


def compose_practicum_summary(
    ctx: ComposeContext,
    companies: Sequence[CompanyAttendanceBlock],
    host_orgs: Sequence[HostOrgInfoRecord],
    schedules: Sequence[TrainingScheduleEntry],
    signature_url: str | None = None,
) -> bool:
    """Draw the hours summary page. Returns whether the signature and date were disclosed."""
    page = ctx.page(SUMMARY_PAGE)
    canv = page.canvas
    pw, ph = page.width, page.height
    bold = ctx.fonts.bold

    cursor = ph - 273
    canv.setFont(bold.name, 12)
    canv.drawString(HORIZONTAL_MARGIN, cursor, "A. Total Internship Hours Summary")

    summary = summarize_companies(companies, host_orgs)
    table_a = _hours_table(ctx, canv, cursor - 25, summary)

    cursor = table_a.bottom - 30
    canv.setFont(bold.name, 12)
    canv.drawString(HORIZONTAL_MARGIN, cursor, "B. Training Schedule and Breakdown Specifics")
    cursor -= 20
    canv.setFont(bold.name, 11)
    canv.drawString(TABLE_X, cursor, "a. Training Schedule")
    cursor -= 25

    breakdown = schedule_total(schedules)
    table_b = _schedule_table(ctx, canv, cursor, schedules, breakdown)

    matched = totals_agree(summary.total, breakdown)
    if not matched:
        logger.warning(
            "Hours summary (%.2f) and training schedule (%.2f) disagree; signature and date withheld",
            summary.total,
            breakdown,
        )

    cursor = table_b.bottom - 30
    canv.setLineWidth(0.5)
    if matched and signature_url:
        ctx.draw_image(canv, signature_url, 195, cursor, 190, 40)
    canv.setFont(bold.name, 10)
    canv.drawString(HORIZONTAL_MARGIN, cursor, "Trainee's/Intern's Signature:")
    canv.line(190, cursor - 2, 390, cursor - 2)

    canv.setFont(bold.name, 10)
    canv.drawString(420, cursor, "Date:")
    canv.line(460, cursor - 2, 560, cursor - 2)
    if matched:
        draw_centred(canv, format_long_date(ctx.today), 460, 100, cursor + 1, ctx.fonts.regular, 9)

    canv.setFont(ctx.fonts.regular.name, 10)
    canv.drawString(pw - HORIZONTAL_MARGIN - 20, 30, str(SUMMARY_PAGE + 1))
    return matched
