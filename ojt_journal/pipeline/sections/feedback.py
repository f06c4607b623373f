from __future__ import annotations

import logging
from typing import Optional, Sequence

from reportlab.pdfgen import canvas

from ...config import FEEDBACK_PAGES
from ...models import FeedbackFormRecord, HostOrgInfoRecord
from ..context import ComposeContext
from ..formatting import format_long_date
from ..grid import draw_grid
from ..metrics import advance_width
from ..text_layout import draw_centred, draw_lines, wrap_text

logger = logging.getLogger(__name__)

QUESTIONS = [
    "My training is aligned with my field of specialization.",
    "My training is challenging.",
    "I have opportunities for learning.",
    "I am aware with the policies of the HTE.",
    "I have positive working relationship with my site supervisor and other employees of the HTE.",
    "I am aware of the risks and hazards of my working environment.",
    "My department is committed to ensuring the health and safety of the Interns.",
]
RESPONSES = ["SA", "A", "N", "D", "SD"]
LEGEND = ["SA-Strongly agree", "A- Agree", "N-Neutral", "D-Disagree", "SD-Strongly disagree"]

TABLE_X = 60.0
TABLE_W = 492.0
QUESTION_W = 320.0
HEADER_H = 20.0
ROW_H = 24.0
TEXT_ROW_H = 20.0
SIGNATURE_ROW_H = 55.0
LEGEND_ROW_H = 40.0


def match_host_org(form: FeedbackFormRecord, host_orgs: Sequence[HostOrgInfoRecord]) -> Optional[HostOrgInfoRecord]:
    for org in host_orgs:
        if form.company_id and org.company_id == form.company_id:
            return org
    return host_orgs[0] if host_orgs else None


def _header_line(ctx: ComposeContext, canv: canvas.Canvas, label: str, y: float, gap: float, width: float, value: str) -> None:
    bold = ctx.fonts.bold
    canv.setFont(bold.name, 9)
    canv.drawString(TABLE_X, y, label)
    line_x = TABLE_X + advance_width(bold, label, 9) + gap
    canv.setLineWidth(0.5)
    canv.line(line_x, y - 2, line_x + width, y - 2)
    if value:
        canv.setFont(ctx.fonts.regular.name, 9)
        canv.drawString(line_x + 4, y - 1, value)


def _free_text_row(ctx: ComposeContext, canv: canvas.Canvas, top: float, label: str, text: str) -> None:
    canv.setFont(ctx.fonts.bold.name, 9)
    canv.drawString(TABLE_X + 8, top - 13, label)
    if text:
        lines = wrap_text(text, ctx.fonts.regular, 8, TABLE_W - 120)[:2]
        draw_lines(canv, lines, TABLE_X + 120, top - 8, ctx.fonts.regular, 8, 8)


def _compose_form(
    ctx: ComposeContext,
    page_index: int,
    form: Optional[FeedbackFormRecord],
    host_orgs: Sequence[HostOrgInfoRecord],
    signature_url: Optional[str],
) -> None:
    page = ctx.page(page_index)
    canv = page.canvas
    fonts = ctx.fonts

    intern = hte = when = ""
    if form is not None:
        intern = ctx.student_name
        org = match_host_org(form, host_orgs)
        hte = org.company_name if org else ""
        when = format_long_date(form.form_date) if form.form_date else format_long_date(ctx.today)

    y = page.height - 320
    _header_line(ctx, canv, "Name of Intern", y, 10, 280, intern)
    y -= 28
    _header_line(ctx, canv, "Name of HTE:", y, 8, 280, hte)
    y -= 28
    _header_line(ctx, canv, "Date:", y, 8, 160, when)
    y -= 24

    top = y
    response_w = (TABLE_W - QUESTION_W) / len(RESPONSES)
    geom = draw_grid(
        canv,
        (TABLE_X, top),
        [QUESTION_W] + [response_w] * len(RESPONSES),
        ROW_H,
        len(QUESTIONS),
        HEADER_H,
        line_width=0.5,
    )
    for col, label in enumerate(RESPONSES, start=1):
        draw_centred(canv, label, geom.column_x(col), response_w, top - 15, fonts.bold, 9)

    answers = form.answers() if form is not None else [None] * len(QUESTIONS)
    for row, (question, answer) in enumerate(zip(QUESTIONS, answers)):
        center = geom.row_top(row) - ROW_H / 2
        lines = wrap_text(f"{row + 1}. {question}", fonts.regular, 9, QUESTION_W - 20)
        first = center + (len(lines) - 1) * 10 / 2 - 3
        draw_lines(canv, lines, TABLE_X + 8, first, fonts.regular, 9, 10)
        if answer is not None:
            col = RESPONSES.index(answer.value) + 1
            draw_centred(canv, "X", geom.column_x(col), response_w, center - 3, fonts.bold, 10)

    cursor = geom.bottom
    _free_text_row(ctx, canv, cursor, "Problems Met:", form.problems_met if form else "")
    cursor -= TEXT_ROW_H
    canv.setLineWidth(0.5)
    canv.line(TABLE_X, cursor, TABLE_X + TABLE_W, cursor)
    _free_text_row(ctx, canv, cursor, "Other concerns:", form.other_concerns if form else "")
    cursor -= TEXT_ROW_H
    canv.line(TABLE_X, cursor, TABLE_X + TABLE_W, cursor)

    line_x = TABLE_X + TABLE_W - 168
    line_y = cursor - 30
    if form is not None and signature_url:
        ctx.draw_image(canv, signature_url, line_x + 4, line_y + 1, 152, 25)
    canv.setLineWidth(0.5)
    canv.line(line_x, line_y, line_x + 160, line_y)
    draw_centred(canv, "Intern's signature", line_x, 160, line_y - 12, fonts.regular, 8)
    cursor -= SIGNATURE_ROW_H
    canv.line(TABLE_X, cursor, TABLE_X + TABLE_W, cursor)

    canv.setFont(fonts.bold.name, 9)
    canv.drawString(TABLE_X + 8, cursor - 12, "Legend:")
    lx = TABLE_X + 8
    canv.setFont(fonts.regular.name, 8)
    for item in LEGEND:
        canv.drawString(lx, cursor - 28, item)
        lx += advance_width(fonts.regular, item, 8) + 12
    cursor -= LEGEND_ROW_H

    canv.setLineWidth(1)
    canv.rect(TABLE_X, cursor, TABLE_W, top - cursor, stroke=1, fill=0)


def compose_feedback_forms(
    ctx: ComposeContext,
    forms: Sequence[FeedbackFormRecord],
    host_orgs: Sequence[HostOrgInfoRecord],
    signature_url: Optional[str] = None,
) -> None:
    records = list(forms)
    if len(records) > len(FEEDBACK_PAGES):
        logger.warning("%d feedback forms supplied; only %d are placed", len(records), len(FEEDBACK_PAGES))
    for slot, page_index in enumerate(FEEDBACK_PAGES):
        form = records[slot] if slot < len(records) else None
        _compose_form(ctx, page_index, form, host_orgs, signature_url)
