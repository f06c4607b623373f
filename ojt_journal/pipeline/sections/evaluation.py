"""Supervisor evaluation instrument: three pages per record.

Page 1 carries sections I and II and the overall rating question, page 2 the
yes/no questions, the rating-scale legend and the start of the rubric, which
flows onto page 3 together with the total and the signature block.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from reportlab.pdfgen import canvas

from ...config import EVALUATION_FIRST_PAGE, EVALUATION_PAGES_PER_FORM, HORIZONTAL_MARGIN, MAX_EVALUATION_FORMS
from ...models import EvaluationFormRecord, PerformanceRating
from ..context import ComposeContext
from ..formatting import format_hours, format_long_date
from ..grid import draw_grid
from ..metrics import FontSet, advance_width
from ..text_layout import draw_centred, wrap_text

logger = logging.getLogger(__name__)

LEFT = HORIZONTAL_MARGIN + 50
RIGHT_COLUMN = HORIZONTAL_MARGIN + 300
EDGE_PADDING = 20

RATING_OPTIONS = [r.value for r in PerformanceRating]
RATING_SCALE = ["5 - EXCELLENT", "4 - VERY GOOD", "3 - GOOD", "2 - POOR", "1 - VERY POOR"]

ROW_H = 25.0
ROW_GAP = 1.0
FLOW_THRESHOLD = 100.0

# (text, record attribute); attribute None marks a heading, "section" or "subsection".
RUBRIC: List[Tuple[str, Optional[str], str]] = [
    ("Section A: WORK PERFORMANCE", None, "section"),
    ("1. Shows creativity and originality in the work given", "work_performance1", ""),
    ("2. Apply the theories and knowledge learned at school on the task/project given", "work_performance2", ""),
    (
        "3. Demonstrates the skills and ability to use technology tools in the process of conducting tasks",
        "work_performance3",
        "",
    ),
    (
        "4. Has a clear description and understanding about the task given by the superior and can able to "
        "grasp the instructions easily.",
        "work_performance4",
        "",
    ),
    (
        "5. Exhibits innovativeness in the quality of work with regards to the unexpected work load demands "
        "of the superiors in a limited time",
        "work_performance5",
        "",
    ),
    (
        "6. Can able to accomplish the task given and display the desired output/quality of the task.",
        "work_performance6",
        "",
    ),
    ("Section B: PERSONAL QUALITIES", None, "section"),
    ("Communication Skills", None, "subsection"),
    (
        "1. Communicates with supervisors regularly and gives updates with regards to the assigned task "
        "given to him/her",
        "communication1",
        "",
    ),
    (
        "2. Promotes good communication effectively with regards to dealing with people he/she is associated with",
        "communication2",
        "",
    ),
    ("Interpersonal Skills", None, "subsection"),
    (
        "1. Demonstrates respect and courtesy in interacting with superiors, employees and co-interns in "
        "his/her assigned organization",
        "professional_conduct1",
        "",
    ),
    (
        "2. Establishes comfortable and good working relationship with peers and supervisors",
        "professional_conduct2",
        "",
    ),
    (
        "3. Listens well with superiors and never hesitates to ask questions whenever it is necessary",
        "professional_conduct3",
        "",
    ),
    ("Punctuality", None, "subsection"),
    ("1. Demonstrated punctuality at work as he/she arrives and leaves on time", "punctuality1", ""),
    ("2. He/she reports to the organization to the specified work schedule.", "punctuality2", ""),
    ("3. Practices diligence and professionalism at work", "punctuality3", ""),
    ("Flexibility", None, "subsection"),
    (
        "1. Exhibits flexibility and can able to adapt to the changes that might occur during the process "
        "of conducting the task",
        "flexibility1",
        "",
    ),
    ("2. Carry out orders easily and pays attention to the details of the tasks", "flexibility2", ""),
    ("Attitude", None, "subsection"),
    ("1. Displays optimism and perseverance in the conduct of the task", "attitude1", ""),
    (
        "2. Demonstrates willingness to accept direction, pieces of advice, words of wisdom and constructive "
        "counseling from superiors for the improvement of tasks",
        "attitude2",
        "",
    ),
    ("3. Exhibits the zeal to learn and be trained to improve capabilities and skills", "attitude3", ""),
    (
        "4. Promotes self-confidence and poise and shows maturity in handling emotions and mental pressure",
        "attitude4",
        "",
    ),
    (
        "5. Exercises self-discipline and demonstrates dedication as well as commitment to his/her assigned tasks",
        "attitude5",
        "",
    ),
    ("Reliability", None, "subsection"),
    (
        "1. Knows how to handle tasks even without supervision and does not depend on others to do the "
        "tasks given to him/her",
        "reliability1",
        "",
    ),
    ("2. Follows orders and finishes the tasks within the specified period of time", "reliability2", ""),
    (
        "3. Acts accordingly at work and carry out the tasks given to him/her with responsibility",
        "reliability3",
        "",
    ),
    (
        "4. Has a great deal of initiative and the drive to do what is required in the given task",
        "reliability4",
        "",
    ),
]


def _available(pw: float, x: float) -> float:
    return pw - x - HORIZONTAL_MARGIN - EDGE_PADDING


def _underlined_value(
    canv: canvas.Canvas,
    fonts: FontSet,
    label: str,
    x: float,
    y: float,
    value: str,
    underline: float,
) -> float:
    """Bold label followed by the value on an underline. Returns the value x."""
    canv.setFont(fonts.bold.name, 10)
    canv.drawString(x, y, label)
    value_x = x + advance_width(fonts.bold, label, 10)
    canv.setFont(fonts.regular.name, 10)
    if value:
        canv.drawString(value_x, y, value)
    canv.setLineWidth(0.5)
    canv.line(value_x, y - 2, value_x + max(advance_width(fonts.regular, value, 10), underline), y - 2)
    return value_x


def _capped(pw: float, fonts: FontSet, label: str, x: float, cap: float) -> float:
    return min(_available(pw, x + advance_width(fonts.bold, label, 10)), cap)


def _beside(pw: float, fonts: FontSet, label: str, x: float, cap: float) -> float:
    # Left half of a two-field row leaves room for the right-hand field.
    return min(cap, pw - (x + advance_width(fonts.bold, label, 10)) - 150 - HORIZONTAL_MARGIN - EDGE_PADDING)


def _wrapped_underlined(
    canv: canvas.Canvas, fonts: FontSet, x: float, y: float, text: str, width: float, cap: float
) -> int:
    lines = wrap_text(text, fonts.regular, 10, width)
    canv.setFont(fonts.regular.name, 10)
    canv.setLineWidth(0.5)
    for i, line in enumerate(lines):
        yy = y - i * 12
        if line:
            canv.drawString(x, yy, line)
        canv.line(x, yy - 2, x + max(advance_width(fonts.regular, line, 10), min(width, cap)), yy - 2)
    return len(lines)


def _paragraph(canv: canvas.Canvas, fonts: FontSet, text: str, x: float, y: float, width: float, size: float = 10) -> int:
    lines = wrap_text(text, fonts.regular, size, width)
    canv.setFont(fonts.regular.name, size)
    for i, line in enumerate(lines):
        canv.drawString(x, y - i * 12, line)
    return len(lines)


def _section_heading(canv: canvas.Canvas, fonts: FontSet, text: str, y: float) -> float:
    lines = wrap_text(text, fonts.bold, 12, 300)
    canv.setFont(fonts.bold.name, 12)
    for i, line in enumerate(lines):
        canv.drawString(LEFT, y - i * 14, line)
    return y - (len(lines) * 14 + 11)


def _checkbox(canv: canvas.Canvas, fonts: FontSet, x: float, y: float, checked: bool) -> None:
    canv.setLineWidth(1)
    canv.rect(x, y - 8, 10, 10, stroke=1, fill=0)
    if checked:
        canv.setFont(fonts.bold.name, 8)
        canv.drawString(x + 2, y - 6, "X")


def _spread(fonts: FontSet, items: Sequence[str], start: float, pw: float, extra: float, fallback: float) -> List[float]:
    """X positions that spread items across the usable width without running past the edge."""
    limit = pw - HORIZONTAL_MARGIN - EDGE_PADDING
    widths = [advance_width(fonts.regular, item, 10) + extra for item in items]
    available = _available(pw, start)
    total = sum(widths)
    spacing = (available - total) / (len(items) - 1) if total < available else fallback
    xs = []
    x = start
    for i, width in enumerate(widths):
        xs.append(x)
        if i < len(widths) - 1:
            x += width + min(spacing, fallback)
            if x + widths[i + 1] > limit:
                x = limit - widths[i + 1]
    return xs


def _page_one(ctx: ComposeContext, page_index: int, form: Optional[EvaluationFormRecord]) -> None:
    page = ctx.page(page_index)
    canv = page.canvas
    fonts = ctx.fonts
    pw = page.width
    f = form or EvaluationFormRecord()

    y = page.height - 240
    draw_centred(canv, "EVALUATION RATING SHEET FOR SUPERVISORS", 0, pw, y, fonts.bold, 14)
    y -= 30

    name = ctx.student_name if form is not None else ""
    intro = f"{name} is an OJT Trainee/Intern in your organization/office under your supervision."
    n = _paragraph(canv, fonts, intro.strip(), LEFT, y, pw - HORIZONTAL_MARGIN * 2, size=11)
    y -= n * 12 + 10
    canv.setFont(fonts.regular.name, 10)
    canv.drawString(LEFT, y, "(Please provide an evaluation of the trainee's performance.)")
    y -= 30

    y = _section_heading(canv, fonts, "Section I: COMPANY AND SUPERVISOR", y)
    label = "Organization/Company Name:"
    _underlined_value(canv, fonts, label, LEFT, y, f.organization_company_name, _capped(pw, fonts, label, LEFT, 400))
    y -= 20

    canv.setFont(fonts.bold.name, 10)
    canv.drawString(LEFT, y, "Address:")
    addr_x = LEFT + advance_width(fonts.bold, "Address:", 10)
    n = _wrapped_underlined(canv, fonts, addr_x, y, f.address, _available(pw, addr_x), 400)
    y -= n * 12 + 10

    _underlined_value(canv, fonts, "City:", LEFT, y, f.city, _beside(pw, fonts, "City:", LEFT, 200))
    _underlined_value(canv, fonts, "ZIP:", RIGHT_COLUMN, y, f.zip, _capped(pw, fonts, "ZIP:", RIGHT_COLUMN, 100))
    y -= 20
    _underlined_value(
        canv, fonts, "Position:", LEFT, y, f.supervisor_position, _capped(pw, fonts, "Position:", LEFT, 400)
    )
    y -= 20
    _underlined_value(canv, fonts, "Phone:", LEFT, y, f.supervisor_phone or "", _beside(pw, fonts, "Phone:", LEFT, 150))
    _underlined_value(
        canv, fonts, "Email:", RIGHT_COLUMN, y, f.supervisor_email or "", _capped(pw, fonts, "Email:", RIGHT_COLUMN, 250)
    )
    y -= 40

    y = _section_heading(canv, fonts, "Section II: ON-THE-JOB TRAINING DATA", y)
    start = format_long_date(f.start_date) if f.start_date else ""
    end = format_long_date(f.end_date) if f.end_date else ""
    _underlined_value(canv, fonts, "Start Date:", LEFT, y, start, _beside(pw, fonts, "Start Date:", LEFT, 200))
    _underlined_value(canv, fonts, "End Date:", RIGHT_COLUMN, y, end, _capped(pw, fonts, "End Date:", RIGHT_COLUMN, 200))
    y -= 20
    hours = format_hours(f.total_hours) if f.total_hours else ""
    _underlined_value(canv, fonts, "Total Hours:", LEFT, y, hours, _capped(pw, fonts, "Total Hours:", LEFT, 100))
    y -= 20

    canv.setFont(fonts.bold.name, 10)
    canv.drawString(LEFT, y, "Description of Duties:")
    y -= 15
    n = _wrapped_underlined(canv, fonts, LEFT, y, f.description_of_duties, _available(pw, LEFT), 500)
    y -= n * 12 + 30

    y = _section_heading(canv, fonts, "Section III: PERFORMANCE EVALUATION", y)
    n = _paragraph(canv, fonts, "1. How well did the Trainee perform the assigned tasks?", LEFT, y, _available(pw, LEFT))
    y -= n * 12 + 10

    selected = f.question1_performance.value if f.question1_performance else None
    for x, option in zip(_spread(fonts, RATING_OPTIONS, LEFT, pw, 25, 120), RATING_OPTIONS):
        _checkbox(canv, fonts, x, y, option == selected)
        canv.setFont(fonts.regular.name, 10)
        canv.drawString(x + 15, y, option)


def _yes_no(
    canv: canvas.Canvas,
    fonts: FontSet,
    pw: float,
    y: float,
    question: str,
    answer: Optional[bool],
    elaboration: Optional[str] = None,
    elaboration_label: str = "",
) -> float:
    n = _paragraph(canv, fonts, question, LEFT, y, _available(pw, LEFT))
    y -= n * 12 + 10

    _checkbox(canv, fonts, LEFT, y, answer is True)
    canv.setFont(fonts.regular.name, 10)
    canv.drawString(LEFT + 15, y, "YES")
    _checkbox(canv, fonts, LEFT + 80, y, answer is False)
    canv.setFont(fonts.regular.name, 10)
    canv.drawString(LEFT + 95, y, "NO")

    if answer is False and elaboration and elaboration_label:
        y -= 20
        canv.drawString(LEFT + 115, y, elaboration_label)
        y -= 15
        n = _wrapped_underlined(canv, fonts, LEFT, y, elaboration, _available(pw, LEFT), 450)
        y -= n * 12
    return y


def _rubric_header(ctx: ComposeContext, canv: canvas.Canvas, widths: List[float], top: float) -> None:
    fonts = ctx.fonts
    geom = draw_grid(canv, (LEFT - 10, top), widths, ROW_H, 0, ROW_H, line_width=0.5)
    canv.setLineWidth(1)
    canv.rect(geom.x, top - ROW_H, geom.width, ROW_H, stroke=1, fill=0)
    canv.setFont(fonts.bold.name, 8)
    canv.drawString(geom.x + 5, top - ROW_H + 6, "CRITERIA")
    for i, label in enumerate(["5", "4", "3", "2", "1"], start=1):
        draw_centred(canv, label, geom.column_x(i), widths[i], top - ROW_H + 6, fonts.bold, 8)


def _rubric_row(
    ctx: ComposeContext, canv: canvas.Canvas, widths: List[float], top: float, text: str, rating: Optional[int]
) -> None:
    fonts = ctx.fonts
    geom = draw_grid(canv, (LEFT - 10, top), widths, ROW_H, 1, 0, line_width=0.5)
    lines = wrap_text(text, fonts.regular, 8, widths[0] - 10)
    canv.setFont(fonts.regular.name, 8)
    for i, line in enumerate(lines):
        canv.drawString(geom.x + 5, top - ROW_H + 6 + (len(lines) - 1 - i) * 10, line)
    if rating in (1, 2, 3, 4, 5):
        col = 6 - rating
        draw_centred(canv, "X", geom.column_x(col), widths[col], top - ROW_H / 2 + 3, fonts.regular, 8)


def _signature_line(
    ctx: ComposeContext, canv: canvas.Canvas, pw: float, line_y: float, url: Optional[str], caption: str
) -> float:
    line_x = (pw - 200) / 2
    canv.setLineWidth(0.5)
    canv.line(line_x, line_y, line_x + 200, line_y)
    if url:
        ctx.draw_image(canv, url, line_x + 4, line_y - 5, 192, 25)
    draw_centred(canv, caption, line_x, 200, line_y - 10, ctx.fonts.bold, 9)
    return line_x


def _pages_two_three(ctx: ComposeContext, first_index: int, form: Optional[EvaluationFormRecord]) -> None:
    fonts = ctx.fonts
    f = form or EvaluationFormRecord()
    page2 = ctx.page(first_index + 1)
    page3 = ctx.page(first_index + 2)
    canv = page2.canvas
    pw = page2.width

    y = page2.height - 110
    y = _yes_no(
        canv,
        fonts,
        pw,
        y,
        "2. Does the Trainee possess basic skills, intelligence, and motivation to pursue a successful "
        "career in the IT industry?",
        f.question2_skills_career,
        f.question2_elaboration,
        "(Please elaborate)",
    )
    y -= 20
    y = _yes_no(
        canv,
        fonts,
        pw,
        y,
        "3. Would you consider the Trainee as a likely candidate for a full-time position in your area of experience?",
        f.question3_fulltime_candidate,
    )
    y -= 20
    y = _yes_no(
        canv,
        fonts,
        pw,
        y,
        "4. Are you interested in other Trainees from our University?",
        f.question4_interest_other_trainees,
        f.question4_elaboration,
        "(If NO, please elaborate)",
    )
    y -= 30

    n = _paragraph(
        canv,
        fonts,
        "5. Listed below are several qualities we believe are important to the successful completion of an "
        "OJT experience.",
        LEFT,
        y,
        _available(pw, LEFT),
    )
    y -= n * 12 + 5
    instruction = wrap_text(
        "(To the supervisor: Please rate each item using the rating scale provided below)",
        fonts.regular,
        9,
        _available(pw, LEFT),
    )
    canv.setFont(fonts.regular.name, 9)
    for i, line in enumerate(instruction):
        canv.drawString(LEFT, y - i * 10, line)
    y -= (len(instruction) - 1) * 10 + 20

    canv.setFont(fonts.regular.name, 10)
    for x, item in zip(_spread(fonts, RATING_SCALE, LEFT, pw, 0, 110), RATING_SCALE):
        canv.drawString(x, y, item)
    y -= 70

    table_w = pw - HORIZONTAL_MARGIN * 4
    criteria_w = table_w * 0.75
    widths = [criteria_w] + [(table_w - criteria_w) / 5] * 5
    _rubric_header(ctx, canv, widths, y)
    y -= ROW_H + ROW_GAP

    current = page2
    for text, key, kind in RUBRIC:
        if y < FLOW_THRESHOLD and current is page2:
            current = page3
            canv = page3.canvas
            y = page3.height - 80
        if key is None:
            if kind == "section":
                canv.setFont(fonts.bold.name, 10)
                canv.drawString(LEFT - 10, y - 10, text)
                y -= 20
            else:
                canv.setFont(fonts.bold.name, 9)
                canv.drawString(LEFT + 10, y - 10, text)
                y -= 18
            continue
        _rubric_row(ctx, canv, widths, y, text, getattr(f, key))
        y -= ROW_H + ROW_GAP

    if current is page2:
        # The rubric always ends on the third page.
        current = page3
        canv = page3.canvas
        y = page3.height - 80

    total_geom = draw_grid(canv, (LEFT - 10, y), widths, ROW_H, 1, 0, line_width=0.5)
    canv.setLineWidth(1)
    canv.rect(total_geom.x, y - ROW_H, total_geom.width, ROW_H, stroke=1, fill=0)
    canv.setFont(fonts.bold.name, 9)
    canv.drawString(total_geom.x + 5, y - ROW_H + 6, "TOTAL")
    if f.total_score is not None:
        score = str(f.total_score)
        canv.setFont(fonts.regular.name, 9)
        canv.drawString(total_geom.x + total_geom.width - 50 - advance_width(fonts.regular, score, 9), y - ROW_H + 6, score)

    pw3 = current.width
    supervisor_y = total_geom.bottom - 40
    line_x = _signature_line(ctx, canv, pw3, supervisor_y, f.supervisor_signature_url, "Supervisor")
    draw_centred(canv, "(Name over Printed Name)", line_x, 200, supervisor_y - 20, fonts.regular, 8)
    if f.supervisor_name:
        draw_centred(canv, f.supervisor_name.upper(), line_x, 200, supervisor_y - 30, fonts.regular, 9)

    company_y = supervisor_y - 45 - 2
    _signature_line(ctx, canv, pw3, company_y, f.company_signature_url, "Company Signature")

    date_y = company_y - 25
    canv.setFont(fonts.regular.name, 9)
    date_x = (pw3 - 200) / 2
    canv.drawString(date_x, date_y, "Date:")
    value_x = date_x + advance_width(fonts.regular, "Date:", 9) + 5
    value = format_long_date(f.evaluation_date) if f.evaluation_date else ""
    if value:
        canv.drawString(value_x, date_y, value)
    canv.setLineWidth(0.5)
    canv.line(value_x, date_y - 2, value_x + max(advance_width(fonts.regular, value, 9), 200 - (value_x - date_x)), date_y - 2)


def compose_evaluation_forms(ctx: ComposeContext, forms: Sequence[EvaluationFormRecord]) -> None:
    records = list(forms)
    if len(records) > MAX_EVALUATION_FORMS:
        logger.warning("%d evaluation forms supplied; only %d are placed", len(records), MAX_EVALUATION_FORMS)
    for slot in range(MAX_EVALUATION_FORMS):
        form = records[slot] if slot < len(records) else None
        first = EVALUATION_FIRST_PAGE + slot * EVALUATION_PAGES_PER_FORM
        _page_one(ctx, first, form)
        _pages_two_three(ctx, first, form)
        logger.debug("Evaluation form %d on pages %d-%d", slot + 1, first + 1, first + EVALUATION_PAGES_PER_FORM)
