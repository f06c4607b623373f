from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ...config import HOST_ORG_PAGES
from ...models import HostOrgInfoRecord
from ..context import ComposeContext
from ..fields import Field, RuleField, ValueField, render_fields

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = (
    "nature_of_hte",
    "head_of_hte",
    "head_position",
    "immediate_supervisor",
    "supervisor_position",
    "telephone_no",
    "mobile_no",
    "email_address",
)

NOT_APPLICABLE = "Not Applicable"
PHOTO_BOX = (350.0, 165.0)
PHOTO_ORIGIN = ((615 - 350) / 2 + 18, 510.0)

# (label, x, y, value max width)
_LAYOUT = [
    ("Name of the HTE:", 100, 440, 400),
    ("Address:", 100, 415, 460),
    ("Nature of the HTE:", 100, 390, 350),
    ("Head of the HTE:", 100, 360, 450),
    ("Position:", 100, 340, 460),
    ("Immediate Supervisor of the Trainee:   ", 100, 315, 280),
    ("Position/Designation:", 100, 290, 410),
    ("Telephone No:", 150, 240, 200),
    ("Mobile No: (+63)", 150, 215, 200),
    ("Email Address:", 150, 190, 430),
]


def is_complete(record: HostOrgInfoRecord) -> bool:
    return all((getattr(record, name) or "").strip() for name in REQUIRED_FIELDS)


def format_mobile(value: str | None) -> str:
    """Strip the country prefix; the label already carries ``(+63)``."""
    text = (value or "").strip()
    if text.startswith("+63"):
        return text[3:].strip()
    if text.startswith("63"):
        return text[2:].strip()
    if text.startswith("09"):
        return text[1:]
    return text


def _contact_heading(ctx: ComposeContext, canv) -> None:
    canv.setFont(ctx.fonts.bold.name, 12)
    canv.drawString(100, 265, "Contact Information:")


def complete_fields() -> List[Field]:
    accessors = [
        lambda r: r.company_name,
        lambda r: r.company_address,
        lambda r: r.nature_of_hte,
        lambda r: r.head_of_hte,
        lambda r: r.head_position,
        lambda r: r.immediate_supervisor,
        lambda r: r.supervisor_position,
        lambda r: r.telephone_no,
        lambda r: format_mobile(r.mobile_no),
        lambda r: r.email_address,
    ]
    out: List[Field] = []
    for (label, x, y, width), accessor in zip(_LAYOUT, accessors):
        if label == "Telephone No:":
            out.append(ValueField(label, accessor, x, y, gap=-2, default=NOT_APPLICABLE))
        elif label == "Mobile No: (+63)":
            out.append(ValueField(label, accessor, x, y, gap=-2))
        elif label == "Email Address:":
            out.append(ValueField(label, accessor, x, y, max_width=width, gap=-2, uppercase=False))
        else:
            out.append(ValueField(label, accessor, x, y, max_width=width, gap=-2))
    return out


def degraded_fields() -> List[Field]:
    return [
        ValueField("Name of the HTE:", lambda r: r.company_name, 100, 440, gap=-2),
        ValueField("Address:", lambda r: r.company_address, 100, 415, max_width=460, gap=-2),
    ]


def waiting_fields() -> List[Field]:
    return [RuleField(label, x, y, width) for label, x, y, width in _LAYOUT]


def _compose_slot(ctx: ComposeContext, page_index: int, record: Optional[HostOrgInfoRecord]) -> str:
    canv = ctx.canvas(page_index)

    if record is None:
        _contact_heading(ctx, canv)
        render_fields(canv, ctx.fonts, waiting_fields(), None, ctx.style)
        return "waiting"

    if record.photo_url:
        ctx.draw_image(canv, record.photo_url, PHOTO_ORIGIN[0], PHOTO_ORIGIN[1], *PHOTO_BOX)

    if not is_complete(record):
        render_fields(canv, ctx.fonts, degraded_fields(), record, ctx.style)
        return "incomplete"

    _contact_heading(ctx, canv)
    render_fields(canv, ctx.fonts, complete_fields(), record, ctx.style)
    return "complete"


def compose_host_organizations(ctx: ComposeContext, host_orgs: Sequence[HostOrgInfoRecord]) -> None:
    records = list(host_orgs)
    if len(records) > len(HOST_ORG_PAGES):
        logger.warning(
            "Only %d host organizations fit the journal; %d not placed",
            len(HOST_ORG_PAGES),
            len(records) - len(HOST_ORG_PAGES),
        )
    for slot, page_index in enumerate(HOST_ORG_PAGES):
        record = records[slot] if slot < len(records) else None
        layout = _compose_slot(ctx, page_index, record)
        logger.debug("Host organization page %d: %s layout", page_index + 1, layout)
