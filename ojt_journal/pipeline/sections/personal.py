from __future__ import annotations

import logging
from typing import List

from ...config import PERSONAL_INFO_PAGE
from ...models import PersonalInfoRecord
from ..context import ComposeContext
from ..fields import Field, ValueField, render_fields

logger = logging.getLogger(__name__)

PHOTO_BOX = (142.0, 145.0)
PHOTO_ORIGIN = ((615 - 142) / 2 + 25, 400.0)


def personal_fields() -> List[Field]:
    return [
        ValueField("Name of Intern:", lambda r: r.full_name, 90, 320),
        ValueField("Date of Birth:", lambda r: r.date_of_birth, 90, 300),
        ValueField("Age:", lambda r: r.age, 280, 300),
        ValueField("Sex:", lambda r: r.sex, 370, 300),
        ValueField("Civil Status:", lambda r: r.civil_status, 450, 300),
        ValueField("Year Level:", lambda r: r.year_level, 90, 280),
        ValueField("Academic Year:", lambda r: r.academic_year, 280, 280),
        ValueField("Religion:", lambda r: r.religion, 450, 280),
        ValueField("Permanent Address:", lambda r: r.permanent_address, 90, 260, max_width=400),
        ValueField("Present Address:", lambda r: r.present_address, 90, 240, max_width=400),
        ValueField("Contact Number:", lambda r: r.contact_number, 90, 220),
        ValueField("Email Address:", lambda r: r.email_address, 380, 220, max_width=120, uppercase=False),
        ValueField("Citizenship:", lambda r: r.citizenship, 90, 200),
        ValueField("Father's Name:", lambda r: r.fathers_name, 90, 180),
        ValueField("Occupation:", lambda r: r.fathers_occupation, 380, 180, max_width=120),
        ValueField("Mother's Name:", lambda r: r.mothers_name, 90, 160),
        ValueField("Occupation:", lambda r: r.mothers_occupation, 380, 160, max_width=120),
        ValueField(
            "Person to be contacted in case of emergency:",
            lambda r: r.emergency_contact_name,
            90,
            140,
            max_width=200,
        ),
        ValueField("Relationship:", lambda r: r.emergency_contact_relationship, 90, 120),
        ValueField("Contact Number:", lambda r: r.emergency_contact_number, 380, 120),
        ValueField("Address:", lambda r: r.emergency_contact_address, 90, 100, max_width=480),
    ]


def compose_personal_information(ctx: ComposeContext, record: PersonalInfoRecord, photo_url: str | None = None) -> None:
    canv = ctx.canvas(PERSONAL_INFO_PAGE)
    if photo_url:
        if ctx.draw_image(canv, photo_url, PHOTO_ORIGIN[0], PHOTO_ORIGIN[1], *PHOTO_BOX) is None:
            logger.info("Personal information page drawn without photo")
    render_fields(canv, ctx.fonts, personal_fields(), record, ctx.style)
