from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Tuple

from pydantic import ValidationError

from ..models import JournalBundle, PersonalInfoRecord, StudentProfile
from .formatting import format_long_upper

logger = logging.getLogger(__name__)

# Labels reported back to the student screens for blank personal fields.
PERSONAL_INFO_LABELS = [
    ("full_name", "Name of Intern"),
    ("date_of_birth", "Date of Birth"),
    ("age", "Age"),
    ("sex", "Sex"),
    ("civil_status", "Civil Status"),
    ("year_level", "Year Level"),
    ("academic_year", "Academic Year"),
    ("religion", "Religion"),
    ("permanent_address", "Permanent Address"),
    ("present_address", "Present Address"),
    ("contact_number", "Contact Number"),
    ("email_address", "Email Address"),
    ("citizenship", "Citizenship"),
    ("fathers_name", "Father's Name"),
    ("fathers_occupation", "Father's Occupation"),
    ("mothers_name", "Mother's Name"),
    ("mothers_occupation", "Mother's Occupation"),
    ("emergency_contact_name", "Emergency Contact Name"),
    ("emergency_contact_relationship", "Emergency Relationship"),
    ("emergency_contact_number", "Emergency Contact Number"),
]


class BundleError(ValueError):
    pass


def load_bundle(path: Path) -> JournalBundle:
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise BundleError(f"Cannot read journal data {path}: {exc}") from exc
    try:
        bundle = JournalBundle.model_validate(raw)
    except ValidationError as exc:
        raise BundleError(f"Invalid journal data in {path}: {exc}") from exc
    logger.info(
        "Loaded bundle: %d companies, %d evidence, %d certificates",
        len(bundle.companies),
        len(bundle.evidence),
        len(bundle.certificates),
    )
    return bundle


def _clean(value) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _name_part(value) -> str:
    text = _clean(value)
    return "" if text.upper() == "N/A" else text


def build_personal_information(profile: StudentProfile, fallback_email: str = "") -> Tuple[PersonalInfoRecord, List[str]]:
    """Normalize a raw profile into the personal-information record and list the blank fields."""
    full_name = " ".join(
        p for p in (_name_part(profile.first_name), _name_part(profile.middle_name), _name_part(profile.last_name)) if p
    )
    generic_address = _clean(profile.address)
    permanent = _clean(profile.permanent_address) or generic_address
    present = _clean(profile.present_address) or generic_address
    birth = _clean(profile.date_of_birth)

    record = PersonalInfoRecord(
        full_name=full_name,
        date_of_birth=format_long_upper(birth) if birth else "",
        age=_clean(profile.age),
        sex=_clean(profile.sex),
        civil_status=_clean(profile.civil_status),
        year_level=_clean(profile.year),
        academic_year=_clean(profile.academic_year),
        religion=_clean(profile.religion),
        permanent_address=permanent,
        present_address=present,
        contact_number=_clean(profile.phone_number),
        email_address=_clean(profile.email) or _clean(fallback_email),
        citizenship=_clean(profile.citizenship),
        fathers_name=_clean(profile.father_name),
        fathers_occupation=_clean(profile.father_occupation),
        mothers_name=_clean(profile.mother_name),
        mothers_occupation=_clean(profile.mother_occupation),
        emergency_contact_name=_clean(profile.emergency_contact_name),
        emergency_contact_relationship=_clean(profile.emergency_contact_relationship),
        emergency_contact_number=_clean(profile.emergency_contact_number),
        emergency_contact_address=permanent,
    )

    missing = []
    for field, label in PERSONAL_INFO_LABELS:
        value = getattr(record, field)
        if not value or (field == "permanent_address" and value == generic_address):
            missing.append(label)
    return record, missing
