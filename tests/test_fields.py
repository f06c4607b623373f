from __future__ import annotations

import pytest

from ojt_journal.models import HostOrgInfoRecord, PersonalInfoRecord
from ojt_journal.pipeline.fields import LabelField, RuleField, ValueField, render_fields
from ojt_journal.pipeline.sections.host_org import complete_fields, format_mobile, is_complete


class RecordingCanvas:
    def __init__(self) -> None:
        self.strings = []
        self.lines = []

    def drawString(self, x, y, text) -> None:  # noqa: N802 - mirrors reportlab
        self.strings.append((round(x, 2), round(y, 2), text))

    def line(self, x1, y1, x2, y2) -> None:
        self.lines.append((x1, y1, x2, y2))

    def setFont(self, name, size) -> None:  # noqa: N802
        pass

    def setFillColor(self, value) -> None:  # noqa: N802
        pass

    def setStrokeColor(self, value) -> None:  # noqa: N802
        pass

    def setLineWidth(self, value) -> None:  # noqa: N802
        pass

    def texts(self):
        return [text for _, _, text in self.strings]


def test_blank_value_draws_label_only(fonts) -> None:
    canv = RecordingCanvas()
    render_fields(canv, fonts, [ValueField("Religion:", lambda r: r.religion, 450, 280)], PersonalInfoRecord())
    assert canv.texts() == ["Religion:"]
    assert canv.lines == []


def test_value_is_uppercased_and_underlined(fonts) -> None:
    canv = RecordingCanvas()
    record = PersonalInfoRecord(full_name="Juan Dela Cruz", email_address="Juan@Example.com")
    render_fields(
        canv,
        fonts,
        [
            ValueField("Name of Intern:", lambda r: r.full_name, 90, 320),
            ValueField("Email Address:", lambda r: r.email_address, 380, 220, max_width=120, uppercase=False),
        ],
        record,
    )
    assert "JUAN DELA CRUZ" in canv.texts()
    assert "Juan@Example.com" in canv.texts()
    assert len(canv.lines) == 2
    x1, y1, _, y2 = canv.lines[0]
    assert y1 == y2 == 318


def test_wrapped_value_uses_line_pitch(fonts) -> None:
    canv = RecordingCanvas()
    address = "Block 12 Lot 4 Mabini Street Barangay San Isidro Municipality of Santa Maria Province of Bulacan"
    render_fields(
        canv,
        fonts,
        [ValueField("Address:", lambda r: r.emergency_contact_address, 90, 100, max_width=200)],
        PersonalInfoRecord(emergency_contact_address=address),
    )
    ys = [y for _, y, text in canv.strings if text != "Address:"]
    assert len(ys) > 1
    assert ys == [100 - 12 * i for i in range(len(ys))]


def test_rule_and_label_fields(fonts) -> None:
    canv = RecordingCanvas()
    render_fields(canv, fonts, [RuleField("Email Address:", 150, 190, 430), LabelField("Group: ", 100, 410)], None)
    assert canv.texts() == ["Email Address:", "Group: "]
    assert len(canv.lines) == 1
    x1, _, x2, _ = canv.lines[0]
    assert x2 - x1 == pytest.approx(430)


def test_host_org_defaults(fonts) -> None:
    record = HostOrgInfoRecord(
        company_name="Acme",
        company_address="Makati",
        nature_of_hte="IT",
        head_of_hte="Ana Cruz",
        head_position="CEO",
        immediate_supervisor="Ben Reyes",
        supervisor_position="Lead",
        telephone_no="",
        mobile_no="09171234567",
        email_address="hr@acme.ph",
    )
    assert not is_complete(record)
    record.telephone_no = " "
    canv = RecordingCanvas()
    render_fields(canv, fonts, complete_fields(), record)
    assert "Not Applicable" in canv.texts()
    assert "9171234567" in canv.texts()
    assert "hr@acme.ph" in canv.texts()


def test_format_mobile() -> None:
    assert format_mobile("+63 917 123 4567") == "917 123 4567"
    assert format_mobile("639171234567") == "9171234567"
    assert format_mobile("09171234567") == "9171234567"
    assert format_mobile("") == ""
