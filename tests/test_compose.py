from __future__ import annotations

from datetime import date, datetime

import fitz  # PyMuPDF
import pytest

from conftest import TEMPLATE_PAGES, FakeFetcher, make_template
from ojt_journal.models import (
    AttendanceEntry,
    CertificateEntry,
    CompanyAttendanceBlock,
    EvaluationFormRecord,
    EvidenceEntry,
    FeedbackFormRecord,
    HostOrgInfoRecord,
    JournalBundle,
    LikertAnswer,
    PersonalInfoRecord,
    StudentInfo,
    TrainingScheduleEntry,
    VerificationStatus,
)
from ojt_journal.pipeline.assemble import compose_journal
from ojt_journal.pipeline.errors import CompositionError, FontEmbeddingError, TemplateError
from ojt_journal.pipeline.metrics import FontFace, embed

TODAY = date(2026, 10, 17)
SIGNATURE = "https://cdn.example.com/student-signature.png"


def attendance(count: int, pending: int = 0) -> list:
    entries = [
        AttendanceEntry(
            id=f"a{day}",
            company_id="c1",
            company_name="Acme Corp",
            date=f"2025-01-{day:02d}",
            am_in="08:00",
            am_out="12:00",
            pm_in="13:00",
            pm_out="17:00",
            total_hours=8,
            status="present",
            verification_status=VerificationStatus.ACCEPTED,
        )
        for day in range(1, count + 1)
    ]
    entries += [
        AttendanceEntry(date="2025-02-01", total_hours=8, verification_status=VerificationStatus.PENDING)
        for _ in range(pending)
    ]
    return entries


def bundle_for(entries: list, schedule_hours: float = 0, finished: bool = False, **extra) -> JournalBundle:
    return JournalBundle(
        student=StudentInfo(id="s1", name="Juan Dela Cruz", email="juan@example.com"),
        personal_info=PersonalInfoRecord(full_name="Juan Dela Cruz", email_address="juan@example.com"),
        companies=[
            CompanyAttendanceBlock(
                company_id="c1",
                company_name="Acme Corp",
                company_address="Makati City",
                attendance_entries=entries,
                finished_at="2025-03-01" if finished else None,
            )
        ],
        host_orgs=[HostOrgInfoRecord(company_id="c1", company_name="Acme Corp", company_address="Makati City")],
        training_schedules=[TrainingScheduleEntry(task_classification="Helpdesk", total_hours=schedule_hours)]
        if schedule_hours
        else [],
        student_signature_url=SIGNATURE,
        **extra,
    )


def compose(bundle: JournalBundle, fetcher: FakeFetcher | None = None) -> fitz.Document:
    data = compose_journal(
        make_template(),
        bundle,
        fetcher=fetcher or FakeFetcher(),
        today=TODAY,
        generated_at=datetime(2026, 10, 17, 9, 30),
    )
    return fitz.open(stream=data, filetype="pdf")


def test_time_records_paginate_by_ten() -> None:
    doc = compose(bundle_for(attendance(23, pending=2)))
    first, second, third, blank = (doc[i].get_text() for i in range(19, 23))

    assert "ACME CORP" in first
    assert "Jan 1, 2025" in first and "Jan 10, 2025" in first
    assert "Jan 11, 2025" in second and "Jan 20, 2025" in second
    assert "Jan 21, 2025" in third and "Jan 23, 2025" in third
    assert "Jan 20, 2025" not in third
    assert third.count("08:00") == 3
    assert "Feb 1, 2025" not in first + second + third

    assert "Name of Student" in blank
    assert "JUAN DELA CRUZ" in blank
    assert "ACME CORP" not in blank
    assert "Template page 23" in blank

    # 46 template pages, three attendance log pages and one evidence page.
    assert doc.page_count == TEMPLATE_PAGES + 4
    assert "Attendance Record / DTR - Acme Corp (Page 3 of 3)" in doc[TEMPLATE_PAGES + 2].get_text()


def full_width_rules(page: fitz.Page, left: float, right: float) -> set:
    rules = set()
    for drawing in page.get_drawings():
        for item in drawing["items"]:
            if item[0] != "l":
                continue
            start, end = item[1], item[2]
            xs = sorted((start.x, end.x))
            if abs(start.y - end.y) < 0.5 and abs(xs[0] - left) < 0.5 and abs(xs[1] - right) < 0.5:
                rules.add(round(start.y, 1))
    return rules


def test_last_time_record_page_keeps_blank_bordered_rows() -> None:
    doc = compose(bundle_for(attendance(23)))
    rules = sorted(full_width_rules(doc[21], 100, 562))
    # table top, header rule and one rule under each of the ten rows
    assert len(rules) == 12
    gaps = [b - a for a, b in zip(rules[2:], rules[3:])]
    assert all(abs(gap - 20) < 0.5 for gap in gaps)
    assert doc[21].get_text().count("Jan ") == 3


def test_incomplete_host_org_shows_name_and_address_only() -> None:
    orgs = [
        HostOrgInfoRecord(
            company_id="c1",
            company_name="Acme Corp",
            company_address="Makati City",
            nature_of_hte="IT Services",
            head_position="CEO",
            immediate_supervisor="Ben Reyes",
            supervisor_position="IT Lead",
            telephone_no="8123-4567",
            mobile_no="+639171234567",
            email_address="hr@acme.example.com",
        )
    ]
    doc = compose(JournalBundle(host_orgs=orgs))
    page = doc[15].get_text()
    assert "Name of the HTE:" in page and "ACME CORP" in page
    assert "Address:" in page and "MAKATI CITY" in page
    assert "Contact Information:" not in page
    assert "Head of the HTE:" not in page
    assert "Telephone No:" not in page
    assert "IT SERVICES" not in page
    assert "Contact Information:" in doc[16].get_text()


def test_feedback_answers_and_host_org_match() -> None:
    orgs = [
        HostOrgInfoRecord(company_id="c1", company_name="Acme Corp"),
        HostOrgInfoRecord(company_id="c2", company_name="Globex Inc"),
    ]
    form = FeedbackFormRecord(
        company_id="c2",
        question1=LikertAnswer.STRONGLY_AGREE,
        question2=LikertAnswer.DISAGREE,
        form_date="2025-03-01",
    )
    doc = compose(
        JournalBundle(
            student=StudentInfo(name="Juan Dela Cruz"),
            host_orgs=orgs,
            feedback_forms=[form],
        )
    )
    page = doc[33]
    text = page.get_text()
    assert "Globex Inc" in text and "Acme Corp" not in text
    assert "March 1, 2025" in text

    marks = sorted((w for w in page.get_text("words") if w[4] == "X"), key=lambda w: w[1])
    assert len(marks) == 2
    # response columns start after the 320pt question column at x=60, each 34.4pt wide
    assert 380 <= marks[0][0] <= 414.4
    assert 483.2 <= marks[1][0] <= 517.6
    assert not [w for w in doc[34].get_text("words") if w[4] == "X"]


def test_appendix_log_marks_missing_punches() -> None:
    entries = attendance(1)
    entries[0].pm_in = ""
    entries[0].pm_out = ""
    doc = compose(bundle_for(entries))
    log = doc[TEMPLATE_PAGES].get_text()
    assert log.count("--:--") == 2
    assert "12:00" in log


def test_fixed_sections_render_without_data() -> None:
    doc = compose(JournalBundle())
    assert doc.page_count == TEMPLATE_PAGES + 2
    assert "Name of Intern:" in doc[3].get_text()
    assert "Contact Information:" in doc[15].get_text()
    assert "A. Total Internship Hours Summary" in doc[30].get_text()
    assert "Legend:" in doc[33].get_text()
    assert "EVALUATION RATING SHEET FOR SUPERVISORS" in doc[41].get_text()
    assert "No attendance records have been submitted yet." in doc[TEMPLATE_PAGES].get_text()
    assert "No evidence submissions have been uploaded yet." in doc[TEMPLATE_PAGES + 1].get_text()


def test_signature_and_date_shown_when_totals_agree() -> None:
    fetcher = FakeFetcher()
    bundle = bundle_for(attendance(1, pending=1), schedule_hours=8.005, finished=True)
    doc = compose(bundle, fetcher)
    summary = doc[30].get_text()
    assert "8.00" in summary
    assert "October 17, 2026" in summary
    assert SIGNATURE in fetcher.calls


def test_signature_and_date_withheld_when_totals_disagree() -> None:
    fetcher = FakeFetcher()
    bundle = bundle_for(attendance(1), schedule_hours=8.02, finished=True)
    bundle.feedback_forms = []
    doc = compose(bundle, fetcher)
    summary = doc[30].get_text()
    assert "October 17, 2026" not in summary
    assert "Trainee's/Intern's Signature:" in summary
    assert SIGNATURE not in fetcher.calls


def test_unfinished_company_hours_left_blank() -> None:
    doc = compose(bundle_for(attendance(2), schedule_hours=16))
    summary = doc[30].get_text()
    assert "Acme Corp" in summary
    assert "16.00" in summary
    assert "October 17, 2026" not in summary


def test_failed_evidence_image_does_not_affect_other_cards() -> None:
    evidence = [
        EvidenceEntry(
            id=f"e{n}",
            company_name="Acme Corp",
            title=f"Evidence {n}",
            notes="Server room visit",
            submitted_at="2025-01-10T03:00:00Z",
            image_url=f"https://cdn.example.com/{'broken' if n == 3 else 'ok'}-{n}.png",
        )
        for n in range(1, 7)
    ]
    fetcher = FakeFetcher()
    doc = compose(bundle_for(attendance(1), evidence=evidence), fetcher)
    page = doc[doc.page_count - 1].get_text()
    for n in range(1, 7):
        assert f"Evidence {n}" in page
    assert page.count("Company: Acme Corp") == 6
    assert page.count("Attachment: Image unavailable") == 1
    assert len([url for url in fetcher.calls if "/ok-" in url or "/broken-" in url]) == 6


def test_certificate_fallback_text() -> None:
    certs = [
        CertificateEntry(id="1", company_name="Acme Corp", certificate_url="https://cdn.example.com/cert.png"),
        CertificateEntry(id="2", company_name="Globex", certificate_url="https://cdn.example.com/broken.jpg"),
    ]
    doc = compose(bundle_for([], certificates=certs))
    assert doc[44].get_images()
    assert "Certificate image unavailable" in doc[45].get_text()


def test_evaluation_rubric_flows_to_third_page() -> None:
    form = EvaluationFormRecord(
        organization_company_name="Acme Corp",
        work_performance1=5,
        reliability4=3,
        total_score=112,
        supervisor_name="Ben Reyes",
        evaluation_date="2025-03-15",
    )
    doc = compose(bundle_for([], evaluation_forms=[form]))
    page1, page2, page3 = (doc[i].get_text() for i in range(35, 38))
    assert "Acme Corp" in page1
    assert "CRITERIA" in page2
    assert "Section A: WORK PERFORMANCE" in page2
    assert "TOTAL" in page3 and "112" in page3
    assert "BEN REYES" in page3
    assert "March 15, 2025" in page3


def test_bad_template_is_fatal() -> None:
    with pytest.raises(TemplateError):
        compose_journal(b"%PDF-broken", JournalBundle(), fetcher=FakeFetcher())


def test_font_embedding_failure_is_fatal() -> None:
    with pytest.raises(FontEmbeddingError):
        embed(FontFace("NoSuchFace"))
    with pytest.raises(CompositionError):
        embed(FontFace("Custom", path="/nonexistent/font.ttf"))
