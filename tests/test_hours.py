from __future__ import annotations

import unittest

from ojt_journal.models import (
    AttendanceEntry,
    CompanyAttendanceBlock,
    HostOrgInfoRecord,
    TrainingScheduleEntry,
    VerificationStatus,
)
from ojt_journal.pipeline.hours import (
    accepted_hours,
    company_total_hours,
    parse_hour_cap,
    schedule_total,
    sort_by_date,
    summarize_companies,
    totals_agree,
)


def entry(hours: float, status: VerificationStatus | None, day: int = 1) -> AttendanceEntry:
    return AttendanceEntry(date=f"2025-02-{day:02d}", total_hours=hours, verification_status=status)


class HoursTests(unittest.TestCase):
    def test_only_accepted_entries_count(self) -> None:
        entries = [
            entry(2, VerificationStatus.ACCEPTED),
            entry(5, VerificationStatus.PENDING),
            entry(3, VerificationStatus.ACCEPTED),
        ]
        self.assertEqual(accepted_hours(entries), 5)

    def test_cap_applies_to_finished_company(self) -> None:
        company = CompanyAttendanceBlock(
            company_name="Acme",
            attendance_entries=[entry(6, VerificationStatus.ACCEPTED), entry(6, VerificationStatus.ACCEPTED)],
            finished_at="2025-03-01T00:00:00Z",
            hours_of_internship="8",
        )
        self.assertEqual(company_total_hours(company), 8)

    def test_unfinished_company_has_no_total(self) -> None:
        company = CompanyAttendanceBlock(attendance_entries=[entry(6, VerificationStatus.ACCEPTED)])
        self.assertIsNone(company_total_hours(company))

    def test_invalid_cap_is_ignored(self) -> None:
        self.assertIsNone(parse_hour_cap("abc"))
        self.assertIsNone(parse_hour_cap("0"))
        self.assertIsNone(parse_hour_cap(None))
        self.assertEqual(parse_hour_cap(" 486 "), 486)

    def test_summary_rows_and_total(self) -> None:
        finished = CompanyAttendanceBlock(
            company_name="Acme",
            attendance_entries=[entry(4, VerificationStatus.ACCEPTED)],
            finished_at="2025-03-01",
        )
        ongoing = CompanyAttendanceBlock(company_name="Globex", attendance_entries=[entry(7, VerificationStatus.ACCEPTED)])
        orgs = [HostOrgInfoRecord(company_name="Acme", immediate_supervisor="R. Santos")]
        summary = summarize_companies([finished, ongoing], orgs)
        self.assertEqual([r.hours for r in summary.rows], [4, None])
        self.assertEqual(summary.rows[0].supervisor, "R. Santos")
        self.assertEqual(summary.total, 4)

    def test_schedule_total_uses_first_eleven_rows(self) -> None:
        rows = [TrainingScheduleEntry(total_hours=1) for _ in range(13)]
        self.assertEqual(schedule_total(rows), 11)

    def test_totals_agree_within_tolerance(self) -> None:
        self.assertTrue(totals_agree(10.00, 10.005))
        self.assertFalse(totals_agree(10.00, 10.02))
        self.assertTrue(totals_agree(0, 0))

    def test_sort_by_date(self) -> None:
        entries = [entry(1, None, 9), entry(1, None, 2), entry(1, None, 5)]
        self.assertEqual([e.date for e in sort_by_date(entries)], ["2025-02-02", "2025-02-05", "2025-02-09"])


if __name__ == "__main__":
    unittest.main()
