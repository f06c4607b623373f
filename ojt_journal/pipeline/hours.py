from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from ..config import HOURS_TOLERANCE, SUMMARY_COMPANY_ROWS, TRAINING_SCHEDULE_ROWS
from ..models import AttendanceEntry, CompanyAttendanceBlock, HostOrgInfoRecord, TrainingScheduleEntry
from .formatting import parse_date


def accepted_entries(entries: Iterable[AttendanceEntry]) -> List[AttendanceEntry]:
    return [e for e in entries if e.is_accepted]


def accepted_hours(entries: Iterable[AttendanceEntry]) -> float:
    return sum(float(e.total_hours or 0) for e in accepted_entries(entries))


def parse_hour_cap(value: str | float | None) -> Optional[float]:
    """A positive numeric cap, or None when absent, zero or not a number."""
    if value is None:
        return None
    try:
        cap = float(str(value).strip())
    except ValueError:
        return None
    if cap <= 0:
        return None
    return cap


def capped_hours(total: float, cap: str | float | None) -> float:
    limit = parse_hour_cap(cap)
    if limit is None:
        return total
    return min(total, limit)


def company_total_hours(company: CompanyAttendanceBlock) -> Optional[float]:
    """Hours shown for a company; None until its placement is marked finished."""
    if not company.finished_at:
        return None
    return capped_hours(accepted_hours(company.attendance_entries), company.hours_of_internship)


@dataclass(frozen=True)
class CompanySummaryRow:
    company_name: str
    supervisor: str
    hours: Optional[float]


@dataclass(frozen=True)
class CompanySummary:
    rows: List[CompanySummaryRow]
    total: float


def summarize_companies(
    companies: Sequence[CompanyAttendanceBlock],
    host_orgs: Sequence[HostOrgInfoRecord] = (),
) -> CompanySummary:
    supervisors: Dict[str, str] = {}
    for org in host_orgs:
        supervisors.setdefault(org.company_name, org.immediate_supervisor)

    rows = []
    total = 0.0
    for company in list(companies)[:SUMMARY_COMPANY_ROWS]:
        hours = company_total_hours(company)
        if hours is not None:
            total += hours
        rows.append(CompanySummaryRow(company.company_name, supervisors.get(company.company_name, ""), hours))
    return CompanySummary(rows, total)


def schedule_total(schedules: Sequence[TrainingScheduleEntry]) -> float:
    return sum(float(s.total_hours or 0) for s in list(schedules)[:TRAINING_SCHEDULE_ROWS])


def totals_agree(a: float, b: float, tolerance: float = HOURS_TOLERANCE) -> bool:
    return abs(a - b) < tolerance


def sort_by_date(entries: Iterable[AttendanceEntry]) -> List[AttendanceEntry]:
    def key(entry: AttendanceEntry):
        parsed = parse_date(entry.date)
        return (parsed is None, parsed.replace(tzinfo=None) if parsed else None, entry.date)

    return sorted(entries, key=key)
