from __future__ import annotations

from enum import Enum
from typing import List, Optional

from sqlmodel import Field, SQLModel


class VerificationStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    DENIED = "denied"


class LikertAnswer(str, Enum):
    STRONGLY_AGREE = "SA"
    AGREE = "A"
    NEUTRAL = "N"
    DISAGREE = "D"
    STRONGLY_DISAGREE = "SD"


class PerformanceRating(str, Enum):
    OUTSTANDING = "Outstanding"
    GOOD = "Good"
    AVERAGE = "Average"
    POOR = "Poor"


class StudentInfo(SQLModel):
    id: str = ""
    name: str = ""
    email: str = ""
    photo_url: Optional[str] = None


class StudentProfile(SQLModel):
    """Raw profile as stored by the student screens, before normalization."""

    id: str = ""
    email: str = ""
    first_name: str = ""
    middle_name: Optional[str] = None
    last_name: str = ""
    age: Optional[int] = None
    year: Optional[str] = None
    date_of_birth: Optional[str] = None
    program: Optional[str] = None
    major: Optional[str] = None
    address: Optional[str] = None
    permanent_address: Optional[str] = None
    present_address: Optional[str] = None
    phone_number: Optional[str] = None
    sex: Optional[str] = None
    civil_status: Optional[str] = None
    religion: Optional[str] = None
    citizenship: Optional[str] = None
    academic_year: Optional[str] = None
    father_name: Optional[str] = None
    father_occupation: Optional[str] = None
    mother_name: Optional[str] = None
    mother_occupation: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_relationship: Optional[str] = None
    emergency_contact_number: Optional[str] = None
    emergency_contact_address: Optional[str] = None
    photo_url: Optional[str] = None


class PersonalInfoRecord(SQLModel):
    full_name: str = ""
    date_of_birth: str = ""
    age: str = ""
    sex: str = ""
    civil_status: str = ""
    year_level: str = ""
    academic_year: str = ""
    religion: str = ""
    permanent_address: str = ""
    present_address: str = ""
    contact_number: str = ""
    email_address: str = ""
    citizenship: str = ""
    fathers_name: str = ""
    fathers_occupation: str = ""
    mothers_name: str = ""
    mothers_occupation: str = ""
    emergency_contact_name: str = ""
    emergency_contact_relationship: str = ""
    emergency_contact_number: str = ""
    emergency_contact_address: str = ""


class AttendanceEntry(SQLModel):
    id: str = ""
    company_id: str = ""
    company_name: str = ""
    date: str = ""
    status: str = ""
    am_in: str = ""
    am_out: str = ""
    pm_in: str = ""
    pm_out: str = ""
    total_hours: float = 0.0
    notes: Optional[str] = None
    verification_status: Optional[VerificationStatus] = None
    verification_remarks: Optional[str] = None

    @property
    def is_accepted(self) -> bool:
        return self.verification_status == VerificationStatus.ACCEPTED


class CompanyAttendanceBlock(SQLModel):
    company_id: str = ""
    company_name: str = ""
    company_address: str = ""
    attendance_entries: List[AttendanceEntry] = Field(default_factory=list)
    signature_url: Optional[str] = None
    finished_at: Optional[str] = None
    hours_of_internship: Optional[str] = None


class HostOrgInfoRecord(SQLModel):
    company_id: Optional[str] = None
    company_name: str = ""
    company_address: str = ""
    nature_of_hte: str = ""
    head_of_hte: str = ""
    head_position: str = ""
    immediate_supervisor: str = ""
    supervisor_position: str = ""
    telephone_no: str = ""
    mobile_no: str = ""
    email_address: str = ""
    photo_url: Optional[str] = None


class EvidenceEntry(SQLModel):
    id: str = ""
    company_id: str = ""
    company_name: str = ""
    title: str = ""
    notes: str = ""
    submitted_at: str = ""
    image_url: Optional[str] = None


class CertificateEntry(SQLModel):
    id: str = ""
    company_id: str = ""
    company_name: str = ""
    certificate_url: str = ""
    generated_at: str = ""
    total_hours: Optional[float] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    template_id: str = ""


class TrainingScheduleEntry(SQLModel):
    id: str = ""
    task_classification: str = ""
    tools_device_software_used: str = ""
    total_hours: float = 0.0


class FeedbackFormRecord(SQLModel):
    id: str = ""
    student_id: str = ""
    company_id: str = ""
    question1: Optional[LikertAnswer] = None
    question2: Optional[LikertAnswer] = None
    question3: Optional[LikertAnswer] = None
    question4: Optional[LikertAnswer] = None
    question5: Optional[LikertAnswer] = None
    question6: Optional[LikertAnswer] = None
    question7: Optional[LikertAnswer] = None
    problems_met: str = ""
    other_concerns: str = ""
    form_date: str = ""

    def answers(self) -> List[Optional[LikertAnswer]]:
        return [
            self.question1,
            self.question2,
            self.question3,
            self.question4,
            self.question5,
            self.question6,
            self.question7,
        ]


class EvaluationFormRecord(SQLModel):
    id: str = ""
    student_id: str = ""
    company_id: str = ""
    # Section I
    organization_company_name: str = ""
    address: str = ""
    city: str = ""
    zip: str = ""
    supervisor_position: str = ""
    supervisor_phone: Optional[str] = None
    supervisor_email: Optional[str] = None
    # Section II
    start_date: str = ""
    end_date: str = ""
    total_hours: Optional[float] = None
    description_of_duties: str = ""
    # Section III
    question1_performance: Optional[PerformanceRating] = None
    question2_skills_career: Optional[bool] = None
    question2_elaboration: Optional[str] = None
    question3_fulltime_candidate: Optional[bool] = None
    question4_interest_other_trainees: Optional[bool] = None
    question4_elaboration: Optional[str] = None
    work_performance1: Optional[int] = None
    work_performance2: Optional[int] = None
    work_performance3: Optional[int] = None
    work_performance4: Optional[int] = None
    work_performance5: Optional[int] = None
    work_performance6: Optional[int] = None
    communication1: Optional[int] = None
    communication2: Optional[int] = None
    professional_conduct1: Optional[int] = None
    professional_conduct2: Optional[int] = None
    professional_conduct3: Optional[int] = None
    punctuality1: Optional[int] = None
    punctuality2: Optional[int] = None
    punctuality3: Optional[int] = None
    flexibility1: Optional[int] = None
    flexibility2: Optional[int] = None
    attitude1: Optional[int] = None
    attitude2: Optional[int] = None
    attitude3: Optional[int] = None
    attitude4: Optional[int] = None
    attitude5: Optional[int] = None
    reliability1: Optional[int] = None
    reliability2: Optional[int] = None
    reliability3: Optional[int] = None
    reliability4: Optional[int] = None
    total_score: Optional[int] = None
    supervisor_name: Optional[str] = None
    supervisor_signature_url: Optional[str] = None
    company_signature_url: Optional[str] = None
    evaluation_date: str = ""


class JournalBundle(SQLModel):
    """Everything one composition run consumes, as handed over by the collaborators."""

    student: StudentInfo = Field(default_factory=StudentInfo)
    personal_info: PersonalInfoRecord = Field(default_factory=PersonalInfoRecord)
    companies: List[CompanyAttendanceBlock] = Field(default_factory=list)
    evidence: List[EvidenceEntry] = Field(default_factory=list)
    host_orgs: List[HostOrgInfoRecord] = Field(default_factory=list)
    certificates: List[CertificateEntry] = Field(default_factory=list)
    training_schedules: List[TrainingScheduleEntry] = Field(default_factory=list)
    student_signature_url: Optional[str] = None
    feedback_forms: List[FeedbackFormRecord] = Field(default_factory=list)
    evaluation_forms: List[EvaluationFormRecord] = Field(default_factory=list)
