# scoreboard/schema/attendance.py
from datetime import date, datetime
from enum import Enum
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from scoreboard.schema.base import DBModelBase


class SessionState(str, Enum):
    ACTIVE = "active"
    EXPIRED = "expired"


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"


class BatchData(DBModelBase):
    name: str
    description: str = ""
    created_by: Optional[UUID] = None
    is_active: bool = True


class AttendanceSessionData(DBModelBase):
    batch_id: UUID
    session_name: str
    session_date: date
    session_code: str
    is_active: bool
    expires_at: datetime
    state: SessionState = SessionState.ACTIVE


class SessionRename(BaseModel):
    session_name: str

    @field_validator("session_name")
    @classmethod
    def session_name_required(cls, session_name: str) -> str:
        session_name = session_name.strip()
        if not session_name:
            raise ValueError("Please enter a session name")
        return session_name


class AttendanceMarkIn(BaseModel):
    student_name: str
    student_email: Optional[str] = None

    @field_validator("student_name")
    @classmethod
    def student_name_required(cls, student_name: str) -> str:
        student_name = student_name.strip()
        if not student_name:
            raise ValueError("Please enter your name")
        return student_name

    @field_validator("student_email")
    @classmethod
    def blank_email_is_none(cls, student_email: Optional[str]) -> Optional[str]:
        if student_email is None:
            return None
        return student_email.strip() or None


class AttendanceRecordData(BaseModel):
    id: UUID
    session_id: UUID
    student_name: str
    student_email: Optional[str] = None
    marked_at: datetime
    status: AttendanceStatus

    model_config = {"from_attributes": True}


class AttendanceSummary(BaseModel):
    present_count: int
    total_count: int
    absent_count: int
    attendance_percentage: int


class SessionDetail(BaseModel):
    session: AttendanceSessionData
    records: List[AttendanceRecordData]
    summary: AttendanceSummary


class CalendarDay(BaseModel):
    session_date: date
    count: int
    session_id: UUID
    percentage: int


class BatchPublicUrlData(BaseModel):
    public_id: str
    url: str


class PublicBatchView(BaseModel):
    batch: BatchData
    sessions: List[AttendanceSessionData]


class StudentAttendance(BaseModel):
    student_name: str
    total_sessions: int
    sessions_present: int
    sessions_absent: int
    attendance_percentage: int
    attended_sessions: List[UUID]
