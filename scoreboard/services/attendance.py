# scoreboard/services/attendance.py
import math
import re
import time
import uuid
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Sequence

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from scoreboard.api.dependencies.db import (
    select_batch,
    select_batch_public_url,
    select_batches,
    select_records,
    select_session,
    select_sessions,
)
from scoreboard.logging_config import app_logger
from scoreboard.models.attendance import (
    AttendanceRecord as ORMAttendanceRecord,
    AttendanceSession as ORMAttendanceSession,
    Batch as ORMBatch,
    BatchPublicUrl as ORMBatchPublicUrl,
)
from scoreboard.schema.attendance import (
    AttendanceMarkIn,
    AttendanceRecordData,
    AttendanceSessionData,
    AttendanceStatus,
    AttendanceSummary,
    BatchData,
    BatchPublicUrlData,
    CalendarDay,
    PublicBatchView,
    SessionDetail,
    SessionState,
    StudentAttendance,
)
from scoreboard.schema.base import ContainerIn, ShareLink
from scoreboard.settings import settings

ALREADY_MARKED_MESSAGE = "You have already marked attendance for this session"


def _percentage(part: int, whole: int) -> int:
    """Whole-number percentage rounded half up, 0 when there is nothing to count."""
    if whole <= 0:
        return 0
    return math.floor(part / whole * 100 + 0.5)


def _epoch_millis() -> int:
    return int(time.time() * 1000)


def session_state(session, now: Optional[datetime] = None) -> SessionState:
    """
    A session is active while its flag is set and its expiry is still in
    the future. Expiry is only evaluated when asked; nothing sweeps old
    sessions.
    """
    now = now or datetime.utcnow()
    if session.is_active and session.expires_at > now:
        return SessionState.ACTIVE
    return SessionState.EXPIRED


def to_session_data(session, now: Optional[datetime] = None) -> AttendanceSessionData:
    data = AttendanceSessionData.model_validate(session)
    return data.model_copy(update={"state": session_state(session, now)})


def attendance_summary(records: Iterable) -> AttendanceSummary:
    records = list(records)
    present_count = sum(
        1 for record in records if record.status == AttendanceStatus.PRESENT.value
    )
    total_count = len(records)
    return AttendanceSummary(
        present_count=present_count,
        total_count=total_count,
        absent_count=total_count - present_count,
        attendance_percentage=_percentage(present_count, total_count),
    )


def student_attendance(
    student_name: str,
    sessions: Sequence,
    attended_session_ids: List[uuid.UUID],
) -> StudentAttendance:
    total_sessions = len(sessions)
    sessions_present = len(attended_session_ids)
    return StudentAttendance(
        student_name=student_name,
        total_sessions=total_sessions,
        sessions_present=sessions_present,
        sessions_absent=total_sessions - sessions_present,
        attendance_percentage=_percentage(sessions_present, total_sessions),
        attended_sessions=attended_session_ids,
    )


# Batches

def get_batch(batch_id: uuid.UUID, db: Session) -> ORMBatch:
    batch = select_batch(db, batch_id)
    if not batch:
        raise HTTPException(status_code=404, detail="Batch not found")
    return batch


def list_batches(db: Session) -> List[BatchData]:
    return [BatchData.model_validate(batch) for batch in select_batches(db)]


def create_batch(
    request: ContainerIn,
    created_by: Optional[uuid.UUID],
    db: Session,
) -> BatchData:
    batch = ORMBatch(
        name=request.name,
        description=request.description,
        created_by=created_by,
        is_active=True,
    )
    db.add(batch)
    db.commit()
    db.refresh(batch)

    app_logger.info(f"Created batch {batch.id} ({batch.name})")
    return BatchData.model_validate(batch)


def delete_batch(batch_id: uuid.UUID, db: Session) -> None:
    """Delete a batch with its sessions, their records and its public URLs."""
    batch = get_batch(batch_id, db)
    db.delete(batch)
    db.commit()
    app_logger.info(f"Deleted batch {batch_id}")


# Sessions

def get_session(session_id: uuid.UUID, db: Session) -> ORMAttendanceSession:
    session = select_session(db, session_id=session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


def list_sessions(batch_id: uuid.UUID, db: Session) -> List[AttendanceSessionData]:
    get_batch(batch_id, db)
    now = datetime.utcnow()
    return [to_session_data(session, now) for session in select_sessions(db, batch_id)]


def create_session(batch_id: uuid.UUID, db: Session) -> AttendanceSessionData:
    """
    Open an attendance session for a batch, dated on the UTC clock its
    expiry is measured on.

    The join code embeds the batch name and a millisecond timestamp; the
    session stays open for SESSION_TTL_HOURS.
    """
    batch = get_batch(batch_id, db)
    now = datetime.utcnow()
    today = now.date()

    session = ORMAttendanceSession(
        batch_id=batch.id,
        session_name=f"{batch.name} - {today.strftime('%b')} {today.day}, {today.year}",
        session_date=today,
        session_code=f"attend-{batch.name.lower()}-{_epoch_millis()}",
        is_active=True,
        expires_at=now + timedelta(hours=settings.SESSION_TTL_HOURS),
    )
    db.add(session)
    db.commit()
    db.refresh(session)

    app_logger.info(f"Opened session {session.session_code} for batch {batch.id}")
    return to_session_data(session, now)


def rename_session(session_id: uuid.UUID, session_name: str, db: Session) -> AttendanceSessionData:
    session = get_session(session_id, db)
    session.session_name = session_name
    db.commit()
    db.refresh(session)
    return to_session_data(session)


def delete_session(session_id: uuid.UUID, db: Session) -> None:
    """Delete a session and every attendance record taken in it."""
    session = get_session(session_id, db)
    db.delete(session)
    db.commit()
    app_logger.info(f"Deleted session {session_id}")


def get_session_detail(session_id: uuid.UUID, db: Session) -> SessionDetail:
    session = get_session(session_id, db)
    records = select_records(db, session.id)
    return SessionDetail(
        session=to_session_data(session),
        records=[AttendanceRecordData.model_validate(record) for record in records],
        summary=attendance_summary(records),
    )


def join_link(session) -> ShareLink:
    return ShareLink(url=f"{settings.PUBLIC_BASE_URL}/attend/{session.session_code}")


def get_calendar(batch_id: uuid.UUID, year: int, month: int, db: Session) -> List[CalendarDay]:
    """
    Attendance per session date for one month of a batch.

    When two sessions share a date the one listed last (the older one)
    fills that day.
    """
    get_batch(batch_id, db)

    days = {}
    for session in select_sessions(db, batch_id):
        if session.session_date.year != year or session.session_date.month != month:
            continue

        summary = attendance_summary(select_records(db, session.id))
        days[session.session_date] = CalendarDay(
            session_date=session.session_date,
            count=summary.present_count,
            session_id=session.id,
            percentage=summary.attendance_percentage,
        )

    return sorted(days.values(), key=lambda day: day.session_date)


# Public URLs

def public_batch_url(public_id: str) -> str:
    return f"{settings.PUBLIC_BASE_URL}/attendance/{public_id}"


def get_batch_public_url(batch_id: uuid.UUID, db: Session) -> Optional[BatchPublicUrlData]:
    get_batch(batch_id, db)
    public_url = select_batch_public_url(db, batch_id=batch_id)
    if not public_url:
        return None
    return BatchPublicUrlData(
        public_id=public_url.public_id,
        url=public_batch_url(public_url.public_id),
    )


def generate_batch_public_url(
    batch_id: uuid.UUID,
    created_by: Optional[uuid.UUID],
    db: Session,
) -> BatchPublicUrlData:
    """Create a permanent, non-expiring public dashboard URL for a batch."""
    batch = get_batch(batch_id, db)
    slug = re.sub(r"\s+", "-", batch.name.lower())
    public_id = f"batch-{slug}-{_epoch_millis()}"

    public_url = ORMBatchPublicUrl(
        batch_id=batch.id,
        public_id=public_id,
        url_type="permanent",
        is_active=True,
        expires_at=None,
        created_by=created_by,
    )
    db.add(public_url)
    db.commit()

    app_logger.info(f"Generated public URL {public_id} for batch {batch.id}")
    return BatchPublicUrlData(public_id=public_id, url=public_batch_url(public_id))


# Public attendance

def get_session_by_code(session_code: str, db: Session) -> AttendanceSessionData:
    session = select_session(db, session_code=session_code)
    if not session:
        raise HTTPException(status_code=404, detail="Invalid or expired attendance link")
    return to_session_data(session)


def mark_attendance(
    session_code: str,
    request: AttendanceMarkIn,
    db: Session,
) -> AttendanceRecordData:
    """
    Record a student as present in a session.

    The duplicate check runs before the insert and is not atomic with it;
    a concurrent duplicate is caught by the unique constraint on
    (session, student name) instead.
    """
    session = select_session(db, session_code=session_code)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")

    if session_state(session) == SessionState.EXPIRED:
        raise HTTPException(status_code=410, detail="This attendance link has expired")

    if select_records(db, session.id, student_name=request.student_name):
        raise HTTPException(status_code=409, detail=ALREADY_MARKED_MESSAGE)

    record = ORMAttendanceRecord(
        session_id=session.id,
        student_name=request.student_name,
        student_email=request.student_email,
        status=AttendanceStatus.PRESENT.value,
    )
    db.add(record)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail=ALREADY_MARKED_MESSAGE)
    db.refresh(record)

    app_logger.info(f"Marked {record.student_name} present in {session.session_code}")
    return AttendanceRecordData.model_validate(record)


def get_public_batch(public_id: str, db: Session):
    """
    Resolve a public batch id to its batch.

    Only active permanent URLs resolve.
    """
    public_url = select_batch_public_url(db, public_id=public_id)
    if not public_url:
        raise HTTPException(status_code=404, detail="Invalid or inactive attendance link")
    return get_batch(public_url.batch_id, db)


def get_public_batch_view(public_id: str, db: Session) -> PublicBatchView:
    batch = get_public_batch(public_id, db)
    now = datetime.utcnow()
    return PublicBatchView(
        batch=BatchData.model_validate(batch),
        sessions=[to_session_data(session, now) for session in select_sessions(db, batch.id)],
    )


def search_student_attendance(public_id: str, student_name: str, db: Session) -> StudentAttendance:
    """
    Look up one student's attendance across every session of a batch.

    Sessions are checked one at a time, in session order.
    """
    student_name = (student_name or "").strip()
    if not student_name:
        raise HTTPException(status_code=400, detail="Please enter your name")

    batch = get_public_batch(public_id, db)
    sessions = select_sessions(db, batch.id)

    attended_session_ids = [
        session.id
        for session in sessions
        if select_records(db, session.id, student_name=student_name)
    ]
    return student_attendance(student_name, sessions, attended_session_ids)
