# scoreboard/models/attendance.py
import uuid
from datetime import datetime

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    String,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import relationship

from scoreboard.database import Base
from scoreboard.models.base import BaseMixin


class Batch(Base, BaseMixin):
    __tablename__ = "batches"

    name = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    created_by = Column(Uuid(as_uuid=True), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    sessions = relationship(
        "AttendanceSession",
        back_populates="batch",
        cascade="all, delete-orphan",
    )
    public_urls = relationship(
        "BatchPublicUrl",
        back_populates="batch",
        cascade="all, delete-orphan",
    )


class BatchPublicUrl(Base):
    __tablename__ = "batch_public_urls"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    batch_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("batches.id", ondelete="CASCADE"),
        nullable=False,
    )
    public_id = Column(String, unique=True, nullable=False)
    url_type = Column(String, nullable=False, default="permanent")
    is_active = Column(Boolean, nullable=False, default=True)
    # Permanent links carry no expiry
    expires_at = Column(DateTime, nullable=True)
    created_by = Column(Uuid(as_uuid=True), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    batch = relationship("Batch", back_populates="public_urls")


class AttendanceSession(Base, BaseMixin):
    __tablename__ = "attendance_sessions"

    batch_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("batches.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    session_name = Column(String, nullable=False)
    session_date = Column(Date, nullable=False)
    session_code = Column(String, unique=True, nullable=False, index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    expires_at = Column(DateTime, nullable=False)

    batch = relationship("Batch", back_populates="sessions")
    records = relationship(
        "AttendanceRecord",
        back_populates="session",
        cascade="all, delete-orphan",
    )


class AttendanceRecord(Base):
    __tablename__ = "attendance_records"
    __table_args__ = (
        UniqueConstraint("session_id", "student_name", name="uq_attendance_session_student"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    session_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("attendance_sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    student_name = Column(String, nullable=False)
    student_email = Column(String, nullable=True)
    marked_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    status = Column(String, nullable=False, default="present")

    session = relationship("AttendanceSession", back_populates="records")
