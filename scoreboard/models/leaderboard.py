# scoreboard/models/leaderboard.py
from sqlalchemy import (
    Column,
    Date,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import relationship

from scoreboard.database import Base
from scoreboard.models.base import BaseMixin, ContainerMixin


class Leaderboard(Base, ContainerMixin):
    __tablename__ = "leaderboards"

    rounds = relationship(
        "InterviewRound",
        back_populates="leaderboard",
        cascade="all, delete-orphan",
    )


class InterviewRound(Base, BaseMixin):
    __tablename__ = "interview_rounds"

    leaderboard_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("leaderboards.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    student_name = Column(String, nullable=False, index=True)
    round_number = Column(Integer, nullable=False, default=1)
    score = Column(Float, nullable=False)
    interview_date = Column(Date, nullable=False)
    interviewer_name = Column(String, nullable=False, default="")
    strengths = Column(Text, nullable=False, default="")
    weaknesses = Column(Text, nullable=False, default="")
    feedback = Column(Text, nullable=False, default="")
    notes = Column(Text, nullable=False, default="")

    leaderboard = relationship("Leaderboard", back_populates="rounds")
