# scoreboard/models/activeness.py
from datetime import date

from sqlalchemy import Column, Date, Float, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship

from scoreboard.database import Base
from scoreboard.models.base import BaseMixin, ContainerMixin


class ActivenessBoard(Base, ContainerMixin):
    __tablename__ = "activeness_boards"

    scores = relationship(
        "ModuleScore",
        back_populates="board",
        cascade="all, delete-orphan",
    )


class ModuleScore(Base, BaseMixin):
    __tablename__ = "module_scores"

    board_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("activeness_boards.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    student_name = Column(String, nullable=False, index=True)
    module_number = Column(Integer, nullable=False)
    activeness_score = Column(Float, nullable=False)
    notes = Column(Text, nullable=False, default="")
    recorded_date = Column(Date, nullable=False, default=date.today)

    board = relationship("ActivenessBoard", back_populates="scores")
