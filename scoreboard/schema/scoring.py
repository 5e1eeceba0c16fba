# scoreboard/schema/scoring.py
from datetime import date
from typing import List
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from scoreboard.schema.base import ContainerData, DBModelBase


class InterviewRoundIn(BaseModel):
    """Fields collected by the interview round form"""
    student_name: str
    round_number: int = Field(1, ge=1, le=5)
    score: float = Field(5, ge=0, le=10)
    interview_date: date = Field(default_factory=date.today)
    interviewer_name: str
    strengths: str = ""
    weaknesses: str = ""
    feedback: str = ""
    notes: str = ""

    @field_validator("student_name", "interviewer_name")
    @classmethod
    def required_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Please fill in all required fields")
        return value


class InterviewRoundData(DBModelBase):
    leaderboard_id: UUID
    student_name: str
    round_number: int
    score: float
    interview_date: date
    interviewer_name: str = ""
    strengths: str = ""
    weaknesses: str = ""
    feedback: str = ""
    notes: str = ""


class LeaderboardData(ContainerData):
    pass


class StudentMetrics(BaseModel):
    """Per-student summary of interview rounds"""
    name: str
    highest_score: float
    total_score: float
    average_score: float
    interviews_given: int
    last_interview_date: date


class BatchMetrics(BaseModel):
    """Leaderboard-wide summary of interview rounds"""
    total_students: int = 0
    total_interviews: int = 0
    average_score: float = 0
    highest_individual_score: float = 0


class LeaderboardDashboard(BaseModel):
    leaderboard: LeaderboardData
    batch_metrics: BatchMetrics
    students: List[StudentMetrics]


class StudentRounds(BaseModel):
    metrics: StudentMetrics
    rounds: List[InterviewRoundData]


class LeaderboardExport(BaseModel):
    leaderboard: LeaderboardData
    rounds: List[InterviewRoundData]


class ImportSummary(BaseModel):
    imported: int
