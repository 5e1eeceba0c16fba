# scoreboard/schema/activeness.py
from datetime import date
from typing import Dict, List
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from scoreboard.schema.base import ContainerData, DBModelBase

# Number of modules in a course. Completion percentages use this as a
# fixed denominator whatever module numbers were recorded.
TOTAL_MODULES = 10


class ModuleScoreIn(BaseModel):
    """Fields collected by the module score form"""
    student_name: str
    module_number: int = Field(1, ge=1, le=TOTAL_MODULES)
    activeness_score: float = Field(5, ge=0, le=10)
    notes: str = ""
    recorded_date: date = Field(default_factory=date.today)

    @field_validator("student_name")
    @classmethod
    def student_name_required(cls, student_name: str) -> str:
        student_name = student_name.strip()
        if not student_name:
            raise ValueError("Please enter student name")
        return student_name


class ModuleScoreData(DBModelBase):
    board_id: UUID
    student_name: str
    module_number: int
    activeness_score: float
    notes: str = ""
    recorded_date: date


class ActivenessBoardData(ContainerData):
    pass


class StudentActivenessMetrics(BaseModel):
    name: str
    total_score: float
    average_score: float
    modules_completed: int
    completion_percentage: float
    module_scores: Dict[int, float]


class BatchActivenessMetrics(BaseModel):
    total_students: int = 0
    average_batch_activeness: float = 0
    total_modules_completed: int = 0
    most_active_student: str = ""
    highest_score: float = 0


class ActivenessDashboard(BaseModel):
    board: ActivenessBoardData
    batch_metrics: BatchActivenessMetrics
    students: List[StudentActivenessMetrics]
    modules: List[int]


class StudentModules(BaseModel):
    metrics: StudentActivenessMetrics
    scores: List[ModuleScoreData]


class ActivenessExport(BaseModel):
    board: ActivenessBoardData
    scores: List[ModuleScoreData]
