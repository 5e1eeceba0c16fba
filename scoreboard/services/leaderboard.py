# scoreboard/services/leaderboard.py
import uuid
from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from scoreboard.api.dependencies.db import (
    select_leaderboard,
    select_leaderboards,
    select_rounds,
)
from scoreboard.logging_config import app_logger
from scoreboard.models.leaderboard import (
    InterviewRound as ORMInterviewRound,
    Leaderboard as ORMLeaderboard,
)
from scoreboard.schema.base import ContainerIn, ShareLink
from scoreboard.schema.scoring import (
    ImportSummary,
    InterviewRoundData,
    InterviewRoundIn,
    LeaderboardDashboard,
    LeaderboardData,
    LeaderboardExport,
    StudentRounds,
)
from scoreboard.services.scoring import (
    calculate_batch_metrics,
    calculate_student_metrics,
    get_student_metrics_array,
)
from scoreboard.services.tables import (
    LEADERBOARD_DEFAULT_SORT,
    LEADERBOARD_SORT_FIELDS,
    SortState,
    build_table,
)
from scoreboard.services.transfer import (
    IMPORT_ERROR_MESSAGE,
    export_filename,
    parse_date,
    parse_import,
)
from scoreboard.settings import settings


def get_leaderboard(
    db: Session,
    leaderboard_id: uuid.UUID = None,
    public_id: str = None,
    to_pydantic: bool = True,
):
    leaderboard = select_leaderboard(
        db,
        leaderboard_id=leaderboard_id,
        public_id=public_id,
        to_pydantic=to_pydantic,
    )
    if not leaderboard:
        raise HTTPException(status_code=404, detail="Leaderboard not found")
    return leaderboard


def list_leaderboards(db: Session):
    return select_leaderboards(db)


def create_leaderboard(
    request: ContainerIn,
    created_by: Optional[uuid.UUID],
    db: Session,
) -> LeaderboardData:
    leaderboard = ORMLeaderboard(
        name=request.name,
        description=request.description,
        created_by=created_by,
    )
    db.add(leaderboard)
    db.commit()
    db.refresh(leaderboard)

    app_logger.info(f"Created leaderboard {leaderboard.id} ({leaderboard.name})")
    return LeaderboardData.model_validate(leaderboard)


def delete_leaderboard(leaderboard_id: uuid.UUID, db: Session) -> None:
    """Delete a leaderboard together with all of its rounds."""
    leaderboard = get_leaderboard(db, leaderboard_id=leaderboard_id, to_pydantic=False)
    db.delete(leaderboard)
    db.commit()
    app_logger.info(f"Deleted leaderboard {leaderboard_id}")


def list_rounds(leaderboard_id: uuid.UUID, db: Session) -> List[InterviewRoundData]:
    """Every round of a leaderboard, newest interview first."""
    get_leaderboard(db, leaderboard_id=leaderboard_id, to_pydantic=False)
    return select_rounds(db, leaderboard_id)


def add_round(
    leaderboard_id: uuid.UUID,
    request: InterviewRoundIn,
    db: Session,
) -> InterviewRoundData:
    get_leaderboard(db, leaderboard_id=leaderboard_id, to_pydantic=False)

    round_ = ORMInterviewRound(leaderboard_id=leaderboard_id, **request.model_dump())
    db.add(round_)
    db.commit()
    db.refresh(round_)

    app_logger.info(
        f"Recorded round {round_.round_number} for {round_.student_name} "
        f"on leaderboard {leaderboard_id}"
    )
    return InterviewRoundData.model_validate(round_)


def delete_round(leaderboard_id: uuid.UUID, round_id: uuid.UUID, db: Session) -> None:
    round_ = db.get(ORMInterviewRound, round_id)
    if not round_ or round_.leaderboard_id != leaderboard_id:
        raise HTTPException(status_code=404, detail="Interview round not found")

    db.delete(round_)
    db.commit()


def get_dashboard(
    leaderboard: LeaderboardData,
    db: Session,
    search: str = "",
    sort: SortState = LEADERBOARD_DEFAULT_SORT,
) -> LeaderboardDashboard:
    """
    Load every round of a leaderboard and derive its metrics.

    Metrics are recomputed from the stored rows on each call.
    """
    rounds = select_rounds(db, leaderboard.id)
    students = get_student_metrics_array(rounds)

    return LeaderboardDashboard(
        leaderboard=leaderboard,
        batch_metrics=calculate_batch_metrics(rounds),
        students=build_table(
            students,
            search=search,
            sort=sort,
            allowed_fields=LEADERBOARD_SORT_FIELDS,
        ),
    )


def get_student_rounds(
    leaderboard: LeaderboardData,
    student_name: str,
    db: Session,
) -> StudentRounds:
    rounds = select_rounds(db, leaderboard.id, student_name=student_name)
    metrics = calculate_student_metrics(rounds)
    if not metrics:
        raise HTTPException(status_code=404, detail="Student not found")
    return StudentRounds(metrics=metrics, rounds=rounds)


def share_link(leaderboard: LeaderboardData) -> ShareLink:
    return ShareLink(url=f"{settings.PUBLIC_BASE_URL}/public/{leaderboard.public_id}")


def export_leaderboard(leaderboard_id: uuid.UUID, db: Session):
    """
    Returns:
        Tuple of (download filename, LeaderboardExport)
    """
    leaderboard = get_leaderboard(db, leaderboard_id=leaderboard_id)
    payload = LeaderboardExport(
        leaderboard=leaderboard,
        rounds=select_rounds(db, leaderboard.id),
    )
    return export_filename(leaderboard.name, "rounds"), payload


def import_rounds(leaderboard_id: uuid.UUID, raw: bytes, db: Session) -> ImportSummary:
    """
    Insert every round of an exported envelope into a leaderboard.

    One insert per record, committed as it goes. Missing optional fields
    take the form defaults; a falsy round number or score also falls back
    to its default.
    """
    get_leaderboard(db, leaderboard_id=leaderboard_id, to_pydantic=False)
    records = parse_import(raw, "rounds")

    imported = 0
    try:
        for record in records:
            round_ = ORMInterviewRound(
                leaderboard_id=leaderboard_id,
                student_name=record.get("student_name"),
                round_number=int(record.get("round_number") or 1),
                score=float(record.get("score") or 5),
                interview_date=parse_date(record.get("interview_date")),
                interviewer_name=record.get("interviewer_name") or "",
                strengths=record.get("strengths") or "",
                weaknesses=record.get("weaknesses") or "",
                feedback=record.get("feedback") or "",
                notes=record.get("notes") or "",
            )
            db.add(round_)
            db.commit()
            imported += 1
    except (AttributeError, TypeError, ValueError, SQLAlchemyError) as e:
        db.rollback()
        app_logger.error(
            f"Import into leaderboard {leaderboard_id} stopped after "
            f"{imported} rounds: {e}"
        )
        raise HTTPException(status_code=400, detail=IMPORT_ERROR_MESSAGE)

    app_logger.info(f"Imported {imported} rounds into leaderboard {leaderboard_id}")
    return ImportSummary(imported=imported)
