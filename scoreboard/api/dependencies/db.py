# scoreboard/api/dependencies/db.py
import uuid
from typing import List, Optional, Union

from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from scoreboard.models.activeness import (
    ActivenessBoard as ORMActivenessBoard,
    ModuleScore as ORMModuleScore,
)
from scoreboard.models.attendance import (
    AttendanceRecord as ORMAttendanceRecord,
    AttendanceSession as ORMAttendanceSession,
    Batch as ORMBatch,
    BatchPublicUrl as ORMBatchPublicUrl,
)
from scoreboard.models.leaderboard import (
    InterviewRound as ORMInterviewRound,
    Leaderboard as ORMLeaderboard,
)
from scoreboard.schema.activeness import ActivenessBoardData, ModuleScoreData
from scoreboard.schema.scoring import InterviewRoundData, LeaderboardData


def select_leaderboard(
    db: Session,
    leaderboard_id: uuid.UUID = None,
    public_id: str = None,
    to_pydantic: bool = True,
    execute: bool = True,
) -> Union[LeaderboardData, ORMLeaderboard, Select, None]:
    """
    Fetch a leaderboard by internal id or by public id.

    Args:
        db: Database session
        leaderboard_id: The internal ID (optional if public_id provided)
        public_id: The public sharing ID (optional if leaderboard_id provided)
        to_pydantic: If True, returns a Pydantic model
        execute: If True, executes the query

    Returns:
        LeaderboardData if to_pydantic=True and execute=True
        ORM Leaderboard if to_pydantic=False and execute=True
        SQLAlchemy Select object if execute=False
    """
    if not leaderboard_id and not public_id:
        raise ValueError("Either leaderboard_id or public_id must be provided")

    query = select(ORMLeaderboard)
    if leaderboard_id:
        query = query.where(ORMLeaderboard.id == leaderboard_id)
    else:
        query = query.where(ORMLeaderboard.public_id == public_id)

    if not execute:
        return query

    result = db.execute(query).scalars().first()

    if not result:
        return None

    if not to_pydantic:
        return result

    return LeaderboardData.model_validate(result)


def select_leaderboards(db: Session) -> List[LeaderboardData]:
    query = select(ORMLeaderboard).order_by(ORMLeaderboard.created_at.desc())
    return [
        LeaderboardData.model_validate(leaderboard)
        for leaderboard in db.execute(query).scalars().all()
    ]


def select_rounds(
    db: Session,
    leaderboard_id: uuid.UUID,
    student_name: str = None,
    to_pydantic: bool = True,
    execute: bool = True,
) -> Union[List[InterviewRoundData], List[ORMInterviewRound], Select]:
    """
    Fetch the interview rounds of a leaderboard, newest interview first.

    When student_name is given only that student's rounds are returned,
    ordered by round number instead.
    """
    query = select(ORMInterviewRound).where(
        ORMInterviewRound.leaderboard_id == leaderboard_id
    )

    if student_name is not None:
        query = query.where(
            ORMInterviewRound.student_name == student_name
        ).order_by(ORMInterviewRound.round_number)
    else:
        query = query.order_by(
            ORMInterviewRound.interview_date.desc(),
            ORMInterviewRound.created_at.desc(),
        )

    if not execute:
        return query

    results = db.execute(query).scalars().all()

    if not to_pydantic:
        return results

    return [InterviewRoundData.model_validate(round_) for round_ in results]


def select_activeness_board(
    db: Session,
    board_id: uuid.UUID = None,
    public_id: str = None,
    to_pydantic: bool = True,
) -> Union[ActivenessBoardData, ORMActivenessBoard, None]:
    """
    Fetch an activeness board by internal id or by public id.
    """
    if not board_id and not public_id:
        raise ValueError("Either board_id or public_id must be provided")

    query = select(ORMActivenessBoard)
    if board_id:
        query = query.where(ORMActivenessBoard.id == board_id)
    else:
        query = query.where(ORMActivenessBoard.public_id == public_id)

    result = db.execute(query).scalars().first()

    if not result:
        return None

    if not to_pydantic:
        return result

    return ActivenessBoardData.model_validate(result)


def select_activeness_boards(db: Session) -> List[ActivenessBoardData]:
    query = select(ORMActivenessBoard).order_by(ORMActivenessBoard.created_at.desc())
    return [
        ActivenessBoardData.model_validate(board)
        for board in db.execute(query).scalars().all()
    ]


def select_module_scores(
    db: Session,
    board_id: uuid.UUID,
    student_name: str = None,
    to_pydantic: bool = True,
) -> Union[List[ModuleScoreData], List[ORMModuleScore]]:
    """
    Fetch the module scores of a board ordered by student name, or one
    student's scores ordered by module number.
    """
    query = select(ORMModuleScore).where(ORMModuleScore.board_id == board_id)

    if student_name is not None:
        query = query.where(
            ORMModuleScore.student_name == student_name
        ).order_by(ORMModuleScore.module_number)
    else:
        query = query.order_by(
            ORMModuleScore.student_name,
            ORMModuleScore.created_at,
        )

    results = db.execute(query).scalars().all()

    if not to_pydantic:
        return results

    return [ModuleScoreData.model_validate(score) for score in results]


def select_module_score(db: Session, score_id: uuid.UUID) -> Optional[ORMModuleScore]:
    return db.get(ORMModuleScore, score_id)


def select_batch(db: Session, batch_id: uuid.UUID) -> Optional[ORMBatch]:
    return db.get(ORMBatch, batch_id)


def select_batches(db: Session) -> List[ORMBatch]:
    query = select(ORMBatch).order_by(ORMBatch.created_at.desc())
    return db.execute(query).scalars().all()


def select_sessions(db: Session, batch_id: uuid.UUID) -> List[ORMAttendanceSession]:
    query = (
        select(ORMAttendanceSession)
        .where(ORMAttendanceSession.batch_id == batch_id)
        .order_by(
            ORMAttendanceSession.session_date.desc(),
            ORMAttendanceSession.created_at.desc(),
        )
    )
    return db.execute(query).scalars().all()


def select_session(
    db: Session,
    session_id: uuid.UUID = None,
    session_code: str = None,
) -> Optional[ORMAttendanceSession]:
    if not session_id and not session_code:
        raise ValueError("Either session_id or session_code must be provided")

    if session_id:
        return db.get(ORMAttendanceSession, session_id)

    query = select(ORMAttendanceSession).where(
        ORMAttendanceSession.session_code == session_code
    )
    return db.execute(query).scalars().first()


def select_records(
    db: Session,
    session_id: uuid.UUID,
    student_name: str = None,
) -> List[ORMAttendanceRecord]:
    """
    Fetch attendance records of a session, most recently marked first.
    """
    query = select(ORMAttendanceRecord).where(
        ORMAttendanceRecord.session_id == session_id
    )
    if student_name is not None:
        query = query.where(ORMAttendanceRecord.student_name == student_name)

    query = query.order_by(ORMAttendanceRecord.marked_at.desc())
    return db.execute(query).scalars().all()


def select_batch_public_url(
    db: Session,
    batch_id: uuid.UUID = None,
    public_id: str = None,
) -> Optional[ORMBatchPublicUrl]:
    """
    Fetch the active permanent public URL of a batch, by batch or by public id.
    """
    if not batch_id and not public_id:
        raise ValueError("Either batch_id or public_id must be provided")

    query = select(ORMBatchPublicUrl).where(
        ORMBatchPublicUrl.url_type == "permanent",
        ORMBatchPublicUrl.is_active.is_(True),
    )
    if batch_id:
        query = query.where(ORMBatchPublicUrl.batch_id == batch_id)
    else:
        query = query.where(ORMBatchPublicUrl.public_id == public_id)

    return db.execute(query).scalars().first()
