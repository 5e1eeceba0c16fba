# scoreboard/api/routes/public.py
"""
Read-only views reached through shared links. No sign-in required.
"""
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from scoreboard.database import get_db
from scoreboard.schema.activeness import ActivenessDashboard, StudentModules
from scoreboard.schema.attendance import (
    AttendanceMarkIn,
    AttendanceRecordData,
    AttendanceSessionData,
    PublicBatchView,
    SessionState,
    StudentAttendance,
)
from scoreboard.schema.base import BaseResponse
from scoreboard.schema.scoring import LeaderboardDashboard, StudentRounds
from scoreboard.services import activeness_board as board_handler
from scoreboard.services import attendance as attendance_handler
from scoreboard.services import leaderboard as leaderboard_handler
from scoreboard.services.tables import (
    ACTIVENESS_DEFAULT_SORT,
    LEADERBOARD_DEFAULT_SORT,
    SortState,
)

router = APIRouter(tags=["public"])


def leaderboard_sort(sort_by: Optional[str] = None, descending: bool = True) -> SortState:
    return SortState(sort_by or LEADERBOARD_DEFAULT_SORT.field, descending)


def activeness_sort(sort_by: Optional[str] = None, descending: bool = True) -> SortState:
    return SortState(sort_by or ACTIVENESS_DEFAULT_SORT.field, descending)


@router.get("/public/{public_id}", response_model=BaseResponse[LeaderboardDashboard])
async def public_leaderboard(
    public_id: str,
    search: str = "",
    sort: SortState = Depends(leaderboard_sort),
    db: Session = Depends(get_db),
):
    leaderboard = leaderboard_handler.get_leaderboard(db, public_id=public_id)
    return BaseResponse(
        data=leaderboard_handler.get_dashboard(leaderboard, db, search=search, sort=sort)
    )


@router.get(
    "/public/{public_id}/students/{student_name}",
    response_model=BaseResponse[StudentRounds],
)
async def public_student_rounds(
    public_id: str,
    student_name: str,
    db: Session = Depends(get_db),
):
    leaderboard = leaderboard_handler.get_leaderboard(db, public_id=public_id)
    return BaseResponse(
        data=leaderboard_handler.get_student_rounds(leaderboard, student_name, db)
    )


@router.get("/activeness/{public_id}", response_model=BaseResponse[ActivenessDashboard])
async def public_activeness_board(
    public_id: str,
    search: str = "",
    sort: SortState = Depends(activeness_sort),
    db: Session = Depends(get_db),
):
    board = board_handler.get_board(db, public_id=public_id)
    return BaseResponse(
        data=board_handler.get_dashboard(board, db, search=search, sort=sort)
    )


@router.get(
    "/activeness/{public_id}/students/{student_name}",
    response_model=BaseResponse[StudentModules],
)
async def public_student_modules(
    public_id: str,
    student_name: str,
    db: Session = Depends(get_db),
):
    board = board_handler.get_board(db, public_id=public_id)
    return BaseResponse(data=board_handler.get_student_modules(board, student_name, db))


@router.get("/attend/{session_code}", response_model=BaseResponse[AttendanceSessionData])
async def public_session(session_code: str, db: Session = Depends(get_db)):
    session = attendance_handler.get_session_by_code(session_code, db)
    message = (
        "Success"
        if session.state == SessionState.ACTIVE
        else "This attendance link has expired"
    )
    return BaseResponse(data=session, message=message)


@router.post(
    "/attend/{session_code}",
    response_model=BaseResponse[AttendanceRecordData],
    status_code=201,
)
async def mark_attendance(
    session_code: str,
    request: AttendanceMarkIn,
    db: Session = Depends(get_db),
):
    record = attendance_handler.mark_attendance(session_code, request, db)
    return BaseResponse(data=record, message="Attendance marked")


@router.get("/attendance/{public_id}", response_model=BaseResponse[PublicBatchView])
async def public_batch(public_id: str, db: Session = Depends(get_db)):
    return BaseResponse(data=attendance_handler.get_public_batch_view(public_id, db))


@router.get(
    "/attendance/{public_id}/student",
    response_model=BaseResponse[StudentAttendance],
)
async def public_student_attendance(
    public_id: str,
    name: str = "",
    db: Session = Depends(get_db),
):
    return BaseResponse(
        data=attendance_handler.search_student_attendance(public_id, name, db)
    )
