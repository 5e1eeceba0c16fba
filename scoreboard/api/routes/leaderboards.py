# scoreboard/api/routes/leaderboards.py
import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from scoreboard.api.dependencies.auth import (
    can_create,
    can_delete,
    get_current_user,
)
from scoreboard.database import get_db
from scoreboard.schema.account import CurrentUser
from scoreboard.schema.base import BaseResponse, ContainerIn, ShareLink
from scoreboard.schema.scoring import (
    ImportSummary,
    InterviewRoundData,
    InterviewRoundIn,
    LeaderboardDashboard,
    LeaderboardData,
    StudentRounds,
)
from scoreboard.services import leaderboard as leaderboard_handler
from scoreboard.services.tables import LEADERBOARD_DEFAULT_SORT, SortState
from scoreboard.services.transfer import export_response

router = APIRouter(prefix="/leaderboards", tags=["leaderboards"])


def table_sort(sort_by: Optional[str] = None, descending: bool = True) -> SortState:
    return SortState(sort_by or LEADERBOARD_DEFAULT_SORT.field, descending)


@router.get("/", response_model=BaseResponse[List[LeaderboardData]])
async def list_leaderboards(
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    return BaseResponse(data=leaderboard_handler.list_leaderboards(db))


@router.post("/", response_model=BaseResponse[LeaderboardData], status_code=201)
async def create_leaderboard(
    request: ContainerIn,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(can_create),
):
    leaderboard = leaderboard_handler.create_leaderboard(request, user.id, db)
    return BaseResponse(data=leaderboard, message="Leaderboard created")


@router.delete("/{leaderboard_id}", response_model=BaseResponse[None])
async def delete_leaderboard(
    leaderboard_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(can_delete),
):
    """
    Delete a leaderboard. All of its interview data is removed with it.
    """
    leaderboard_handler.delete_leaderboard(leaderboard_id, db)
    return BaseResponse(message="Leaderboard deleted")


@router.get("/{leaderboard_id}", response_model=BaseResponse[LeaderboardDashboard])
async def get_dashboard(
    leaderboard_id: uuid.UUID,
    search: str = "",
    sort: SortState = Depends(table_sort),
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    leaderboard = leaderboard_handler.get_leaderboard(db, leaderboard_id=leaderboard_id)
    return BaseResponse(
        data=leaderboard_handler.get_dashboard(leaderboard, db, search=search, sort=sort)
    )


@router.get("/{leaderboard_id}/share", response_model=BaseResponse[ShareLink])
async def get_share_link(
    leaderboard_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    leaderboard = leaderboard_handler.get_leaderboard(db, leaderboard_id=leaderboard_id)
    return BaseResponse(data=leaderboard_handler.share_link(leaderboard))


@router.get(
    "/{leaderboard_id}/students/{student_name}",
    response_model=BaseResponse[StudentRounds],
)
async def get_student_rounds(
    leaderboard_id: uuid.UUID,
    student_name: str,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    leaderboard = leaderboard_handler.get_leaderboard(db, leaderboard_id=leaderboard_id)
    return BaseResponse(
        data=leaderboard_handler.get_student_rounds(leaderboard, student_name, db)
    )


@router.get(
    "/{leaderboard_id}/rounds",
    response_model=BaseResponse[List[InterviewRoundData]],
)
async def list_rounds(
    leaderboard_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    return BaseResponse(data=leaderboard_handler.list_rounds(leaderboard_id, db))


@router.post(
    "/{leaderboard_id}/rounds",
    response_model=BaseResponse[InterviewRoundData],
    status_code=201,
)
async def add_round(
    leaderboard_id: uuid.UUID,
    request: InterviewRoundIn,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(can_create),
):
    round_ = leaderboard_handler.add_round(leaderboard_id, request, db)
    return BaseResponse(data=round_, message="Interview round saved")


@router.delete(
    "/{leaderboard_id}/rounds/{round_id}",
    response_model=BaseResponse[None],
)
async def delete_round(
    leaderboard_id: uuid.UUID,
    round_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(can_delete),
):
    leaderboard_handler.delete_round(leaderboard_id, round_id, db)
    return BaseResponse(message="Interview round deleted")


@router.get("/{leaderboard_id}/export")
async def export_leaderboard(
    leaderboard_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    filename, payload = leaderboard_handler.export_leaderboard(leaderboard_id, db)
    return export_response(payload, filename)


@router.post("/{leaderboard_id}/import", response_model=BaseResponse[ImportSummary])
async def import_rounds(
    leaderboard_id: uuid.UUID,
    request: Request,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(can_create),
):
    """
    Import rounds from a previously exported JSON file (sent as the request body).
    """
    summary = leaderboard_handler.import_rounds(leaderboard_id, await request.body(), db)
    return BaseResponse(data=summary, message="Import successful!")
