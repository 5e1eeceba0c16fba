# scoreboard/api/routes/activeness.py
import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from scoreboard.api.dependencies.auth import (
    can_create,
    can_delete,
    can_edit,
    get_current_user,
)
from scoreboard.database import get_db
from scoreboard.schema.account import CurrentUser
from scoreboard.schema.activeness import (
    ActivenessBoardData,
    ActivenessDashboard,
    ModuleScoreData,
    ModuleScoreIn,
    StudentModules,
)
from scoreboard.schema.base import BaseResponse, ContainerIn, ShareLink
from scoreboard.schema.scoring import ImportSummary
from scoreboard.services import activeness_board as board_handler
from scoreboard.services.tables import ACTIVENESS_DEFAULT_SORT, SortState
from scoreboard.services.transfer import export_response

router = APIRouter(prefix="/activeness-boards", tags=["activeness"])


def table_sort(sort_by: Optional[str] = None, descending: bool = True) -> SortState:
    return SortState(sort_by or ACTIVENESS_DEFAULT_SORT.field, descending)


@router.get("/", response_model=BaseResponse[List[ActivenessBoardData]])
async def list_boards(
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    return BaseResponse(data=board_handler.list_boards(db))


@router.post("/", response_model=BaseResponse[ActivenessBoardData], status_code=201)
async def create_board(
    request: ContainerIn,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(can_create),
):
    board = board_handler.create_board(request, user.id, db)
    return BaseResponse(data=board, message="Activeness board created")


@router.delete("/{board_id}", response_model=BaseResponse[None])
async def delete_board(
    board_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(can_delete),
):
    board_handler.delete_board(board_id, db)
    return BaseResponse(message="Activeness board deleted")


@router.get("/{board_id}", response_model=BaseResponse[ActivenessDashboard])
async def get_dashboard(
    board_id: uuid.UUID,
    search: str = "",
    sort: SortState = Depends(table_sort),
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    board = board_handler.get_board(db, board_id=board_id)
    return BaseResponse(
        data=board_handler.get_dashboard(board, db, search=search, sort=sort)
    )


@router.get("/{board_id}/share", response_model=BaseResponse[ShareLink])
async def get_share_link(
    board_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    board = board_handler.get_board(db, board_id=board_id)
    return BaseResponse(data=board_handler.share_link(board))


@router.get(
    "/{board_id}/students/{student_name}",
    response_model=BaseResponse[StudentModules],
)
async def get_student_modules(
    board_id: uuid.UUID,
    student_name: str,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    board = board_handler.get_board(db, board_id=board_id)
    return BaseResponse(data=board_handler.get_student_modules(board, student_name, db))


@router.get(
    "/{board_id}/scores",
    response_model=BaseResponse[List[ModuleScoreData]],
)
async def list_scores(
    board_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    return BaseResponse(data=board_handler.list_scores(board_id, db))


@router.post(
    "/{board_id}/scores",
    response_model=BaseResponse[ModuleScoreData],
    status_code=201,
)
async def add_score(
    board_id: uuid.UUID,
    request: ModuleScoreIn,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(can_create),
):
    score = board_handler.add_score(board_id, request, db)
    return BaseResponse(data=score, message="Module score saved")


@router.put(
    "/{board_id}/scores/{score_id}",
    response_model=BaseResponse[ModuleScoreData],
)
async def update_score(
    board_id: uuid.UUID,
    score_id: uuid.UUID,
    request: ModuleScoreIn,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(can_edit),
):
    score = board_handler.update_score(board_id, score_id, request, db)
    return BaseResponse(data=score, message="Module score updated")


@router.delete(
    "/{board_id}/scores/{score_id}",
    response_model=BaseResponse[None],
)
async def delete_score(
    board_id: uuid.UUID,
    score_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(can_delete),
):
    board_handler.delete_score(board_id, score_id, db)
    return BaseResponse(message="Module score deleted")


@router.get("/{board_id}/export")
async def export_board(
    board_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    filename, payload = board_handler.export_board(board_id, db)
    return export_response(payload, filename)


@router.post("/{board_id}/import", response_model=BaseResponse[ImportSummary])
async def import_scores(
    board_id: uuid.UUID,
    request: Request,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(can_create),
):
    summary = board_handler.import_scores(board_id, await request.body(), db)
    return BaseResponse(data=summary, message="Import successful!")
