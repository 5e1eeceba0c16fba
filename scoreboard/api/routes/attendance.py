# scoreboard/api/routes/attendance.py
import uuid
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from scoreboard.api.dependencies.auth import (
    can_create,
    can_delete,
    can_edit,
    get_current_user,
)
from scoreboard.database import get_db
from scoreboard.schema.account import CurrentUser
from scoreboard.schema.attendance import (
    AttendanceSessionData,
    BatchData,
    BatchPublicUrlData,
    CalendarDay,
    SessionDetail,
    SessionRename,
)
from scoreboard.schema.base import BaseResponse, ContainerIn, ShareLink
from scoreboard.services import attendance as attendance_handler

router = APIRouter(tags=["attendance"])


@router.get("/batches/", response_model=BaseResponse[List[BatchData]])
async def list_batches(
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    return BaseResponse(data=attendance_handler.list_batches(db))


@router.post("/batches/", response_model=BaseResponse[BatchData], status_code=201)
async def create_batch(
    request: ContainerIn,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(can_create),
):
    batch = attendance_handler.create_batch(request, user.id, db)
    return BaseResponse(data=batch, message="Batch created successfully!")


@router.delete("/batches/{batch_id}", response_model=BaseResponse[None])
async def delete_batch(
    batch_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(can_delete),
):
    attendance_handler.delete_batch(batch_id, db)
    return BaseResponse(message="Batch deleted successfully!")


@router.get(
    "/batches/{batch_id}/sessions",
    response_model=BaseResponse[List[AttendanceSessionData]],
)
async def list_sessions(
    batch_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    return BaseResponse(data=attendance_handler.list_sessions(batch_id, db))


@router.post(
    "/batches/{batch_id}/sessions",
    response_model=BaseResponse[AttendanceSessionData],
    status_code=201,
)
async def create_session(
    batch_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(can_create),
):
    session = attendance_handler.create_session(batch_id, db)
    return BaseResponse(data=session, message="Session created successfully!")


@router.get(
    "/batches/{batch_id}/calendar",
    response_model=BaseResponse[List[CalendarDay]],
)
async def get_calendar(
    batch_id: uuid.UUID,
    year: Optional[int] = None,
    month: Optional[int] = Query(None, ge=1, le=12),
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    today = date.today()
    return BaseResponse(
        data=attendance_handler.get_calendar(
            batch_id,
            year or today.year,
            month or today.month,
            db,
        )
    )


@router.get(
    "/batches/{batch_id}/public-url",
    response_model=BaseResponse[BatchPublicUrlData],
)
async def get_public_url(
    batch_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    public_url = attendance_handler.get_batch_public_url(batch_id, db)
    if not public_url:
        return BaseResponse(message="No public URL generated yet")
    return BaseResponse(data=public_url)


@router.post(
    "/batches/{batch_id}/public-url",
    response_model=BaseResponse[BatchPublicUrlData],
    status_code=201,
)
async def generate_public_url(
    batch_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(can_create),
):
    public_url = attendance_handler.generate_batch_public_url(batch_id, user.id, db)
    return BaseResponse(
        data=public_url,
        message="Permanent public URL generated successfully!",
    )


@router.get("/sessions/{session_id}", response_model=BaseResponse[SessionDetail])
async def get_session(
    session_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    return BaseResponse(data=attendance_handler.get_session_detail(session_id, db))


@router.get("/sessions/{session_id}/link", response_model=BaseResponse[ShareLink])
async def get_join_link(
    session_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    session = attendance_handler.get_session(session_id, db)
    return BaseResponse(data=attendance_handler.join_link(session))


@router.patch("/sessions/{session_id}", response_model=BaseResponse[AttendanceSessionData])
async def rename_session(
    session_id: uuid.UUID,
    request: SessionRename,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(can_edit),
):
    session = attendance_handler.rename_session(session_id, request.session_name, db)
    return BaseResponse(data=session, message="Session renamed")


@router.delete("/sessions/{session_id}", response_model=BaseResponse[None])
async def delete_session(
    session_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(can_delete),
):
    """
    Permanently delete a session along with all of its attendance records.
    """
    attendance_handler.delete_session(session_id, db)
    return BaseResponse(message="Session deleted successfully!")
