# scoreboard/services/activeness_board.py
import uuid
from datetime import date
from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from scoreboard.api.dependencies.db import (
    select_activeness_board,
    select_activeness_boards,
    select_module_score,
    select_module_scores,
)
from scoreboard.logging_config import app_logger
from scoreboard.models.activeness import (
    ActivenessBoard as ORMActivenessBoard,
    ModuleScore as ORMModuleScore,
)
from scoreboard.schema.activeness import (
    ActivenessBoardData,
    ActivenessDashboard,
    ActivenessExport,
    ModuleScoreData,
    ModuleScoreIn,
    StudentModules,
)
from scoreboard.schema.base import ContainerIn, ShareLink
from scoreboard.schema.scoring import ImportSummary
from scoreboard.services.activeness import (
    calculate_batch_activeness_metrics,
    calculate_student_activeness_metrics,
    get_modules_list,
    get_student_activeness_array,
)
from scoreboard.services.tables import (
    ACTIVENESS_DEFAULT_SORT,
    ACTIVENESS_SORT_FIELDS,
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


def get_board(
    db: Session,
    board_id: uuid.UUID = None,
    public_id: str = None,
    to_pydantic: bool = True,
):
    board = select_activeness_board(
        db,
        board_id=board_id,
        public_id=public_id,
        to_pydantic=to_pydantic,
    )
    if not board:
        raise HTTPException(status_code=404, detail="Activeness board not found")
    return board


def list_boards(db: Session):
    return select_activeness_boards(db)


def create_board(
    request: ContainerIn,
    created_by: Optional[uuid.UUID],
    db: Session,
) -> ActivenessBoardData:
    board = ORMActivenessBoard(
        name=request.name,
        description=request.description,
        created_by=created_by,
    )
    db.add(board)
    db.commit()
    db.refresh(board)

    app_logger.info(f"Created activeness board {board.id} ({board.name})")
    return ActivenessBoardData.model_validate(board)


def delete_board(board_id: uuid.UUID, db: Session) -> None:
    board = get_board(db, board_id=board_id, to_pydantic=False)
    db.delete(board)
    db.commit()
    app_logger.info(f"Deleted activeness board {board_id}")


def _get_score(board_id: uuid.UUID, score_id: uuid.UUID, db: Session) -> ORMModuleScore:
    score = select_module_score(db, score_id)
    if not score or score.board_id != board_id:
        raise HTTPException(status_code=404, detail="Module score not found")
    return score


def list_scores(board_id: uuid.UUID, db: Session) -> List[ModuleScoreData]:
    get_board(db, board_id=board_id, to_pydantic=False)
    return select_module_scores(db, board_id)


def add_score(board_id: uuid.UUID, request: ModuleScoreIn, db: Session) -> ModuleScoreData:
    get_board(db, board_id=board_id, to_pydantic=False)

    score = ORMModuleScore(board_id=board_id, **request.model_dump())
    db.add(score)
    db.commit()
    db.refresh(score)

    app_logger.info(
        f"Recorded module {score.module_number} for {score.student_name} "
        f"on board {board_id}"
    )
    return ModuleScoreData.model_validate(score)


def update_score(
    board_id: uuid.UUID,
    score_id: uuid.UUID,
    request: ModuleScoreIn,
    db: Session,
) -> ModuleScoreData:
    """Replace the form fields of an existing score. Last write wins."""
    score = _get_score(board_id, score_id, db)
    for field, value in request.model_dump().items():
        setattr(score, field, value)
    db.commit()
    db.refresh(score)
    return ModuleScoreData.model_validate(score)


def delete_score(board_id: uuid.UUID, score_id: uuid.UUID, db: Session) -> None:
    score = _get_score(board_id, score_id, db)
    db.delete(score)
    db.commit()


def get_dashboard(
    board: ActivenessBoardData,
    db: Session,
    search: str = "",
    sort: SortState = ACTIVENESS_DEFAULT_SORT,
) -> ActivenessDashboard:
    scores = select_module_scores(db, board.id)
    students = get_student_activeness_array(scores)

    return ActivenessDashboard(
        board=board,
        batch_metrics=calculate_batch_activeness_metrics(scores),
        students=build_table(
            students,
            search=search,
            sort=sort,
            allowed_fields=ACTIVENESS_SORT_FIELDS,
        ),
        modules=get_modules_list(),
    )


def get_student_modules(
    board: ActivenessBoardData,
    student_name: str,
    db: Session,
) -> StudentModules:
    scores = select_module_scores(db, board.id, student_name=student_name)
    metrics = calculate_student_activeness_metrics(scores)
    if not metrics:
        raise HTTPException(status_code=404, detail="Student not found")
    return StudentModules(metrics=metrics, scores=scores)


def share_link(board: ActivenessBoardData) -> ShareLink:
    return ShareLink(url=f"{settings.PUBLIC_BASE_URL}/activeness/{board.public_id}")


def export_board(board_id: uuid.UUID, db: Session):
    board = get_board(db, board_id=board_id)
    payload = ActivenessExport(board=board, scores=select_module_scores(db, board.id))
    return export_filename(board.name, "activeness"), payload


def import_scores(board_id: uuid.UUID, raw: bytes, db: Session) -> ImportSummary:
    """
    Insert every score of an exported envelope into a board, one commit
    per record. A falsy activeness score falls back to 5.
    """
    get_board(db, board_id=board_id, to_pydantic=False)
    records = parse_import(raw, "scores")

    imported = 0
    try:
        for record in records:
            score = ORMModuleScore(
                board_id=board_id,
                student_name=record.get("student_name"),
                module_number=record.get("module_number"),
                activeness_score=float(record.get("activeness_score") or 5),
                notes=record.get("notes") or "",
                recorded_date=parse_date(record.get("recorded_date"), default=date.today()),
            )
            db.add(score)
            db.commit()
            imported += 1
    except (AttributeError, TypeError, ValueError, SQLAlchemyError) as e:
        db.rollback()
        app_logger.error(
            f"Import into activeness board {board_id} stopped after "
            f"{imported} scores: {e}"
        )
        raise HTTPException(status_code=400, detail=IMPORT_ERROR_MESSAGE)

    app_logger.info(f"Imported {imported} scores into activeness board {board_id}")
    return ImportSummary(imported=imported)
