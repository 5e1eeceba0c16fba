# scoreboard/api/exceptions/handlers.py
from fastapi import FastAPI, Request, status
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from scoreboard.schema.base import BaseResponse
from scoreboard.logging_config import app_logger


def _error_response(status_code: int, message: str, error: dict = None, headers=None) -> JSONResponse:
    body = BaseResponse(status=False, message=message, error=error or {"code": status_code})
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json"),
        headers=headers,
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return _error_response(exc.status_code, message, headers=getattr(exc, "headers", None))


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    # Surface the first field error the way a form would
    message = errors[0]["msg"] if errors else "Invalid request"
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    return _error_response(
        422,
        message,
        error={
            "code": 422,
            "fields": [".".join(str(part) for part in e["loc"]) for e in errors],
        },
    )


async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    app_logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
