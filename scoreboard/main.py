from contextlib import asynccontextmanager

from fastapi import FastAPI

from scoreboard.api.exceptions.handlers import register_exception_handlers
from scoreboard.api.routes.activeness import router as activeness_router
from scoreboard.api.routes.attendance import router as attendance_router
from scoreboard.api.routes.auth import router as auth_router
from scoreboard.api.routes.leaderboards import router as leaderboards_router
from scoreboard.api.routes.public import router as public_router
from scoreboard.api.routes.setup import router as setup_router
from scoreboard.api.routes.users import router as users_router
from scoreboard.database import init_db
from scoreboard.logging_config import app_logger
from scoreboard.settings import settings


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    app_logger.info("Database tables ready")
    yield


app = FastAPI(title="Scoreboard", version=settings.API_VERSION, lifespan=lifespan)


@app.get("/health")
async def health_check():
    return {"status": "healthy"}

register_exception_handlers(app)

app.include_router(auth_router)
app.include_router(setup_router)
app.include_router(users_router)
app.include_router(leaderboards_router)
app.include_router(activeness_router)
app.include_router(attendance_router)
app.include_router(public_router)
