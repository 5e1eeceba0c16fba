from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from scoreboard.settings import settings

# Base for models
Base = declarative_base()


def build_engine(db_url: str):
    """
    Create the SQLAlchemy engine for the configured database.

    SQLite connections are shared across the threads FastAPI runs sync
    dependencies in, so the same-thread check is switched off for them.
    """
    connect_args = {}
    if db_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(db_url, connect_args=connect_args)


engine = build_engine(settings.DB_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind=None):
    # Import models so they register on Base.metadata
    from scoreboard.models import (  # noqa: F401
        account,
        activeness,
        attendance,
        leaderboard,
    )

    Base.metadata.create_all(bind=bind or engine)


# Dependency to get a DB session
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
