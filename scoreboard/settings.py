from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # FastAPI
    SECRET_KEY: str
    API_VERSION: str = "v1"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DB_URL: str = "sqlite:///./scoreboard.db"

    # Auth
    TOKEN_EXPIRE_HOURS: int = 8

    # Attendance
    SESSION_TTL_HOURS: int = 24

    # Account setup
    SETUP_ACCOUNT_COUNT: int = 10
    SETUP_PASSWORD: str = "Admin@123"
    SETUP_DELAY_SECONDS: float = 0.5

    # Origin used when building shareable links
    PUBLIC_BASE_URL: str = "http://localhost:5173"

    class Config:
        env_file = ".env"


settings = Settings()
