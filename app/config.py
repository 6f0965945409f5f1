"""
Application settings.
"""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./data/textlake.db"

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Storage
    DATA_DIR: str = "./data"

    # Ingestion limits
    MAX_UPLOAD_BYTES: int = 25 * 1024 * 1024
    MAX_TEXT_CHARS: int = 5_000_000
    NOTES_PREVIEW_CHARS: int = 200

    # Read endpoints
    TABLE_ROW_LIMIT: int = 50
    RESULTS_ROW_LIMIT: int = 200

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
