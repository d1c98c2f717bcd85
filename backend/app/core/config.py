"""Application configuration."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # 忽略 .env 中的额外变量
    )

    # Project info
    PROJECT_NAME: str = "Notes API"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"

    # CORS
    CORS_ORIGINS: list[str] = [
        "http://localhost:5173",  # Vite dev server
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Paths (relative to project root)
    PROJECT_ROOT: Path = Path(__file__).parent.parent.parent.parent
    DATA_DIR: Path = PROJECT_ROOT / "data"
    NOTES_FILE: Path = DATA_DIR / "notes.json"
    NOTES_LOCK_TIMEOUT: float = 10.0

    # Server
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    # Client (notes CLI)
    NOTES_API_URL: str = "http://127.0.0.1:8000"
    NOTES_API_TIMEOUT: float = 10.0


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
