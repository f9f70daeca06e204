"""
Application configuration using Pydantic Settings
"""
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


EVENT_STORE_SQL = "sql"
EVENT_STORE_JSONL = "jsonl"
EVENT_STORE_MEMORY = "memory"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables
    """
    # Event store
    EVENT_STORE_BACKEND: str = EVENT_STORE_SQL  # sql, jsonl, memory
    DATABASE_URL: str = "sqlite:///./budgie.db"
    EVENT_LOG_PATH: str = "budgie-events.jsonl"
    PROJECTION_BATCH_SIZE: int = 200

    # Budgeting
    DEFAULT_TARGET_PRIORITY: int = 5
    RUNWAY_HORIZON_YEARS: int = 100

    # Application
    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    def get_sqlalchemy_url(self) -> str:
        """
        Convert DATABASE_URL to SQLAlchemy format (postgresql+psycopg://)
        """
        url = self.DATABASE_URL
        if url.startswith("postgresql://"):
            return url.replace("postgresql://", "postgresql+psycopg://", 1)
        return url


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings instance (singleton)
    """
    return Settings()
