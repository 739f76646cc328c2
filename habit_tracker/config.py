"""Application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Storage
    database_path: str = "data/habits.db"
    database_timeout: float = 5.0  # seconds to wait on a locked database

    # Server
    server_host: str = "0.0.0.0"
    server_port: int = 8000

    # Summary heatmap
    summary_weeks: int = 18

    # Logging
    log_level: str = "INFO"


settings = Settings()
