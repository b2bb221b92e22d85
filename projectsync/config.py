"""Application configuration using Pydantic Settings."""
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PROJECTSYNC_",
    )

    # Local snapshot storage
    data_dir: Path = Path.home() / ".projectsync"
    storage_key: str = "ps_projects"

    # Gemini roadmap advisor
    gemini_api_key: str = ""
    gemini_model: str = "gemini-3-flash-preview"
    roadmap_goal_count: int = 5

    # API
    debug: bool = False
    log_level: str = "INFO"

    # CORS
    cors_origins: str = "http://localhost:3000,http://localhost:5173"

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins.split(",")]


settings = Settings()
