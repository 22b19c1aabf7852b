"""Application configuration managed via environment variables."""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "AI Tasker Backend"
    debug: bool = False
    log_level: str = "INFO"
    database_url: str = "sqlite:///./tasker.db"
    database_auto_create: bool = True
    openai_api_key: str | None = None
    openai_base_url: str = "https://api.openai.com/v1"
    openai_model: str = "gpt-4-turbo"
    openai_temperature: float = 0.7
    openai_timeout_s: float = 60.0
    openai_max_retries: int = 2
    openai_json_mode: bool = True
    task_style: str = "detailed"
    question_count: int = 5
    opik_enabled: bool = False
    opik_api_key: str | None = None
    opik_project: str = "ai-tasker"


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()


settings = get_settings()
