"""Configuration utilities for notebook_backend."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application environment configuration."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: str = "sqlite:///notebook.db"
    frontend_origin: str = "http://localhost:3000"
    # Upper bound on task ids accepted by one critical-path request
    max_scope_size: int = 500
    log_level: str = "INFO"
    disable_metrics: bool = False


config = Config()  # type: ignore
