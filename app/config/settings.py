from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "docanalysis"
    db_username: str = "docanalysis"
    db_password: str = "secret"
    db_statement_timeout_ms: int = 5000
    db_connect_timeout_seconds: int = Field(default=10, gt=0)
    db_pool_min_size: int = Field(default=1, ge=0)
    db_pool_max_size: int = Field(default=10, ge=1)

    max_job_attempts: int = 3
    job_poll_interval_seconds: int = 5

    pdf_engine: str = "pdfplumber"
    files_root: Path = Path("/app/files")
    text_source_timeout_seconds: float = Field(default=10.0, gt=0)

    summary_ratio: float = Field(default=0.2, gt=0, le=1)
    anomaly_confidence_seed: int | None = None
