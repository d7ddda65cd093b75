"""Application settings loaded from environment variables and .env file."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database; production schema is managed by alembic
    database_url: str = "sqlite:///./conference.db"
    auto_create_schema: bool = True

    # Bearer credentials
    jwt_secret: str = Field("change-me-conference-workflow-signing-key", min_length=8)
    jwt_algorithm: str = "HS256"
    jwt_expires_minutes: int = Field(60 * 24, ge=1)

    # Blob store
    storage_backend: str = Field("local", pattern="^(s3|local)$")
    s3_endpoint: str | None = None
    s3_access_key: str | None = None
    s3_secret_key: str | None = None
    s3_region: str = "us-east-1"
    s3_bucket: str = "conference-uploads"
    s3_presign_expires_seconds: int = Field(900, ge=1)
    local_storage_dir: Path = Path("uploads")

    # Logging
    log_level: str = "INFO"
    log_format: str = Field("json", pattern="^(json|text)$")

    # Bootstrap
    bootstrap_on_startup: bool = True
    seed_demo_data: bool = False
    bootstrap_admin_email: str = "admin@confmaster.com"
    bootstrap_admin_password: str = "admin123"
    bootstrap_admin_name: str = "System Admin"

    cors_allow_origins: str = "http://localhost:3000,http://127.0.0.1:3000"

    @field_validator("bootstrap_admin_password")
    @classmethod
    def _password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > 72:
            raise ValueError("bootstrap_admin_password must be at most 72 bytes")
        return value

    @property
    def cors_origins(self) -> list[str]:
        return [x.strip() for x in self.cors_allow_origins.split(",") if x.strip()]


settings = Settings()
