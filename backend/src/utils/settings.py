"""Settings and configuration management using Pydantic."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Workshop feedback service configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Document store
    feedback_table: str = Field(
        default="workshop-feedback-dev",
        description="DynamoDB table holding feedback submissions",
    )
    aws_default_region: str = Field(
        default="us-west-2",
        description="AWS region of the feedback table",
    )
    dynamodb_endpoint_url: str | None = Field(
        default=None,
        description="Optional DynamoDB endpoint (e.g. DynamoDB Local)",
    )

    # Mail relay
    company_email: str | None = Field(
        default=None,
        description="Mail account identity; also the From and default To mailbox",
    )
    email_pass: str | None = Field(
        default=None,
        description="Mail account credential",
    )
    feedback_recipient: str | None = Field(
        default=None,
        description="Destination mailbox (defaults to company_email)",
    )
    smtp_host: str = Field(default="smtp.gmail.com")
    smtp_port: int = Field(default=587, ge=1, le=65535)
    smtp_timeout: float | None = Field(
        default=None,
        gt=0,
        description="SMTP socket timeout in seconds (unset means no timeout)",
    )
    email_sender_name: str = Field(default="Hyundai Feedback")

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)
    environment: str = Field(
        default="production",
        description="'development' exposes stack traces in error responses",
    )
    static_dir: Path = Field(
        default=Path("public"),
        description="Directory of public assets served for unmatched GET paths",
    )
    cors_origins: str = Field(default="*")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v

    @property
    def is_development(self) -> bool:
        return self.environment.strip().lower() == "development"

    @property
    def recipient(self) -> str | None:
        return self.feedback_recipient or self.company_email

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
