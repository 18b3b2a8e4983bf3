# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Settings for the inventory server and command line.

Values come from environment variables or a `.env` file. AWS credentials
themselves are never read here; boto3 resolves them from its provider chain,
optionally narrowed by `AWS_PROFILE`.
"""

from typing import Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .utils.input_validation import InputValidator


class Settings(BaseSettings):
    """
    Inventory server settings.

    Defaults suit local development against a real account. Settings are
    read once per process and treated as read-only afterwards.
    """

    # Server Configuration
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind the server to",
        validation_alias=AliasChoices("CLOUDY_HOST", "HOST")
    )
    port: int = Field(
        default=8080,
        description="Port to run the server on",
        validation_alias=AliasChoices("CLOUDY_PORT", "PORT")
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
        validation_alias="LOG_LEVEL"
    )
    environment: str = Field(
        default="development",
        description="Environment name (development, staging, production)",
        validation_alias=AliasChoices("ENVIRONMENT", "ENV")
    )

    # AWS Configuration
    anchor_region: str = Field(
        default="us-east-1",
        description="Region queried for global services (S3, IAM)",
        validation_alias="ANCHOR_REGION"
    )
    aws_profile: Optional[str] = Field(
        default=None,
        description="Named AWS profile to build the session from",
        validation_alias="AWS_PROFILE"
    )
    aws_endpoint_url: Optional[str] = Field(
        default=None,
        description="Override endpoint for all AWS clients (e.g. LocalStack)",
        validation_alias="AWS_ENDPOINT_URL"
    )
    aws_connect_timeout_seconds: int = Field(
        default=10,
        gt=0,
        description="Connect timeout for AWS API calls",
        validation_alias="AWS_CONNECT_TIMEOUT_SECONDS"
    )
    aws_read_timeout_seconds: int = Field(
        default=30,
        gt=0,
        description="Read timeout for AWS API calls",
        validation_alias="AWS_READ_TIMEOUT_SECONDS"
    )

    # Inventory Configuration
    request_timeout_seconds: float = Field(
        default=120.0,
        ge=0,
        description="Deadline for one inventory request in seconds (0 disables)",
        validation_alias="REQUEST_TIMEOUT_SECONDS"
    )
    max_concurrent_regions: int = Field(
        default=10,
        ge=1,
        description="Maximum regions aggregated in parallel",
        validation_alias="MAX_CONCURRENT_REGIONS"
    )
    max_regions: int = Field(
        default=50,
        ge=1,
        description="Maximum regions accepted in one request",
        validation_alias="MAX_REGIONS"
    )

    # CORS Configuration
    cors_allowed_origins: str = Field(
        default="*",
        description="Comma-separated list of allowed origins, or '*'",
        validation_alias="CORS_ALLOWED_ORIGINS"
    )

    model_config = SettingsConfigDict(
        env_prefix="",  # No prefix for environment variables
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator("anchor_region")
    @classmethod
    def normalize_anchor_region(cls, value: str) -> str:
        """Lower-case the anchor region so it compares equal to requested regions."""
        code = value.strip().lower()
        if not InputValidator.REGION_PATTERN.match(code):
            raise ValueError(f"invalid AWS region code: {value!r}")
        return code

    @property
    def request_timeout(self) -> float | None:
        """Request deadline in seconds, or None when disabled."""
        return self.request_timeout_seconds or None


def get_settings() -> Settings:
    """
    Get application settings.

    Loads settings from environment variables and .env file.

    Returns:
        Settings instance with all configuration values
    """
    return Settings()


# Global settings instance (lazy loaded)
_settings: Optional[Settings] = None


def settings() -> Settings:
    """
    Get the global settings instance.

    Creates the settings instance on first call and caches it.

    Returns:
        Global Settings instance
    """
    global _settings
    if _settings is None:
        _settings = get_settings()
    return _settings
