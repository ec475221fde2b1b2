"""
Configuration management using Pydantic Settings.
Supports environment variables and .env files.
"""

from functools import lru_cache
from typing import Annotated, List, Literal
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class ImageSettings(BaseSettings):
    """Image encoding configuration for text extraction requests."""

    model_config = SettingsConfigDict(env_prefix="IMAGE_")

    max_dimension: int = 2048
    jpeg_quality: int = 85
    extensions: List[str] = [".jpg", ".jpeg", ".png", ".webp", ".bmp", ".tif", ".tiff"]


class RetrySettings(BaseSettings):
    """Retry policy configuration."""

    model_config = SettingsConfigDict(env_prefix="RETRY_")

    max_attempts: int = 3
    initial_delay: float = 1.5
    max_delay: float = 60.0
    exponential_base: float = 2.0
    jitter: bool = False


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # AI service
    gemini_api_key: str = Field(
        default="",
        description="API key for the Gemini generative language service"
    )
    service_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    request_timeout: float = 120.0
    text_model: str = Field(
        default="gemini-2.5-flash",
        description="Model hint for text extraction"
    )
    reasoning_model: str = Field(
        default="gemini-2.5-flash",
        description="Model hint for classification, structuring and enrichment"
    )

    # Processing
    concurrency: int = Field(default=5, ge=1)
    group_threshold_seconds: float = Field(default=7.5, gt=0)
    batch_tags: Annotated[List[str], NoDecode] = []
    text_export: bool = False

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "console"] = "console"

    # Nested settings
    image: ImageSettings = Field(default_factory=ImageSettings)
    retry: RetrySettings = Field(default_factory=RetrySettings)

    @field_validator("batch_tags", mode="before")
    @classmethod
    def parse_batch_tags(cls, v):
        if isinstance(v, str):
            import json
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                return [tag.strip() for tag in v.split(",") if tag.strip()]
        return v


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
