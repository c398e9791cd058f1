"""
Configuration management using Pydantic settings.
Handles the backend addresses, image limits, preview storage and server options.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings
from typing import List, Tuple
from functools import lru_cache
import os


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Application configuration
    app_name: str = "Estate Portal"
    app_version: str = "1.0.0"
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # REST backend that owns properties, categories, stats and contacts
    backend_base_url: str = "http://localhost:3000/api"
    image_base_url: str = "http://localhost:3000"
    backend_timeout: float = 10.0

    # Property images
    max_images_per_property: int = 10
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    allowed_file_types: List[str] = ["image/jpeg", "image/png", "image/webp"]
    preview_dir: str = "./previews"
    preview_size: Tuple[int, int] = (300, 300)

    # Admin form sessions
    form_session_ttl_seconds: int = 60 * 60

    # HTTP configuration
    max_request_size: int = 50 * 1024 * 1024
    cors_origins: List[str] = ["http://localhost:3000", "http://localhost:8000"]

    # Server configuration
    host: str = "0.0.0.0"
    port: int = 8000

    @field_validator("backend_base_url", "image_base_url")
    @classmethod
    def strip_trailing_slash(cls, v):
        """Base addresses are joined with paths that start with a slash."""
        return v.rstrip("/")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment setting."""
        allowed_envs = ["development", "testing", "staging", "production"]
        if v not in allowed_envs:
            raise ValueError(f"Environment must be one of: {allowed_envs}")
        return v

    @field_validator("max_images_per_property")
    @classmethod
    def validate_max_images(cls, v):
        if v < 1:
            raise ValueError("max_images_per_property must be at least 1")
        return v

    @field_validator("preview_dir", mode="before")
    @classmethod
    def create_preview_directory(cls, v):
        """Ensure the preview directory exists."""
        if v and not os.path.exists(v):
            os.makedirs(v, exist_ok=True)
        return v

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.environment == "testing"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one instance of settings throughout the app lifecycle.
    """
    return Settings()
