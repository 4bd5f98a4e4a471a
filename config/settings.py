"""
Configuration settings for the Dynamic Form application.
Uses pydantic-settings for environment variable management.
"""

from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Optional
import os
from pathlib import Path


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Form Service
    FORM_API_BASE_URL: str = Field(
        "https://dynamic-form-generator-9rl7.onrender.com",
        description="Base URL of the form schema / user registration service"
    )
    REQUEST_TIMEOUT_SECONDS: Optional[float] = Field(
        None,
        description="HTTP timeout for form service calls (None = wait indefinitely)"
    )

    # Application Mode
    DEBUG: bool = Field(False, description="Enable debug mode")
    LOG_LEVEL: str = Field("INFO", description="Root logging level")

    # Session Configuration
    SESSION_PREFIX: str = Field("form", description="Prefix for Streamlit widget/session keys")

    # Local development service
    HOST: str = Field("0.0.0.0", description="Dev server host")
    PORT: int = Field(8000, description="Dev server port")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


def get_project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent


def validate_settings() -> tuple[bool, list[str]]:
    """
    Validate that settings are usable.
    Returns (is_valid, list of issues).
    """
    issues = []

    try:
        s = settings

        if not s.FORM_API_BASE_URL.startswith(("http://", "https://")):
            issues.append("FORM_API_BASE_URL must start with http:// or https://")

        if s.REQUEST_TIMEOUT_SECONDS is not None and s.REQUEST_TIMEOUT_SECONDS <= 0:
            issues.append("REQUEST_TIMEOUT_SECONDS must be positive when set")

    except Exception as e:
        issues.append(f"Configuration error: {str(e)}")

    return len(issues) == 0, issues


# Load .env from project root
env_path = get_project_root() / ".env"
if env_path.exists():
    from dotenv import load_dotenv
    load_dotenv(env_path)

# On Streamlit Cloud, secrets are in .streamlit/secrets.toml
# Load them into os.environ so pydantic-settings can find them
try:
    import streamlit as st
    for key, value in st.secrets.items():
        if isinstance(value, str) and key not in os.environ:
            os.environ[key] = value
except Exception:
    pass

# Global settings instance
settings = Settings()
