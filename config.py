"""
Centralized configuration for CRO Audit Relay
All environment variables and settings are defined here
"""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Read once at startup and injected into the audit pipeline.
    """

    # ======================
    # Gemini Configuration
    # ======================
    GEMINI_API_KEY: str = Field(
        default="",
        description="Gemini API key (empty means heuristics-only mode)"
    )
    GEMINI_MODEL: str = Field(
        default="gemini-2.5-flash",
        description="Gemini model used for analysis"
    )
    GEMINI_API_BASE: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Base URL of the Generative Language REST API"
    )
    GEMINI_TIMEOUT: Optional[float] = Field(
        default=None,
        description="Request timeout in seconds (unset waits indefinitely)"
    )

    # ======================
    # Server Configuration
    # ======================
    HOST: str = Field(default="0.0.0.0", description="Listen address")
    PORT: int = Field(default=8080, description="Listen port")
    MAX_BODY_BYTES: int = Field(
        default=8 * 1024 * 1024,  # 8 MB
        description="Maximum accepted request body size in bytes"
    )

    # ======================
    # Logging Configuration
    # ======================
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level"
    )

    @property
    def llm_enabled(self) -> bool:
        """True when a Gemini API key is configured"""
        return bool(self.GEMINI_API_KEY)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"  # Allow extra env vars in .env file


# Global settings instance
settings = Settings()


# ======================
# Convenience Functions
# ======================

def get_settings() -> Settings:
    """Get the process-wide settings (FastAPI dependency)"""
    return settings