"""
Application configuration using pydantic-settings.

WHAT: Centralized config from environment variables
WHY: Type-safe, validated config with sensible defaults
HOW: Pydantic BaseSettings reads from .env and environment
"""

from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    """Application settings loaded from environment."""
    
    # App metadata
    APP_NAME: str = "ArxivLearner"
    
    # HTTP transport (adapter-owned clients only; injected clients keep their own policy)
    LLM_CONNECT_TIMEOUT: float = 10.0  # seconds
    LLM_READ_TIMEOUT: float = 120.0  # seconds, long generations stream slowly
    
    # OpenRouter attribution defaults, injected only when the caller omits them
    OPENROUTER_REFERER: str = "https://github.com/arxivlearner"
    OPENROUTER_TITLE: str = "ArxivLearner"
    OPENROUTER_MODELS_URL: str = "https://openrouter.ai/api/v1/models"
    
    # Gemini host root; the adapter appends /v1beta itself
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com"
    
    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""  # empty disables the file handler
    
    @field_validator("LLM_CONNECT_TIMEOUT", "LLM_READ_TIMEOUT")
    @classmethod
    def check_positive_timeout(cls, v):
        """Reject zero or negative timeouts."""
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v
    
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


# Singleton instance
settings = Settings()
