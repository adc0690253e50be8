"""
Application configuration using Pydantic Settings.
Supports multiple environments and providers.
"""

from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Optional, Dict, Any
from functools import lru_cache
from enum import Enum


class Environment(str, Enum):
    """Application environment."""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class UploadMode(str, Enum):
    """Transport used to move uploaded files."""
    SIMULATED = "simulated"
    HTTP = "http"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Timings for the simulated call flow and uploads live here so tests
    can run them without artificial delays.
    """

    # Application
    app_name: str = Field(default="Liora", env="APP_NAME")
    app_version: str = Field(default="1.0.0", env="APP_VERSION")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT, env="ENVIRONMENT")
    debug: bool = Field(default=True, env="DEBUG")

    # Server
    host: str = Field(default="0.0.0.0", env="HOST")
    port: int = Field(default=8000, env="PORT")
    allowed_origins: str = Field(
        default="*",
        env="ALLOWED_ORIGINS",
        description="Comma-separated origins for CORS (use * for all)"
    )

    # LLM Providers
    # Gemini
    gemini_api_key: str = Field(default="", env="GEMINI_API_KEY")
    gemini_model: str = Field(default="gemini-2.0-flash", env="GEMINI_MODEL")

    # OpenAI (optional)
    openai_api_key: Optional[str] = Field(default=None, env="OPENAI_API_KEY")
    openai_model: str = Field(default="gpt-4o-mini", env="OPENAI_MODEL")

    # Default LLM Provider
    default_llm_provider: str = Field(
        default="gemini", env="DEFAULT_LLM_PROVIDER")

    # Interview
    interview_max_questions: int = Field(
        default=5, env="INTERVIEW_MAX_QUESTIONS")
    interview_llm_enabled: bool = Field(
        default=False,
        env="INTERVIEW_LLM_ENABLED",
        description="Rephrase follow-up questions with the default LLM provider"
    )
    session_ttl_minutes: int = Field(default=120, env="SESSION_TTL_MINUTES")
    max_sessions: int = Field(default=500, env="MAX_SESSIONS")

    # Calls & notifications
    call_simulated_delay_seconds: float = Field(
        default=1.0, env="CALL_SIMULATED_DELAY_SECONDS")
    seed_demo_data: bool = Field(default=True, env="SEED_DEMO_DATA")

    # Uploads
    upload_mode: UploadMode = Field(
        default=UploadMode.SIMULATED, env="UPLOAD_MODE")
    upload_endpoint: str = Field(
        default="http://localhost:9000/upload", env="UPLOAD_ENDPOINT")
    upload_timeout_seconds: int = Field(
        default=30, env="UPLOAD_TIMEOUT_SECONDS")
    upload_success_rate: float = Field(
        default=0.9, env="UPLOAD_SUCCESS_RATE")
    upload_tick_seconds: float = Field(
        default=0.2, env="UPLOAD_TICK_SECONDS")

    # Logging
    log_level: str = Field(default="INFO", env="LOG_LEVEL")
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        env="LOG_FORMAT"
    )

    # Local state persistence
    state_persistence_path: str = Field(
        default="data/state", env="STATE_PERSISTENCE_PATH")

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./data/liora.db",
        env="DATABASE_URL"
    )
    database_echo: bool = Field(default=False, env="DATABASE_ECHO")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    def get_llm_config(self, provider: str) -> Dict[str, Any]:
        """Get configuration for a specific LLM provider."""
        configs = {
            "gemini": {
                "api_key": self.gemini_api_key,
                "model": self.gemini_model,
            },
            "openai": {
                "api_key": self.openai_api_key,
                "model": self.openai_model,
            },
        }
        return configs.get(provider, {})

    def is_provider_configured(self, provider: str) -> bool:
        """Check if a provider has its API key configured."""
        config = self.get_llm_config(provider)
        return bool(config.get("api_key"))

    def parsed_allowed_origins(self) -> list[str]:
        """Return allowed origins for CORS as list."""
        raw = self.allowed_origins.strip()
        if not raw:
            return ["*"]
        origins = [o.strip() for o in raw.split(",") if o.strip()]
        return origins or ["*"]


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
