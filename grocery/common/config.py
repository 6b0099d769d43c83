"""
Application configuration using Pydantic Settings
Reads from environment variables and .env file
"""
from functools import lru_cache
from typing import Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application
    environment: str = Field(default="production", alias="ENVIRONMENT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database (in-memory repositories when unset)
    database_url: Optional[str] = Field(default=None, alias="DATABASE_URL")

    # Anthropic
    anthropic_api_key: Optional[str] = Field(default=None, alias="ANTHROPIC_API_KEY")

    # Storage / shelf-life enrichment
    enrichment_enabled: bool = Field(default=True, alias="ENRICHMENT_ENABLED")
    enrichment_model: str = Field(default="claude-sonnet-4-5", alias="ENRICHMENT_MODEL")
    enrichment_timeout_seconds: float = Field(default=20.0, alias="ENRICHMENT_TIMEOUT_SECONDS")

    # Free-form (recipe / dictation) parsing
    freeform_parsing_enabled: bool = Field(default=True, alias="FREEFORM_PARSING_ENABLED")
    freeform_model: str = Field(default="claude-sonnet-4-5", alias="FREEFORM_MODEL")
    freeform_length_threshold: int = Field(default=100, alias="FREEFORM_LENGTH_THRESHOLD")

    # Knowledge
    seed_knowledge: bool = Field(default=True, alias="SEED_KNOWLEDGE")

    # Monitoring
    metrics_enabled: bool = Field(default=True, alias="METRICS_ENABLED")

    @property
    def enrichment_available(self) -> bool:
        """Enrichment is on and has credentials"""
        return self.enrichment_enabled and bool(self.anthropic_api_key)

    @property
    def freeform_available(self) -> bool:
        """Free-form parsing is on and has credentials"""
        return self.freeform_parsing_enabled and bool(self.anthropic_api_key)

    @validator("log_level")
    def validate_log_level(cls, v):
        """Validate log level"""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    @validator("environment")
    def validate_environment(cls, v):
        """Validate environment"""
        valid_envs = ["development", "staging", "production"]
        if v.lower() not in valid_envs:
            raise ValueError(f"ENVIRONMENT must be one of {valid_envs}")
        return v.lower()


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
