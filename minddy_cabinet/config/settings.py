"""Application settings and configuration."""

from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Cabinet settings, read from the environment and ``.env``."""
    
    model_config = SettingsConfigDict(
        env_prefix="MINDDY_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )
    
    # Backend
    api_url: str = Field(
        default="http://localhost:8081",
        validation_alias=AliasChoices("PUBLIC_API_URL", "MINDDY_API_URL")
    )
    
    # Local session
    session_file: Path = Path("~/.minddy/session.json")
    
    # Telegram
    bot_username: str = "minddy_bot"
    
    # Development login shortcut
    debug: bool = False
    
    # Logging
    log_level: str = "INFO"
    log_json: bool = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
