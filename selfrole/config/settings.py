"""
Application settings and configuration management.

Uses Pydantic Settings for validation and environment variable support.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ROLE_ALIASES: dict[str, str] = {
    "frontend": "Frontend Developer",
    "backend": "Backend Developer",
    "fullstack": "Fullstack Developer",
    "mobile": "Mobile Developer",
    "student": "Student",
}


class BotSettings(BaseSettings):
    """Discord bot configuration."""

    name: str = Field(default="SelfRole", description="Bot display name")
    command_prefix: str = Field(default=".", description="Prefix for text commands")
    token: str = Field(default="", description="Discord bot token")
    command_channel_id: int | None = Field(
        default=None,
        description="Channel where .iam / .iamnot / .help are recognized. "
                    "If unset, every command is ignored. "
                    "Set via BOT__COMMAND_CHANNEL_ID=123456",
    )

    model_config = SettingsConfigDict(env_prefix="BOT_")

    @field_validator("command_prefix")
    @classmethod
    def _prefix_not_blank(cls, value: str) -> str:
        if not value or value.isspace():
            raise ValueError("command_prefix must be a non-blank string")
        return value


class RoleSettings(BaseSettings):
    """Self-assignable role configuration."""

    aliases: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_ROLE_ALIASES),
        description="Short alias -> role display name. "
                    "Set via ROLES__ALIASES='{\"frontend\": \"Frontend Developer\"}'",
    )

    model_config = SettingsConfigDict(env_prefix="ROLES_")

    @field_validator("aliases")
    @classmethod
    def _normalize_aliases(cls, value: dict[str, str]) -> dict[str, str]:
        if not value:
            raise ValueError("at least one role alias must be configured")

        normalized: dict[str, str] = {}
        for key, display_name in value.items():
            short = " ".join(key.split()).lower()
            if not short:
                raise ValueError("role alias keys must not be blank")
            if not display_name.strip():
                raise ValueError(f"role alias {key!r} has a blank display name")
            if short in normalized:
                raise ValueError(f"duplicate role alias {short!r}")
            normalized[short] = display_name.strip()
        return normalized


class Settings(BaseSettings):
    """Main application settings."""

    # Environment
    environment: Literal["development", "production"] = Field(
        default="development", description="Deployment environment"
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    log_file: Path | None = Field(default=None, description="Log file path")

    # Sub-configurations
    bot: BotSettings = Field(default_factory=BotSettings)
    roles: RoleSettings = Field(default_factory=RoleSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def load_settings(env_file: str | Path | None = None) -> Settings:
    """
    Load settings from file and environment.

    Args:
        env_file: Path to .env file (optional)

    Returns:
        Loaded settings instance
    """
    global _settings
    if env_file:
        _settings = Settings(_env_file=env_file)
    else:
        _settings = Settings()
    return _settings
