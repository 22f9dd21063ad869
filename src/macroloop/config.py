"""Configuration management for macroloop."""

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="MACROLOOP_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Log level")
    log_profile: Literal["default", "console"] = Field(default="default", description="Log output profile")

    # Session Configuration
    echo_verbose_level: int = Field(default=2, description="Executor verbose level at which comment lines are echoed")

    # Executor Configuration
    executor: Literal["echo", "shell"] = Field(default="echo", description="Executor used by the CLI")
    verbose_level: int = Field(default=0, description="Verbose level reported by the bundled executors")
    shell_cwd: Optional[Path] = Field(None, description="Working directory for the shell executor")


def get_settings(**overrides: object) -> Settings:
    """Get application settings.

    Args:
        overrides: Values taking precedence over the environment and ``.env``

    Returns:
        Settings instance
    """
    return Settings(**overrides)
