from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.errors import ConfigurationError
from .core.pairsum import build_registry


DEFAULT_CONFIG_PATH = Path("sumguard.yaml")


class WindowConfig(BaseModel):
    """Window sizing and pair-sum query settings.

    ``validation_threshold`` is normally equal to ``capacity``; it is kept
    separate so query cost can be measured at window sizes other than the
    trust threshold.
    """

    capacity: int = Field(500, ge=0, description="Maximum number of values kept in the window")
    validation_threshold: Optional[int] = Field(
        None, ge=0, description="Window size at which checks begin (defaults to capacity)"
    )
    strategy: str = Field("two_pointer", description="Pair-sum strategy key (see core.pairsum)")
    check_invariants: bool = Field(
        False, description="Verify the window's views agree after every update"
    )

    @field_validator("strategy")
    @classmethod
    def _known_strategy(cls, v: str) -> str:
        if v not in build_registry():
            raise ValueError(f"unknown strategy {v!r}")
        return v

    @property
    def effective_threshold(self) -> int:
        return self.capacity if self.validation_threshold is None else self.validation_threshold


class RuntimeConfig(BaseModel):
    window: WindowConfig = Field(default_factory=WindowConfig)
    input_path: str = Field("challenge_input.txt", description="Input file, one integer per line ('-' for stdin)")
    skip_blank_lines: bool = False


LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class EnvSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"

    @field_validator("LOG_LEVEL")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown log level {v!r} (expected one of {', '.join(LOG_LEVELS)})")
        return level


class AppConfig(BaseModel):
    env: EnvSettings
    runtime: RuntimeConfig

    @staticmethod
    def load(config_path: Optional[Path] = None) -> "AppConfig":
        try:
            env = EnvSettings()  # loads from environment and .env
        except ValidationError as ve:
            raise ConfigurationError(f"Invalid environment settings: {ve}") from ve

        runtime = RuntimeConfig()
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH if DEFAULT_CONFIG_PATH.exists() else None
        elif not Path(config_path).exists():
            raise ConfigurationError(f"config file not found: {config_path}")

        if config_path:
            with open(config_path, "r", encoding="utf-8") as fh:
                raw = yaml.safe_load(fh) or {}
            if not isinstance(raw, dict):
                raise ConfigurationError(f"{config_path}: top level must be a mapping")
            try:
                runtime = RuntimeConfig(**raw)
            except ValidationError as ve:
                raise ConfigurationError(f"Invalid {config_path}: {ve}") from ve

        return AppConfig(env=env, runtime=runtime)


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load merged configuration from environment and optional YAML."""

    return AppConfig.load(config_path)
