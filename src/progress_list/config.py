"""
Configuration management for progress-list.

Handles:
- Config file location from the PROGRESS_LIST_CONFIG environment variable
- YAML loading and saving
- Defaults for lists created through ProgressList.from_config()
"""

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator

CONFIG_ENV_VAR = "PROGRESS_LIST_CONFIG"


class ProgressListConfig(BaseModel):
    """Settings for a single ProgressList."""
    max_progress: int = Field(
        default=100,
        ge=1,
        description="Total progress scale, e.g. 100 for percent.",
    )
    fixed_step_weight: bool = Field(
        default=False,
        description="Compute the per-step increment once at the start of a run "
                    "instead of from the live number of steps.",
    )
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level


class Config(BaseModel):
    """Main configuration model."""
    progress: ProgressListConfig = Field(default_factory=ProgressListConfig)


class ConfigManager:
    """Manages configuration loading and access."""

    def __init__(self, config_path: Optional[Path] = None):
        self._config: Optional[Config] = None
        self._config_path = config_path

    @property
    def config_path(self) -> Optional[Path]:
        """Get the config file path (explicit path wins over the environment)."""
        if self._config_path is not None:
            return self._config_path
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            return Path(env_path)
        return None

    def load(self) -> Config:
        """Load configuration from file, or return defaults."""
        if self._config is not None:
            return self._config

        if self.config_path and self.config_path.exists():
            with open(self.config_path, 'r') as f:
                data = yaml.safe_load(f) or {}
            self._config = Config(**data)
        else:
            self._config = Config()

        return self._config

    def save(self, config: Config) -> None:
        """Save configuration to file."""
        if self.config_path is None:
            raise ValueError(f"Cannot save config: {CONFIG_ENV_VAR} is not set")

        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.config_path, 'w') as f:
            yaml.dump(config.model_dump(), f, default_flow_style=False, sort_keys=False)

        self._config = config

    def reload(self) -> Config:
        """Drop the cached config and read it again."""
        self._config = None
        return self.load()

    @property
    def config(self) -> Config:
        """Get the current configuration (loads if needed)."""
        return self.load()


# Global config manager instance
config_manager = ConfigManager()
