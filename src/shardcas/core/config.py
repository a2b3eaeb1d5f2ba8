"""shardcas configuration management.

Configuration lives in ~/.shardcas/config.yaml. Unlike commands that need
an explicit setup step, every setting has a default, so a missing file
simply means "use the defaults". Environment variables override the file:

- SHARDCAS_ROOT: object store root directory
- SHARDCAS_LOG_LEVEL: log level for CLI output
"""

import logging
import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..errors import ConfigError
from .config_base import ConfigModel

logger = logging.getLogger(__name__)

ROOT_ENV_VAR = "SHARDCAS_ROOT"
LOG_LEVEL_ENV_VAR = "SHARDCAS_LOG_LEVEL"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _default_root() -> Path:
    from . import paths

    return paths.DEFAULT_STORE_ROOT


class StoreConfig(BaseModel):
    """Object store settings.

    The CLI always stores on the local filesystem; unknown keys are rejected
    rather than ignored.
    """

    model_config = ConfigDict(extra="forbid")

    root_dir: Path = Field(default_factory=_default_root)
    """Directory objects are stored under."""


class LoggingConfig(BaseModel):
    """Logging settings."""

    level: str = "WARNING"
    """Log level name."""

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level '{v}'. Must be one of: {', '.join(LOG_LEVELS)}")
        return level


class ShardCASConfig(ConfigModel):
    """Main configuration model for shardcas."""

    store: StoreConfig = Field(default_factory=StoreConfig)
    """Object store settings."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    """Logging settings."""

    @classmethod
    def get_instance(cls) -> "ShardCASConfig":
        """Get cached instance or load from file.

        The file is read once per session; environment overrides are applied
        on top of it.

        Returns:
            Cached ShardCASConfig instance

        Raises:
            ConfigError: If the configuration file exists but is invalid
        """
        if not hasattr(cls, "_cached_instance") or cls._cached_instance is None:
            config = cls.load()
            config.apply_env_overrides()
            cls._cached_instance = config
        return cls._cached_instance

    @classmethod
    def reset(cls):
        """Reset cached instance (useful for testing or forcing reload)."""
        if hasattr(cls, "_cached_instance"):
            cls._cached_instance = None

    @classmethod
    def load(cls) -> "ShardCASConfig":
        """Load configuration from file, or defaults if there is none."""
        config_path = cls.get_config_path()
        if not config_path.exists():
            logger.debug(f"No configuration at {config_path}, using defaults")
            return cls()
        return cls.from_yaml(config_path)

    def apply_env_overrides(self) -> None:
        """Apply SHARDCAS_* environment variable overrides in place."""
        root = os.environ.get(ROOT_ENV_VAR)
        if root:
            self.store.root_dir = Path(root)
        level = os.environ.get(LOG_LEVEL_ENV_VAR)
        if level:
            try:
                self.logging = LoggingConfig(level=level)
            except ValidationError as e:
                raise ConfigError(f"Invalid {LOG_LEVEL_ENV_VAR}: {level}") from e

    @staticmethod
    def get_config_path() -> Path:
        """Get the configuration file path.

        Returns:
            Path to ~/.shardcas/config.yaml
        """
        from . import paths

        return paths.CONFIG_FILE

    def save(self) -> None:
        """Save configuration to ~/.shardcas/config.yaml.

        Creates the .shardcas directory if it doesn't exist.
        """
        config_path = self.get_config_path()
        config_path.parent.mkdir(parents=True, exist_ok=True)
        self.to_yaml(config_path)
