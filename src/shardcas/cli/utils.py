"""Shared helpers for CLI commands."""

from pathlib import Path

import typer

from ..core.config import ShardCASConfig
from ..errors import ConfigError
from ..services.storage import ShardedFileStore
from .display import error, info


def get_config_or_exit() -> ShardCASConfig:
    """Get config instance or exit with a helpful message.

    Raises:
        typer.Exit: If the configuration file is invalid
    """
    try:
        return ShardCASConfig.get_instance()
    except ConfigError as e:
        error(f"Error: {e}")
        info("Fix the file or run 'shardcas config init' to recreate it")
        raise typer.Exit(1)


def resolve_root(root: Path | None) -> Path:
    """Resolve store root from parameter or config."""
    if root is not None:
        return root
    return get_config_or_exit().store.root_dir


def open_store(root: Path | None) -> ShardedFileStore:
    """Open the filesystem store at --root or the configured root."""
    return ShardedFileStore(resolve_root(root))
