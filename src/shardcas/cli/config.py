"""Configuration management CLI commands."""

import typer
from pydantic import ValidationError
from rich.syntax import Syntax

from ..core.config import ShardCASConfig
from ..errors import ConfigError
from .display import console, error, info, section, success, warning
from .utils import get_config_or_exit

app = typer.Typer(help="Manage shardcas configuration")


@app.command()
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
):
    """Write a configuration file with default values.

    Creates ~/.shardcas/config.yaml.
    """
    config_path = ShardCASConfig.get_config_path()
    if config_path.exists() and not force:
        warning(f"{config_path} already exists (use --force to overwrite)")
        raise typer.Exit(0)

    ShardCASConfig().save()
    ShardCASConfig.reset()
    success(f"Configuration saved to {config_path}")


@app.command()
def show():
    """Display current configuration, including environment overrides."""
    config = get_config_or_exit()

    syntax = Syntax(config.to_yaml_string(), "yaml", theme="monokai", line_numbers=False)
    section(f"Configuration from {ShardCASConfig.get_config_path()}")
    console.print(syntax)


@app.command(name="set")
def set_value(
    key: str = typer.Argument(..., help="Configuration key (e.g., store.root_dir, logging.level)"),
    value: str = typer.Argument(..., help="Value to set"),
):
    """Set a configuration value.

    Examples:
        shardcas config set store.root_dir /data/objects
        shardcas config set logging.level DEBUG
    """
    parts = key.split(".")
    if len(parts) != 2:
        error(f"Invalid key format: {key}")
        info("Use format: section.field (e.g., store.root_dir)")
        raise typer.Exit(1)

    section_name, field = parts

    # Edit the file contents, not the env-overridden instance
    try:
        config = ShardCASConfig.load()
    except ConfigError as e:
        error(f"Error: {e}")
        info("Run 'shardcas config init --force' to recreate it")
        raise typer.Exit(1)

    if section_name not in ShardCASConfig.model_fields:
        error(f"Unknown configuration section: {section_name}")
        info(f"Valid sections: {', '.join(ShardCASConfig.model_fields)}")
        raise typer.Exit(1)

    section_obj = getattr(config, section_name)
    if field not in type(section_obj).model_fields:
        error(f"Unknown field '{field}' in section '{section_name}'")
        info(f"Valid fields: {', '.join(type(section_obj).model_fields)}")
        raise typer.Exit(1)

    data = section_obj.model_dump()
    data[field] = value
    try:
        setattr(config, section_name, type(section_obj)(**data))
    except ValidationError as e:
        error(f"Invalid value for {key}: {e.errors()[0]['msg']}")
        raise typer.Exit(1)

    config.save()
    ShardCASConfig.reset()
    success(f"Set {key} = {value}")
