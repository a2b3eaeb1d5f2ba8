"""shardcas CLI entry point."""

from typing import Optional

import typer

from ..core.config import LOG_LEVELS, ShardCASConfig
from ..core.logging_setup import configure_logging
from ..errors import ConfigError
from . import config as config_cli
from . import objects
from .display import error, info, warning

# Create main CLI app
app = typer.Typer(
    name="shardcas",
    help="Content-addressable object store on a sharded directory tree",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


@app.callback()
def setup(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", "-l", help="Log level (default: from config)"
    ),
):
    """Configure logging before any command runs."""
    if log_level is None:
        try:
            log_level = ShardCASConfig.get_instance().logging.level
        except ConfigError:
            # Leave room for 'config init --force' to repair the file
            log_level = "WARNING"
    if log_level.upper() not in LOG_LEVELS:
        raise typer.BadParameter(f"must be one of: {', '.join(LOG_LEVELS)}", param_hint="--log-level")
    configure_logging(log_level)


# Object commands
app.command(name="put")(objects.put)
app.command(name="put-text")(objects.put_text)
app.command(name="get")(objects.get)
app.command(name="hash")(objects.hash_files)
app.command(name="path")(objects.path)
app.command(name="ls")(objects.ls)
app.command(name="verify")(objects.verify)

# Utility commands
app.add_typer(
    config_cli.app,
    name="config",
    help="⚙️ Configure shardcas settings",
)


@app.command()
def version():
    """Show shardcas version."""
    from .. import __version__
    info(f"shardcas version: {__version__}")


def main():
    """Main CLI entry point."""
    try:
        app()
    except KeyboardInterrupt:
        warning("\nInterrupted by user")
        raise SystemExit(1)
    except Exception as e:
        error(f"Error: {e}")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
