"""Common Typer options shared across CLI commands."""

import typer


def root_option(help_text: str = "Object store root (default: from config)") -> typer.Option:
    """Create a standard store root option.

    Args:
        help_text: Custom help text

    Returns:
        Configured Typer Option
    """
    return typer.Option(
        None,
        "--root",
        "-r",
        help=help_text,
        file_okay=False,
        dir_okay=True,
    )


def input_files_argument() -> typer.Argument:
    """Create a required list-of-files argument."""
    return typer.Argument(
        ...,
        help="Files to read",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    )


__all__ = ["root_option", "input_files_argument"]
