"""User-facing output helpers."""

from typing import Any

import click


def user_output(message: Any = "", nl: bool = True) -> None:
    """Write a diagnostic message for the user to stderr."""
    click.echo(message, nl=nl, err=True)
