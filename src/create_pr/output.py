"""User-facing output helpers.

Diagnostics and progress go to stderr so that stdout carries only results
(the PR URL), which keeps `create-pr` usable in command substitution.
"""

import click


def user_output(message: str = "") -> None:
    """Write a message for the user to stderr."""
    click.echo(message, err=True)


def machine_output(message: str) -> None:
    """Write a result to stdout."""
    click.echo(message)


def error_output(message: str) -> None:
    """Write an error message prefixed with a red 'Error: ' to stderr."""
    user_output(click.style("Error: ", fg="red") + message)


def warning_output(message: str) -> None:
    """Write a warning message prefixed with a yellow 'Warning: ' to stderr."""
    user_output(click.style("Warning: ", fg="yellow") + message)
