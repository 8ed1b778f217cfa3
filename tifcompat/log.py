"""Colored status text for the CLI.

click.echo() removes ANSI styles when stdout is not a terminal, so these
helpers always style; --no-color turns styling off for terminals too.
"""

import click

_styled = True


def set_color_enabled(enabled: bool):
    """Turn styling on or off for all helpers."""
    global _styled
    _styled = enabled


def _style(text: str, **style) -> str:
    return click.style(text, **style) if _styled else text


def cli_success(text: str) -> str:
    """Green text for compatible files."""
    return _style(text, fg='green')


def cli_error(text: str) -> str:
    """Bold red text for incompatible files and open failures."""
    return _style(text, fg='red', bold=True)


def cli_warning(text: str) -> str:
    """Yellow text for failure reasons."""
    return _style(text, fg='yellow')


def cli_dim(text: str) -> str:
    return _style(text, dim=True)
