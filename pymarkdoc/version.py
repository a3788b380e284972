"""
Version information for pymarkdoc.
"""

from importlib import metadata

import click


def print_version(version: str) -> None:
    """Print the version the package was built with.

    Falls back to the installed distribution metadata when no version was
    provided, and to ``<unknown>`` when there is none either.
    """
    if version:
        click.echo(version)
        return

    try:
        click.echo(metadata.version("pymarkdoc"))
    except metadata.PackageNotFoundError:
        click.echo("<unknown>")
