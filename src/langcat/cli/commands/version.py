"""Version command - show langcat version."""

import click
from ... import __version__


@click.command()
def version():
    """Show langcat version."""
    click.echo(f"langcat version {__version__}")
