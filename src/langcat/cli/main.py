"""Main CLI entry point for langcat."""

import click
from .commands.policy import enable, disable, toggle
from .commands.show import show, decide
from .commands.version import version
from ..utils.logging import setup_logging
from .. import __version__


@click.group()
@click.version_option(version=__version__, prog_name="langcat", message="%(prog)s version %(version)s")
@click.option('--config', '-c', 'config_path', type=click.Path(exists=True, dir_okay=False), help='Config YAML layered over the defaults')
@click.option('--log-level', default="WARNING", show_default=True, help='Logging level')
@click.pass_context
def cli(ctx, config_path, log_level):
    """langcat - per-identity translation category gating."""
    setup_logging(log_level)
    ctx.ensure_object(dict)
    ctx.obj["config"] = config_path


cli.add_command(enable)
cli.add_command(disable)
cli.add_command(toggle)
cli.add_command(show)
cli.add_command(decide)
cli.add_command(version)
