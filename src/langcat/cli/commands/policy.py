"""Policy commands - enable, disable and toggle categories for an identity."""

import click
import sys
from ...policy.engine import describe
from ...utils.errors import LangCatError
from ...utils.logging import get_logger
from ..utils import run_with_gate, format_error

logger = get_logger("cli.policy")


def _done(identity: str, message: str) -> None:
    click.echo(f"[LangCategory] {identity}: {message}")


def _subcommand(what: str, category: str, command: str) -> str:
    """Lowercased first word; exits with usage help when ``only`` lacks a category."""
    word = what.lower()
    if word == "only" and not category:
        click.echo(format_error("Missing category", f"langcat {command} IDENTITY only CATEGORY"), err=True)
        sys.exit(2)
    return word


def _apply(ctx, identity, action):
    """Run one mutation against the configured store, exiting 1 on failure."""
    try:
        return run_with_gate(ctx.obj.get("config"), action, mutates=True)
    except LangCatError as e:
        click.echo(format_error(str(e)), err=True)
        sys.exit(1)
    except Exception as e:
        logger.error(f"Unexpected error updating policy for {identity}: {e}", exc_info=True)
        click.echo(format_error(f"Policy update failed: {e}"), err=True)
        sys.exit(1)


@click.command()
@click.argument('identity')
@click.argument('what')
@click.argument('category', required=False)
@click.pass_context
def enable(ctx, identity, what, category):
    """Enable a category, or: all | only CATEGORY."""
    word = _subcommand(what, category, "enable")

    if word == "all":
        pol = _apply(ctx, identity, lambda gate: gate.enable_all(identity))
        _done(identity, f"Enabled all categories (mode={pol.mode.value}).")
    elif word == "only":
        pol = _apply(ctx, identity, lambda gate: gate.enable_only(identity, category))
        _done(identity, f"Enabled only: {category.lower()} (mode={pol.mode.value}).")
    else:
        pol = _apply(ctx, identity, lambda gate: gate.enable(identity, word))
        _done(identity, f"Enabled category: {word} (mode={pol.mode.value}).")


@click.command()
@click.argument('identity')
@click.argument('what')
@click.argument('category', required=False)
@click.pass_context
def disable(ctx, identity, what, category):
    """Disable a category, or: all | only CATEGORY."""
    word = _subcommand(what, category, "disable")

    if word == "all":
        pol = _apply(ctx, identity, lambda gate: gate.disable_all(identity))
        _done(identity, f"Disabled all categories (mode={pol.mode.value}).")
    elif word == "only":
        pol = _apply(ctx, identity, lambda gate: gate.disable_only(identity, category))
        _done(identity, f"Disabled only: {category.lower()} (mode={pol.mode.value}, all others enabled).")
    else:
        pol = _apply(ctx, identity, lambda gate: gate.disable(identity, word))
        _done(identity, f"Disabled category: {word} (mode={pol.mode.value}).")


@click.command()
@click.argument('identity')
@click.argument('category')
@click.pass_context
def toggle(ctx, identity, category):
    """Flip a single category between allowed and blocked."""
    pol = _apply(ctx, identity, lambda gate: gate.toggle(identity, category))
    _done(identity, f"Toggled category: {category.lower()} ({describe(pol)})")
