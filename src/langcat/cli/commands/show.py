"""Show and decide commands - inspect an identity's policy."""

import json
import click
import sys
from ...policy.engine import decide as decide_policy
from ...utils.errors import LangCatError
from ..utils import run_with_gate, format_error


@click.command()
@click.argument('identity')
@click.option('--json', 'json_output', is_flag=True, help='Output structured JSON')
@click.pass_context
def show(ctx, identity, json_output):
    """Show the mode and category set of an identity."""
    try:
        pol = run_with_gate(ctx.obj.get("config"), lambda gate: gate.show(identity))
    except LangCatError as e:
        click.echo(format_error(str(e)), err=True)
        sys.exit(1)

    if json_output:
        click.echo(json.dumps({"identity": identity, "mode": pol.mode.value, "cats": pol.sorted_cats()}, indent=2))
    else:
        click.echo(f"Mode: {pol.mode.value}")
        click.echo(f"Set:  [{', '.join(pol.sorted_cats())}]")


@click.command()
@click.argument('identity')
@click.argument('category', required=False)
@click.pass_context
def decide(ctx, identity, category):
    """Print allow or deny for a category (exit 0 = allow, 3 = deny)."""
    try:
        pol = run_with_gate(ctx.obj.get("config"), lambda gate: gate.show(identity))
    except LangCatError as e:
        click.echo(format_error(str(e)), err=True)
        sys.exit(1)

    allowed = decide_policy(pol, category)
    click.echo("allow" if allowed else "deny")
    sys.exit(0 if allowed else 3)
