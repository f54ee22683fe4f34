"""
Delta command for semnote.

Reports the version a range of history moves from and to.
"""

import json

import click
from rich.console import Console
from rich.table import Table

from ..cli_utils import get_config, get_git, handle_errors
from ..domain.version import DeltaResult
from ..services.delta_service import DeltaService


def _render_table(result: DeltaResult) -> None:
    table = Table(title="Version delta", show_header=True)
    table.add_column("Old", style="cyan")
    table.add_column("New", style="green" if result.changed else "dim")
    table.add_column("Notes", justify="right")
    table.add_column("Mode")
    table.add_row(
        str(result.old),
        str(result.new),
        str(result.entries),
        "squash" if result.squashed else "accumulate",
    )
    Console().print(table)


@click.command('delta')
@click.argument('target', default='HEAD', required=False)
@click.argument('base', required=False)
@click.argument('namespace', required=False)
@click.option('--squash', is_flag=True, help='Apply only the most severe change in the range')
@click.option('--json', 'json_output', is_flag=True, help='Output as JSON')
@click.option('--pretty', is_flag=True, help='Display as formatted table')
@click.pass_context
@handle_errors
def delta_cmd(ctx, target, base, namespace, squash, json_output, pretty):
    """Show the old and new version for BASE..TARGET.

    The old version is the nearest version tag reachable from BASE
    (0.0.0 if there is none). By default every note bumps the version
    in turn; with --squash only the most severe note counts.

    \b
    Examples:
        semnote delta
        semnote delta --squash
        semnote delta HEAD 1.2.0 --json
    """
    service = DeltaService(config=get_config(ctx), git_client=get_git(ctx))
    result = service.delta(target, base, namespace, squash=squash)

    if json_output:
        click.echo(json.dumps(result.to_dict(), ensure_ascii=False))
    elif pretty:
        _render_table(result)
    else:
        click.echo(f"{result.old} {result.new}")
