"""
Note commands for semnote.

Reading, writing and syncing the change notes that drive versioning:
notes, new, undo, fetch and push.
"""

import click

from ..cli_utils import echo_records, get_config, get_git, handle_errors
from ..services.annotation_service import AnnotationService
from ..wire import format_record


def _service(ctx: click.Context) -> AnnotationService:
    return AnnotationService(config=get_config(ctx), git_client=get_git(ctx))


@click.command('notes')
@click.argument('target', default='HEAD', required=False)
@click.argument('base', required=False)
@click.argument('namespace', required=False)
@click.option('--json', 'json_output', is_flag=True, help='Output as JSONL')
@click.pass_context
@handle_errors
def notes_cmd(ctx, target, base, namespace, json_output):
    """List annotated revisions between BASE and TARGET.

    Prints one "<revision> <MAJOR|MINOR|PATCH>" line per revision whose
    note is a change classification, oldest first. BASE defaults to the
    nearest version tag before TARGET.

    \b
    Examples:
        semnote notes
        semnote notes HEAD 1.2.0
        semnote notes main 1.2.0 release
        semnote notes --json | jq -r .revision
    """
    echo_records(_service(ctx).entries(target, base, namespace), as_json=json_output)


@click.command('new')
@click.argument('change', required=False)
@click.argument('revision', default='HEAD', required=False)
@click.argument('namespace', required=False)
@click.pass_context
@handle_errors
def new_cmd(ctx, change, revision, namespace):
    """Record a change on REVISION (default: HEAD).

    CHANGE is one of major, minor or patch. An existing note in the
    namespace is replaced.

    \b
    Examples:
        semnote new minor
        semnote new major abc1234
    """
    entry = _service(ctx).annotate(change, revision, namespace)
    click.echo(format_record(entry))


@click.command('undo')
@click.argument('revision', default='HEAD', required=False)
@click.argument('namespace', required=False)
@click.pass_context
@handle_errors
def undo_cmd(ctx, revision, namespace):
    """Remove the change note from REVISION (default: HEAD)."""
    if not _service(ctx).undo(revision, namespace):
        click.echo(f"No note on {revision}", err=True)


@click.command('fetch')
@click.argument('remote', required=False)
@click.argument('namespace', required=False)
@click.pass_context
@handle_errors
def fetch_cmd(ctx, remote, namespace):
    """Fetch the notes ref from REMOTE (default: origin)."""
    output = _service(ctx).fetch(remote, namespace)
    if output:
        click.echo(output, err=True)


@click.command('push')
@click.argument('remote', required=False)
@click.argument('namespace', required=False)
@click.pass_context
@handle_errors
def push_cmd(ctx, remote, namespace):
    """Push the notes ref to REMOTE (default: origin)."""
    output = _service(ctx).push(remote, namespace)
    if output:
        click.echo(output, err=True)
