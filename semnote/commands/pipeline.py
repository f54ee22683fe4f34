"""
Pipeline commands for semnote.

Filters that read records on stdin and write records on stdout, so
they compose in shell pipelines:

    semnote notes | semnote squash | semnote versions 1.2.3 | semnote tags --apply
"""

import json

import click

from ..cli_utils import echo_records, get_config, get_git, handle_errors, stdin_lines
from ..exit_codes import PartialSuccessError
from ..pipeline import squash, squeeze, tag_intents, versions
from ..services.tag_service import TagService
from ..wire import read_annotated, read_versioned


@click.command('squash')
@handle_errors
def squash_cmd():
    """Reduce annotated records to the most severe change.

    Prints a single record: the last revision read, with the highest
    classification seen. Prints nothing for empty input.
    """
    echo_records(squash(read_annotated(stdin_lines())))


@click.command('squeeze')
@click.argument('direction', required=False)
@handle_errors
def squeeze_cmd(direction):
    """Keep one record per run of equal classifications.

    DIRECTION is "down" (keep the first record of each run) or "up"
    (keep the last).
    """
    # Parse the direction before reading stdin
    entries = squeeze(read_annotated(stdin_lines()), direction)
    echo_records(entries)


@click.command('versions')
@click.argument('initial', required=False)
@click.option('--json', 'json_output', is_flag=True, help='Output as JSONL')
@handle_errors
def versions_cmd(initial, json_output):
    """Turn annotated records into versioned records.

    Starts from INITIAL (default 0.0.0) and prints
    "<revision> <major.minor.patch>" for every record read.
    """
    echo_records(versions(read_annotated(stdin_lines()), initial), as_json=json_output)


def _output_json(service: TagService, lines) -> None:
    """JSONL output: one object per tag, then the run summary."""
    for _ in lines:
        pass

    result = service.last_result
    if result:
        for detail in result.details:
            click.echo(json.dumps(detail.to_dict()))
        click.echo(json.dumps(result.to_dict()))


@click.command('tags')
@click.option('--apply', 'apply', is_flag=True, help='Create the tags instead of printing them')
@click.option('--stop-on-error', is_flag=True,
              help='Stop at the first tag that cannot be created')
@click.option('--json', 'json_output', is_flag=True,
              help='Output one JSON object per tag, then a summary')
@click.pass_context
@handle_errors
def tags_cmd(ctx, apply, stop_on_error, json_output):
    """Tag revisions with the versions read on stdin.

    Without --apply, prints the git tag commands that would run. With
    --apply, creates each tag; a tag that cannot be created is reported
    as a warning and the rest are still created.

    \b
    Examples:
        semnote notes | semnote versions 1.2.3 | semnote tags
        semnote notes | semnote versions 1.2.3 | semnote tags --apply --json
    """
    service = TagService(config=get_config(ctx), git_client=get_git(ctx))
    options = service.options(apply=apply)
    if stop_on_error:
        options.continue_on_error = False

    intents = tag_intents(read_versioned(stdin_lines()))
    lines = service.create_tags(intents, options)
    if json_output:
        _output_json(service, lines)
    else:
        for line in lines:
            click.echo(line)

    result = service.last_result
    if result is not None and not result.success:
        raise PartialSuccessError(
            f"{result.failed} of {result.total} tags could not be created",
            succeeded=result.successful,
            failed=result.failed,
        )
