#!/usr/bin/env python3

import click

from semnote import __version__
from semnote.cli_utils import get_config, handle_errors
from semnote.config import configure_logging
from semnote.commands.notes import notes_cmd, new_cmd, undo_cmd, fetch_cmd, push_cmd
from semnote.commands.pipeline import squash_cmd, squeeze_cmd, versions_cmd, tags_cmd
from semnote.commands.delta import delta_cmd


@click.group()
@click.version_option(__version__, prog_name="semnote")
@click.option('-C', '--repo', 'repo', default='.', type=click.Path(file_okay=False),
              help='Run as if started in this repository directory')
@click.option('-v', '--verbose', is_flag=True, help='Show debug logging on stderr')
@click.pass_context
@handle_errors
def cli(ctx, repo, verbose):
    """semnote - Semantic versions from git notes.

    Classify revisions with notes (MAJOR, MINOR, PATCH), then turn the
    notes into versions and tags. Commands exchange one
    "<revision> <value>" record per line and compose in pipelines:

    \b
        semnote new minor
        semnote notes | semnote squash | semnote versions 1.2.3 | semnote tags --apply
        semnote delta --squash
    """
    obj = ctx.ensure_object(dict)
    obj.setdefault('repo', repo)
    configure_logging(get_config(ctx), verbose=verbose)


@click.command('version')
def version_cmd():
    """Show the semnote version."""
    click.echo(__version__)


@click.command('help')
@click.pass_context
def help_cmd(ctx):
    """Show this help."""
    click.echo(ctx.parent.get_help())


# Note commands
cli.add_command(notes_cmd)
cli.add_command(new_cmd)
cli.add_command(undo_cmd)
cli.add_command(fetch_cmd)
cli.add_command(push_cmd)

# Pipeline filters
cli.add_command(squash_cmd)
cli.add_command(squeeze_cmd)
cli.add_command(versions_cmd)
cli.add_command(tags_cmd)
cli.add_command(delta_cmd)

cli.add_command(version_cmd)
cli.add_command(help_cmd)


def main():
    cli()

if __name__ == "__main__":
    main()
