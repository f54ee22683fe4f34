"""
Common CLI utilities and decorators for consistent command behavior.
"""

import json
import logging
import sys
from functools import wraps
from typing import Iterable, Iterator

import click

from .config import load_config
from .exit_codes import (
    INTERRUPTED,
    CommandError,
    get_exit_code_for_exception,
)
from .infra.git_client import GitClient
from .services.annotation_service import client_from_config
from .wire import format_record

logger = logging.getLogger(__name__)


def handle_errors(func):
    """
    Decorator that provides standard error behavior:
    - Typed command errors exit with their own exit code
    - Other failures exit with the code mapped for their type
    - A diagnostic goes to stderr, stdout stays clean for data
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            click.echo("Interrupted by user", err=True)
            sys.exit(INTERRUPTED)
        except click.ClickException:
            # Click exceptions already have their exit code
            raise
        except CommandError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(e.exit_code)
        except Exception as e:
            logger.debug("Command failed", exc_info=True)
            click.echo(f"Error: command failed: {e}", err=True)
            sys.exit(get_exit_code_for_exception(e))

    return wrapper


def get_config(ctx: click.Context) -> dict:
    """Configuration for this invocation, loaded once per context."""
    obj = ctx.ensure_object(dict)
    if obj.get('config') is None:
        obj['config'] = load_config()
    return obj['config']


def get_git(ctx: click.Context) -> GitClient:
    """Git client for this invocation (tests inject one through ctx.obj)."""
    obj = ctx.ensure_object(dict)
    if obj.get('git') is None:
        obj['git'] = client_from_config(get_config(ctx), obj.get('repo', '.'))
    return obj['git']


def stdin_lines() -> Iterator[str]:
    """Lines of standard input, read lazily."""
    return iter(click.get_text_stream('stdin'))


def echo_records(records: Iterable, as_json: bool = False) -> int:
    """
    Print one record per line; returns the number printed.

    With as_json, each record is printed as a JSON object (JSONL).
    """
    count = 0
    for record in records:
        if as_json:
            click.echo(json.dumps(record.to_dict(), ensure_ascii=False))
        else:
            click.echo(format_record(record))
        count += 1
    return count
