"""
Line-oriented record format used between semnote commands.

One record per line, two fields separated by a single space:

    <revision> MAJOR|MINOR|PATCH       (annotated records)
    <revision> <major>.<minor>.<patch> (versioned records)

This keeps the commands composable in shell pipelines:

    semnote notes | semnote squash | semnote versions 1.2.3 | semnote tags
"""

from typing import Callable, Iterable, Iterator, Tuple, TypeVar

from .domain.change import AnnotatedEntry, Classification
from .domain.version import SemanticVersion, VersionedEntry
from .exit_codes import FormatError

T = TypeVar('T')


def parse_record(line: str, parse_value: Callable[[str], T], lineno: int = 0) -> Tuple[str, T]:
    """
    Split one record into its revision and parsed value.

    The two fields must be separated by exactly one space; tabs,
    repeated spaces and surrounding whitespace are rejected.

    Raises:
        FormatError: If the line does not have exactly two fields or
            the value does not parse
    """
    record = line.rstrip("\r\n")
    fields = record.split(" ")
    if len(fields) != 2 or not all(fields):
        raise FormatError(f"Line {lineno}: expected '<revision> <value>', got {record!r}")
    revision, token = fields
    try:
        return revision, parse_value(token)
    except FormatError as e:
        raise FormatError(f"Line {lineno}: {e}") from None


def _read(lines: Iterable[str], build: Callable[[str], T]) -> Iterator[T]:
    for lineno, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        yield build(line, lineno)


def read_annotated(lines: Iterable[str]) -> Iterator[AnnotatedEntry]:
    """Parse annotated records, skipping blank lines."""
    def build(line, lineno):
        revision, change = parse_record(line, Classification.parse, lineno)
        return AnnotatedEntry(revision=revision, change=change)
    return _read(lines, build)


def read_versioned(lines: Iterable[str]) -> Iterator[VersionedEntry]:
    """Parse versioned records, skipping blank lines."""
    def build(line, lineno):
        revision, version = parse_record(line, SemanticVersion.parse, lineno)
        return VersionedEntry(revision=revision, version=version)
    return _read(lines, build)


def format_record(entry) -> str:
    """Render an AnnotatedEntry or VersionedEntry as a record line."""
    return str(entry)
