"""
Version pipeline stages for semnote.

Every stage is a pure, single-pass transformation over an ordered
iterable and never reorders its input:

    squash    - reduce annotated entries to the most severe change
    squeeze   - keep one entry per run of equal classifications
    versions  - fold annotated entries into a running version history
    tag_intents - map versioned entries to the tags they imply

Example:
    entries = [AnnotatedEntry("c1", PATCH), AnnotatedEntry("c2", MINOR)]
    list(versions(entries, "1.2.3"))
    # [VersionedEntry("c1", 1.2.4), VersionedEntry("c2", 1.3.0)]
"""

from functools import reduce
from itertools import groupby
from operator import attrgetter
from typing import Iterable, Iterator, List, Optional, Union

from .domain.change import AnnotatedEntry, Direction
from .domain.version import SemanticVersion, TagIntent, VersionedEntry


def _fold_severity(acc: Optional[AnnotatedEntry], entry: AnnotatedEntry) -> AnnotatedEntry:
    if acc is None:
        return entry
    change = max(acc.change, entry.change, key=attrgetter('precedence'))
    return AnnotatedEntry(revision=entry.revision, change=change)


def squash(entries: Iterable[AnnotatedEntry]) -> List[AnnotatedEntry]:
    """
    Reduce entries to at most one.

    The result carries the most severe classification found anywhere in
    the input, and the revision of the *last* input entry, whichever
    entry carried that classification.

    Args:
        entries: Annotated entries, oldest first

    Returns:
        Empty list for empty input, otherwise a single entry
    """
    result = reduce(_fold_severity, entries, None)
    return [] if result is None else [result]


def squeeze(
    entries: Iterable[AnnotatedEntry],
    direction: Union[Direction, str, None]
) -> Iterator[AnnotatedEntry]:
    """
    Collapse runs of consecutive equal classifications.

    Args:
        entries: Annotated entries, oldest first
        direction: DOWN keeps the first entry of each run, UP the last

    Yields:
        One representative per run, in input order

    Raises:
        ArgumentError: If direction is missing or unrecognized
    """
    # Validate before the generator starts so bad directions fail at call time
    direction = Direction.parse(direction)
    return _squeeze(entries, direction)


def _squeeze(entries: Iterable[AnnotatedEntry], direction: Direction) -> Iterator[AnnotatedEntry]:
    for _, run in groupby(entries, key=attrgetter('change')):
        if direction is Direction.DOWN:
            yield next(run)
        else:
            last = None
            for last in run:
                pass
            yield last


def versions(
    entries: Iterable[AnnotatedEntry],
    initial: Union[SemanticVersion, str, None] = None
) -> Iterator[VersionedEntry]:
    """
    Fold annotated entries into a running version history.

    Every entry bumps the version once (MAJOR resets minor and patch,
    MINOR resets patch) and yields the version reached at its revision.

    Args:
        entries: Annotated entries, oldest first
        initial: Starting version, version string, or None for 0.0.0

    Yields:
        One VersionedEntry per input entry

    Raises:
        FormatError: If initial is a malformed version string
    """
    start = SemanticVersion.coerce(initial)
    return _accumulate(entries, start)


def _accumulate(entries: Iterable[AnnotatedEntry], version: SemanticVersion) -> Iterator[VersionedEntry]:
    for entry in entries:
        version = version.bump(entry.change)
        yield VersionedEntry(revision=entry.revision, version=version)


def tag_intents(entries: Iterable[VersionedEntry]) -> Iterator[TagIntent]:
    """Map each versioned entry to the tag it implies."""
    for entry in entries:
        yield TagIntent.from_entry(entry)


def latest_version(
    entries: Iterable[VersionedEntry],
    default: SemanticVersion
) -> SemanticVersion:
    """Return the version of the last entry, or default when there is none."""
    last = reduce(lambda _, entry: entry, entries, None)
    return default if last is None else last.version
