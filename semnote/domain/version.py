"""
Semantic version domain objects for semnote.

SemanticVersion is an immutable (major, minor, patch) triple ordered
lexicographically. Bumping returns a new value:

    SemanticVersion.parse("1.2.3").bump(Classification.MINOR)  -> 1.3.0
"""

import re
from dataclasses import dataclass
from typing import ClassVar, Optional, Union

from .change import Classification
from ..exit_codes import FormatError

_VERSION_RE = re.compile(r'([0-9]+)\.([0-9]+)\.([0-9]+)')


@dataclass(frozen=True, order=True)
class SemanticVersion:
    """
    Semantic version triple.

    Attributes:
        major: Incremented for MAJOR changes; resets minor and patch
        minor: Incremented for MINOR changes; resets patch
        patch: Incremented for PATCH changes
    """

    major: int = 0
    minor: int = 0
    patch: int = 0

    ZERO: ClassVar['SemanticVersion']

    def __post_init__(self):
        if min(self.major, self.minor, self.patch) < 0:
            raise FormatError(f"Version components must be non-negative: {self.major}.{self.minor}.{self.patch}")

    @classmethod
    def parse(cls, text: str) -> 'SemanticVersion':
        """
        Parse "major.minor.patch".

        Raises:
            FormatError: Unless the text is exactly three dot-separated
                non-negative integers
        """
        match = _VERSION_RE.fullmatch(text.strip()) if isinstance(text, str) else None
        if not match:
            raise FormatError(f"Not a semantic version: {text!r}")
        return cls(*(int(part) for part in match.groups()))

    @classmethod
    def coerce(cls, value: Union['SemanticVersion', str, None]) -> 'SemanticVersion':
        """Accept a version, a version string, or None (0.0.0)."""
        if value is None:
            return cls.ZERO
        if isinstance(value, cls):
            return value
        return cls.parse(value)

    def bump(self, change: Classification) -> 'SemanticVersion':
        """Return the version after applying one change."""
        if change is Classification.MAJOR:
            return SemanticVersion(self.major + 1, 0, 0)
        if change is Classification.MINOR:
            return SemanticVersion(self.major, self.minor + 1, 0)
        return SemanticVersion(self.major, self.minor, self.patch + 1)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


SemanticVersion.ZERO = SemanticVersion(0, 0, 0)


@dataclass(frozen=True)
class VersionedEntry:
    """A revision paired with the version reached at that revision."""
    revision: str
    version: SemanticVersion

    def to_dict(self) -> dict:
        return {
            'revision': self.revision,
            'version': str(self.version),
        }

    def __str__(self) -> str:
        return f"{self.revision} {self.version}"


@dataclass(frozen=True)
class TagIntent:
    """A tag that should point at a revision."""
    name: str
    revision: str

    @classmethod
    def from_entry(cls, entry: VersionedEntry) -> 'TagIntent':
        return cls(name=str(entry.version), revision=entry.revision)


@dataclass(frozen=True)
class DeltaResult:
    """
    Version change computed for a range of history.

    Attributes:
        old: Version of the nearest tag reachable from the base (0.0.0 if none)
        new: Version after applying the range's changes
        squashed: Whether the changes were reduced to the most severe one
        entries: Number of annotated revisions in the range
        base: Base reference the range started from, if known
    """
    old: SemanticVersion
    new: SemanticVersion
    squashed: bool = False
    entries: int = 0
    base: Optional[str] = None

    @property
    def changed(self) -> bool:
        return self.new != self.old

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'old': str(self.old),
            'new': str(self.new),
            'squashed': self.squashed,
            'entries': self.entries,
            'base': self.base,
        }
