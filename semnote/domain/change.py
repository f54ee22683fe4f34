"""
Change classification domain objects for semnote.

A classification is the severity recorded in a revision's note:
- MAJOR: incompatible change
- MINOR: backwards-compatible feature
- PATCH: backwards-compatible fix

Classifications are totally ordered by precedence MAJOR > MINOR > PATCH.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..exit_codes import ArgumentError, FormatError


class Classification(Enum):
    """Severity of a change, as stored in a note."""
    PATCH = "PATCH"
    MINOR = "MINOR"
    MAJOR = "MAJOR"

    @property
    def precedence(self) -> int:
        return _PRECEDENCE[self]

    @classmethod
    def parse(cls, token: str) -> 'Classification':
        """
        Parse a note or wire token.

        The match is exact and case-sensitive: only "MAJOR", "MINOR"
        and "PATCH" are accepted.

        Raises:
            FormatError: If the token is anything else
        """
        try:
            return cls(token)
        except ValueError:
            raise FormatError(f"Not a change classification: {token!r}") from None

    @classmethod
    def from_text(cls, text: Optional[str]) -> Optional['Classification']:
        """Return the classification a note's text names, or None."""
        if text is None:
            return None
        try:
            return cls(text)
        except ValueError:
            return None

    @classmethod
    def from_user(cls, token: Optional[str]) -> 'Classification':
        """
        Parse a classification typed on the command line (any case).

        Raises:
            ArgumentError: If the token is missing or unrecognized
        """
        if token:
            try:
                return cls(token.strip().upper())
            except ValueError:
                pass
        raise ArgumentError(
            f"Unknown change {token!r}: expected one of major, minor, patch"
        )

    def __str__(self) -> str:
        return self.value


_PRECEDENCE = {
    Classification.PATCH: 0,
    Classification.MINOR: 1,
    Classification.MAJOR: 2,
}


class Direction(Enum):
    """Which member of a run of equal classifications to keep."""
    UP = "up"        # last entry of each run
    DOWN = "down"    # first entry of each run

    @classmethod
    def parse(cls, token) -> 'Direction':
        """
        Parse a direction token ("up" or "down", any case).

        Raises:
            ArgumentError: If the token is missing or unrecognized
        """
        if isinstance(token, cls):
            return token
        if isinstance(token, str):
            try:
                return cls(token.strip().lower())
            except ValueError:
                pass
        raise ArgumentError(f"Unknown direction {token!r}: expected 'up' or 'down'")


@dataclass(frozen=True)
class AnnotatedEntry:
    """A revision paired with the classification of its note."""
    revision: str
    change: Classification

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'revision': self.revision,
            'change': self.change.value,
        }

    def __str__(self) -> str:
        return f"{self.revision} {self.change.value}"
