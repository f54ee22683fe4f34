"""
Domain layer for semnote.

Contains pure domain objects with no I/O or side effects:
- Classification: MAJOR/MINOR/PATCH severity of a change
- AnnotatedEntry: A revision and its classification
- SemanticVersion: Immutable (major, minor, patch) triple
- VersionedEntry / TagIntent: Accumulated versions and the tags they imply

These objects are immutable and provide serialization
methods for JSON output.
"""

from .change import Classification, Direction, AnnotatedEntry
from .version import SemanticVersion, VersionedEntry, TagIntent, DeltaResult
from .operation import OperationStatus, TagResult, OperationSummary

__all__ = [
    'Classification',
    'Direction',
    'AnnotatedEntry',
    'SemanticVersion',
    'VersionedEntry',
    'TagIntent',
    'DeltaResult',
    'OperationStatus',
    'TagResult',
    'OperationSummary',
]
