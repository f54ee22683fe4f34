"""
Infrastructure layer for semnote.

Contains abstractions for external systems:
- GitClient: Git command execution (notes, tags, revision listing)

These provide clean interfaces that can be mocked for testing.
"""

from .git_client import GitClient, notes_ref

__all__ = [
    'GitClient',
    'notes_ref',
]
