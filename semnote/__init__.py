"""
semnote - Semantic versions from git notes.

Revisions are classified with git notes (MAJOR, MINOR or PATCH) in a
notes namespace. semnote turns those notes into version bumps and tags.

Quick Start:
    import semnote

    # Notes between the last version tag and HEAD
    service = semnote.AnnotationService()
    entries = list(service.entries("HEAD"))

    # Every note bumps the version in turn
    for entry in semnote.versions(entries, "1.2.3"):
        print(entry.revision, entry.version)

    # Or only the most severe note counts
    print(semnote.squash(entries))

    # Old and new version for a range
    result = semnote.DeltaService().delta("HEAD", squash=True)
    print(result.old, result.new)

Pipeline stages:
    squash   - most severe change, at the last revision
    squeeze  - one entry per run of equal changes
    versions - running version history
    tag_intents - tags implied by a version history
"""

__version__ = "0.3.0"

# Domain objects
from .domain import (
    Classification,
    Direction,
    AnnotatedEntry,
    SemanticVersion,
    VersionedEntry,
    TagIntent,
    DeltaResult,
)

# Pipeline stages
from .pipeline import squash, squeeze, versions, tag_intents

# Services
from .services import (
    AnnotationService,
    DeltaService,
    TagService,
    TagOptions,
)

# Infrastructure
from .infra import GitClient

# Configuration
from .config import load_config

__all__ = [
    # Version
    "__version__",
    # Domain objects
    "Classification",
    "Direction",
    "AnnotatedEntry",
    "SemanticVersion",
    "VersionedEntry",
    "TagIntent",
    "DeltaResult",
    # Pipeline
    "squash",
    "squeeze",
    "versions",
    "tag_intents",
    # Services
    "AnnotationService",
    "DeltaService",
    "TagService",
    "TagOptions",
    # Infrastructure
    "GitClient",
    # Configuration
    "load_config",
]
