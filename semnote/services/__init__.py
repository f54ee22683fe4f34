"""
Service layer for semnote.

Contains business logic that orchestrates domain objects and infrastructure:
- AnnotationService: Reading, writing and syncing change notes
- DeltaService: Old/new version for a range of history
- TagService: Creating tags from versioned entries

Services are the primary API for commands to use.
They handle coordination between infrastructure and the pipeline.
"""

from .annotation_service import AnnotationService
from .delta_service import DeltaService
from .tag_service import TagService, TagOptions

__all__ = [
    'AnnotationService',
    'DeltaService',
    'TagService',
    'TagOptions',
]
