"""
Operation result domain objects for semnote.

Provides standardized result types for tag creation, which may
partially fail without aborting the run.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, List, Optional


class OperationStatus(Enum):
    """Status of an individual operation."""
    SUCCESS = "success"
    FAILED = "failed"
    DRY_RUN = "dry_run"


@dataclass
class TagResult:
    """
    Outcome of creating one tag.

    Used to track what happened to each intent during a tags run.
    """
    name: str
    revision: str
    status: OperationStatus
    action: str  # "tagged", "would_tag", "tag_failed"
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result = {
            'name': self.name,
            'revision': self.revision,
            'status': self.status.value,
            'action': self.action,
        }
        if self.error:
            result['error'] = self.error
        return result


@dataclass
class OperationSummary:
    """
    Summary of a tags run.

    Collects counts and per-tag details so callers can decide how
    to report partial failure.
    """
    operation: str
    total: int = 0
    successful: int = 0
    failed: int = 0
    dry_run: bool = False
    details: List[TagResult] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """True if no failures occurred."""
        return self.failed == 0

    def add_detail(self, detail: TagResult) -> None:
        """Add an operation detail and update counts."""
        self.details.append(detail)
        self.total += 1

        if detail.status == OperationStatus.FAILED:
            self.failed += 1
            if detail.error:
                self.errors.append(f"{detail.name}: {detail.error}")
        else:
            # Dry-run counts as successful
            self.successful += 1

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'type': 'summary',
            'operation': self.operation,
            'total': self.total,
            'successful': self.successful,
            'failed': self.failed,
            'dry_run': self.dry_run,
            'errors': list(self.errors),
        }
