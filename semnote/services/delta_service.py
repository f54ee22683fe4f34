"""
Delta service for semnote.

Computes the version change for a range of history: the version of
the nearest tag before the range, and the version its notes lead to.
"""

import logging
from typing import Any, Dict, Optional

from ..config import load_config
from ..domain.version import DeltaResult, SemanticVersion
from ..infra.git_client import GitClient
from ..pipeline import latest_version, squash as squash_entries, versions
from .annotation_service import AnnotationService

logger = logging.getLogger(__name__)


class DeltaService:
    """
    Service computing (old, new) versions for a range.

    Without squashing every note bumps the version in turn; with
    squashing only the most severe note in the range counts.

    Example:
        result = DeltaService().delta("HEAD", squash=True)
        print(result.old, result.new)
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        git_client: Optional[GitClient] = None,
        annotations: Optional[AnnotationService] = None
    ):
        self.config = config if config is not None else load_config()
        self.annotations = annotations or AnnotationService(self.config, git_client)
        self.git = self.annotations.git

    def old_version(self, base: str) -> SemanticVersion:
        """Version of the nearest tag reachable from base, or 0.0.0."""
        tag = self.annotations.nearest_tag(base)
        if tag is None:
            logger.debug(f"No version tag reachable from {base}; starting at 0.0.0")
            return SemanticVersion.ZERO
        return SemanticVersion.parse(tag)

    def delta(
        self,
        target: str = "HEAD",
        base: Optional[str] = None,
        namespace: Optional[str] = None,
        squash: bool = False
    ) -> DeltaResult:
        """
        Compute the version delta between base and target.

        Args:
            target: Newest revision of the range (default: HEAD)
            base: Exclusive start of the range (default: nearest prior tag)
            namespace: Notes namespace (default: configured namespace)
            squash: Apply only the most severe change in the range

        Returns:
            DeltaResult with the old and new versions

        Raises:
            ResolutionError: If the range cannot be resolved
        """
        base = self.annotations.resolve_base(target, base)
        old = self.old_version(base)

        entries = list(self.annotations.entries(target, base, namespace))
        if squash:
            entries_to_apply = squash_entries(entries)
        else:
            entries_to_apply = entries
        new = latest_version(versions(entries_to_apply, old), old)

        logger.debug(f"Delta {base}..{target}: {old} -> {new} ({len(entries)} notes)")
        return DeltaResult(old=old, new=new, squashed=squash, entries=len(entries), base=base)
