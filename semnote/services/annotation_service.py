"""
Annotation service for semnote.

Reads and writes the change classifications stored as git notes,
and syncs the notes ref with remotes. This is the source of the
version pipeline: it produces annotated entries, oldest first.
"""

import logging
from typing import Any, Dict, Iterator, List, Optional

from ..config import load_config
from ..domain.change import AnnotatedEntry, Classification
from ..domain.version import SemanticVersion
from ..exit_codes import FormatError, ResolutionError
from ..infra.git_client import GitClient

logger = logging.getLogger(__name__)


def client_from_config(config: Dict[str, Any], repo_path: str = ".") -> GitClient:
    """Build a GitClient using the configured timeout."""
    timeout = config.get("git", {}).get("timeout_seconds", 30)
    return GitClient(repo_path=repo_path, timeout=timeout)


class AnnotationService:
    """
    Service for change notes.

    Example:
        service = AnnotationService()
        service.annotate("minor", "HEAD")
        for entry in service.entries("HEAD", "1.2.3"):
            print(entry.revision, entry.change)
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        git_client: Optional[GitClient] = None
    ):
        """
        Initialize AnnotationService.

        Args:
            config: Configuration dict (loads default if None)
            git_client: GitClient instance (creates new if None)
        """
        self.config = config if config is not None else load_config()
        self.git = git_client or client_from_config(self.config)

    @property
    def default_namespace(self) -> str:
        return str(self.config.get("notes", {}).get("namespace", "semver"))

    @property
    def default_remote(self) -> str:
        return str(self.config.get("remote", {}).get("name", "origin"))

    @property
    def tag_match(self) -> Optional[str]:
        match = self.config.get("tags", {}).get("match")
        return str(match) if match else None

    def nearest_tag(self, ref: str) -> Optional[str]:
        """
        Nearest version tag reachable from ref, or None.

        Tags matching the configured glob that are not exactly
        <major>.<minor>.<patch> (such as 1.2.3-rc1) are passed over
        in favour of the next nearest tag.
        """
        skipped: List[str] = []
        while True:
            tag = self.git.nearest_tag(ref, match=self.tag_match, exclude=tuple(skipped))
            if tag is None:
                return None
            try:
                SemanticVersion.parse(tag)
            except FormatError:
                logger.debug(f"Skipping tag {tag}: not a version")
                skipped.append(tag)
                continue
            return tag

    def resolve_base(self, target: str, base: Optional[str] = None) -> str:
        """
        Return the base of a range, defaulting to the nearest prior tag.

        Raises:
            ResolutionError: If no base is given and no tag is reachable
        """
        if base:
            return base
        tag = self.nearest_tag(target)
        if tag is None:
            raise ResolutionError(
                f"No version tag reachable from {target}; pass a base revision explicitly"
            )
        return tag

    def entries(
        self,
        target: str = "HEAD",
        base: Optional[str] = None,
        namespace: Optional[str] = None
    ) -> Iterator[AnnotatedEntry]:
        """
        Annotated revisions between base and target.

        Revisions without a note, or whose note is not exactly MAJOR,
        MINOR or PATCH, are skipped.

        Args:
            target: Newest revision of the range (default: HEAD)
            base: Exclusive start of the range (default: nearest prior tag)
            namespace: Notes namespace (default: configured namespace)

        Returns:
            Lazy iterator of entries, oldest first

        Raises:
            ResolutionError: If target or base cannot be resolved
        """
        namespace = namespace or self.default_namespace
        base = self.resolve_base(target, base)
        self.git.resolve(target)
        self.git.resolve(base)
        revisions = self.git.list_revisions(target, base)
        logger.debug(f"{len(revisions)} revisions in {base}..{target}")
        return self._annotated(revisions, namespace)

    def _annotated(self, revisions: List[str], namespace: str) -> Iterator[AnnotatedEntry]:
        for revision in revisions:
            text = self.git.get_annotation(revision, namespace)
            change = Classification.from_text(text)
            if change is None:
                if text is not None:
                    logger.debug(f"Skipping {revision}: note {text!r} is not a change classification")
                continue
            yield AnnotatedEntry(revision=revision, change=change)

    def annotate(
        self,
        change: str,
        revision: str = "HEAD",
        namespace: Optional[str] = None
    ) -> AnnotatedEntry:
        """
        Record a change classification on a revision.

        Args:
            change: "major", "minor" or "patch" (any case)
            revision: Revision to annotate (default: HEAD)
            namespace: Notes namespace (default: configured namespace)

        Returns:
            The entry that was written

        Raises:
            ArgumentError: If change is not a classification
            ResolutionError: If the revision cannot be resolved
        """
        classification = Classification.from_user(change)
        namespace = namespace or self.default_namespace
        commit = self.git.resolve(revision)
        self.git.set_annotation(commit, namespace, classification.value)
        logger.info(f"Annotated {commit} as {classification.value} in {namespace}")
        return AnnotatedEntry(revision=commit, change=classification)

    def undo(self, revision: str = "HEAD", namespace: Optional[str] = None) -> bool:
        """
        Remove the change note from a revision.

        Returns:
            True if a note was removed, False if there was none
        """
        namespace = namespace or self.default_namespace
        commit = self.git.resolve(revision)
        removed = self.git.remove_annotation(commit, namespace)
        if removed:
            logger.info(f"Removed note from {commit} in {namespace}")
        else:
            logger.info(f"No note on {commit} in {namespace}")
        return removed

    def push(self, remote: Optional[str] = None, namespace: Optional[str] = None) -> str:
        """Push the notes ref to a remote."""
        return self.git.push_ref(remote or self.default_remote, namespace or self.default_namespace)

    def fetch(self, remote: Optional[str] = None, namespace: Optional[str] = None) -> str:
        """Fetch the notes ref from a remote."""
        return self.git.fetch_ref(remote or self.default_remote, namespace or self.default_namespace)
