"""
Tag service for semnote.

Turns versioned entries into tags. Used by the `semnote tags` command.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Generator, Iterable, Optional

from ..config import load_config
from ..domain.operation import OperationStatus, OperationSummary, TagResult
from ..domain.version import TagIntent
from ..exit_codes import GitError, TagCreationError
from ..infra.git_client import GitClient
from .annotation_service import client_from_config

logger = logging.getLogger(__name__)


@dataclass
class TagOptions:
    """Options for tag creation."""
    dry_run: bool = True
    continue_on_error: bool = True  # False stops at the first failed tag


class TagService:
    """
    Service creating tags from tag intents.

    A tag that cannot be created (the name is taken, or git fails or
    times out) is reported and skipped; the remaining intents are
    still processed unless continue_on_error is off.

    Example:
        service = TagService()
        options = TagOptions(dry_run=False)

        for progress in service.create_tags(intents, options):
            print(progress)

        result = service.last_result
        print(f"Created {result.successful} tags")
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        git_client: Optional[GitClient] = None
    ):
        """
        Initialize TagService.

        Args:
            config: Configuration dict (loads default if None)
            git_client: GitClient instance (creates new if None)
        """
        self.config = config if config is not None else load_config()
        self.git = git_client or client_from_config(self.config)
        self.last_result: Optional[OperationSummary] = None

    def options(self, apply: bool = False) -> TagOptions:
        """Build TagOptions from configuration."""
        continue_on_error = self.config.get("tags", {}).get("continue_on_error", True)
        return TagOptions(dry_run=not apply, continue_on_error=bool(continue_on_error))

    def create_tags(
        self,
        intents: Iterable[TagIntent],
        options: TagOptions
    ) -> Generator[str, None, OperationSummary]:
        """
        Create (or preview) one tag per intent, in order.

        Args:
            intents: Tag intents, oldest first
            options: Tag options

        Yields:
            One output line per intent

        Returns:
            OperationSummary with results

        Raises:
            TagCreationError: On the first failure when continue_on_error is off
        """
        result = OperationSummary(operation="create_tags", dry_run=options.dry_run)
        self.last_result = result

        for intent in intents:
            if options.dry_run:
                result.add_detail(TagResult(
                    name=intent.name,
                    revision=intent.revision,
                    status=OperationStatus.DRY_RUN,
                    action="would_tag",
                ))
                yield f"git tag {intent.name} {intent.revision}"
                continue

            try:
                success, output = self.git.create_tag(intent.name, intent.revision)
            except GitError as e:
                success, output = False, str(e)
            if success:
                result.add_detail(TagResult(
                    name=intent.name,
                    revision=intent.revision,
                    status=OperationStatus.SUCCESS,
                    action="tagged",
                ))
                yield f"{intent.revision} {intent.name}"
                continue

            error = output or "git tag failed"
            result.add_detail(TagResult(
                name=intent.name,
                revision=intent.revision,
                status=OperationStatus.FAILED,
                action="tag_failed",
                error=error,
            ))
            logger.warning(f"Cannot tag {intent.revision} as {intent.name}: {error}")
            if not options.continue_on_error:
                raise TagCreationError(
                    f"Cannot tag {intent.revision} as {intent.name}: {error}",
                    name=intent.name,
                    revision=intent.revision,
                )

        return result
