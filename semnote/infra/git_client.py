"""
Git client infrastructure for semnote.

Provides a clean abstraction over git command execution.
All git operations go through this client, making them:
- Easy to mock for testing
- Consistent in error handling
- Isolated from the version pipeline
"""

import subprocess
from typing import Optional, List, Sequence, Tuple
import logging

from ..exit_codes import GitError, ResolutionError

logger = logging.getLogger(__name__)


def notes_ref(namespace: str) -> str:
    """Full ref name for a notes namespace ("semver" -> "refs/notes/semver")."""
    if namespace.startswith("refs/"):
        return namespace
    return f"refs/notes/{namespace}"


class GitClient:
    """
    Abstraction over git commands.

    Provides the operations the version pipeline needs: listing
    revisions, reading and writing notes, resolving tags, creating
    tags and syncing notes refs.

    Example:
        client = GitClient("/path/to/repo")
        for revision in client.list_revisions("HEAD", "1.2.3"):
            print(revision, client.get_annotation(revision, "semver"))
    """

    def __init__(self, repo_path: str = ".", timeout: int = 30):
        """
        Initialize GitClient.

        Args:
            repo_path: Repository working directory (default: ".")
            timeout: Command timeout in seconds (default: 30)
        """
        self.repo_path = repo_path
        self.timeout = timeout

    def _run(
        self,
        args: List[str],
        capture_stderr: bool = False,
        strip: bool = True
    ) -> Tuple[Optional[str], int]:
        """
        Run a git command.

        Args:
            args: Arguments after "git"
            capture_stderr: Include stderr in output
            strip: Strip surrounding whitespace from the output

        Returns:
            Tuple of (stdout, returncode)

        Raises:
            GitError: If git cannot be started or the command times out
        """
        cmd = ["git"] + args
        logger.debug(f"Running: {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd,
                cwd=self.repo_path,
                capture_output=True,
                text=True,
                timeout=self.timeout
            )
        except subprocess.TimeoutExpired:
            raise GitError(f"Git command timed out after {self.timeout}s: {' '.join(cmd)}") from None
        except OSError as e:
            raise GitError(f"Git command failed: {' '.join(cmd)} - {e}") from e

        output = result.stdout
        if capture_stderr and result.stderr:
            output += result.stderr

        if not output:
            return None, result.returncode
        return (output.strip() if strip else output), result.returncode

    def resolve(self, ref: str) -> str:
        """
        Resolve a reference to a commit hash.

        Raises:
            ResolutionError: If the reference does not name a commit
        """
        output, code = self._run(["rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"])
        if code != 0 or not output:
            raise ResolutionError(f"Cannot resolve revision: {ref}")
        return output

    def list_revisions(self, target: str, base: str) -> List[str]:
        """
        List revisions reachable from target but not from base.

        Args:
            target: Newest reference of the range
            base: Exclusive lower bound

        Returns:
            Commit hashes in topological order, oldest first

        Raises:
            ResolutionError: If git cannot resolve the range
        """
        rev_range = f"{base}..{target}"
        output, code = self._run(["rev-list", "--topo-order", "--reverse", rev_range])
        if code != 0:
            raise ResolutionError(f"Cannot list revisions in range: {rev_range}")
        if not output:
            return []
        return output.split('\n')

    def get_annotation(self, revision: str, namespace: str) -> Optional[str]:
        """
        Read the note attached to a revision.

        Returns:
            Note text without its trailing newline, or None if there is none
        """
        output, code = self._run(
            ["notes", f"--ref={notes_ref(namespace)}", "show", revision],
            strip=False
        )
        if code != 0 or output is None:
            return None
        return output.rstrip('\n')

    def set_annotation(self, revision: str, namespace: str, text: str) -> None:
        """
        Attach a note to a revision, replacing any existing one.

        Raises:
            GitError: If git refuses to write the note
        """
        output, code = self._run(
            ["notes", f"--ref={notes_ref(namespace)}", "add", "-f", "-m", text, revision],
            capture_stderr=True
        )
        if code != 0:
            raise GitError(f"Cannot annotate {revision}: {output or 'git notes add failed'}")

    def remove_annotation(self, revision: str, namespace: str) -> bool:
        """
        Remove the note attached to a revision.

        Returns:
            True if a note was removed, False if there was none

        Raises:
            GitError: If git refuses to remove an existing note
        """
        if self.get_annotation(revision, namespace) is None:
            return False
        output, code = self._run(
            ["notes", f"--ref={notes_ref(namespace)}", "remove", revision],
            capture_stderr=True
        )
        if code != 0:
            raise GitError(f"Cannot remove note from {revision}: {output or 'git notes remove failed'}")
        return True

    def nearest_tag(
        self,
        ref: str,
        match: Optional[str] = None,
        exclude: Sequence[str] = ()
    ) -> Optional[str]:
        """
        Find the nearest tag reachable from a reference.

        Args:
            ref: Reference to search from (the reference itself counts)
            match: Optional glob restricting the tags considered
            exclude: Tag names (or globs) to pass over

        Returns:
            Tag name, or None if no tag is reachable
        """
        cmd = ["describe", "--tags", "--abbrev=0"]
        if match:
            cmd += ["--match", match]
        for pattern in exclude:
            cmd += ["--exclude", pattern]
        cmd.append(ref)

        output, code = self._run(cmd)
        if code == 0 and output:
            return output
        return None

    def create_tag(self, name: str, revision: str) -> Tuple[bool, str]:
        """
        Create a lightweight tag.

        Returns:
            Tuple of (success, git output)
        """
        output, code = self._run(["tag", name, revision], capture_stderr=True)
        return code == 0, output or ""

    def push_ref(self, remote: str, namespace: str) -> str:
        """
        Push a notes ref to a remote.

        Raises:
            GitError: If the push fails
        """
        ref = notes_ref(namespace)
        output, code = self._run(["push", remote, ref], capture_stderr=True)
        if code != 0:
            raise GitError(f"Cannot push {ref} to {remote}: {output or 'git push failed'}")
        return output or ""

    def fetch_ref(self, remote: str, namespace: str) -> str:
        """
        Fetch a notes ref from a remote into the same local ref.

        Raises:
            GitError: If the fetch fails
        """
        ref = notes_ref(namespace)
        output, code = self._run(["fetch", remote, f"{ref}:{ref}"], capture_stderr=True)
        if code != 0:
            raise GitError(f"Cannot fetch {ref} from {remote}: {output or 'git fetch failed'}")
        return output or ""
