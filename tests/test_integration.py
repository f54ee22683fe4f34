"""
Integration tests running semnote against a real git repository.

Skipped when git is not installed.
"""

import shutil
import subprocess

import pytest
from click.testing import CliRunner

from semnote.cli import cli
from semnote.config import get_default_config
from semnote.domain import Classification, SemanticVersion
from semnote.infra.git_client import GitClient
from semnote.services.annotation_service import AnnotationService
from semnote.services.delta_service import DeltaService

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")

GIT_ENV = {
    "GIT_AUTHOR_NAME": "Test",
    "GIT_AUTHOR_EMAIL": "test@example.com",
    "GIT_COMMITTER_NAME": "Test",
    "GIT_COMMITTER_EMAIL": "test@example.com",
    "GIT_CONFIG_NOSYSTEM": "1",
}


def git(repo, *args):
    result = subprocess.run(
        ["git"] + list(args),
        cwd=repo,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


@pytest.fixture
def repo(tmp_path, monkeypatch):
    """Repository with commits c0 (tagged 1.2.3) through c4."""
    for key, value in GIT_ENV.items():
        monkeypatch.setenv(key, value)
    monkeypatch.setenv("HOME", str(tmp_path))

    path = tmp_path / "repo"
    path.mkdir()
    git(path, "init", "-q")
    git(path, "config", "user.name", "Test")
    git(path, "config", "user.email", "test@example.com")
    git(path, "config", "commit.gpgsign", "false")
    git(path, "config", "tag.gpgsign", "false")

    commits = []
    for i in range(5):
        git(path, "commit", "-q", "--allow-empty", "-m", f"commit {i}")
        commits.append(git(path, "rev-parse", "HEAD"))
    git(path, "tag", "1.2.3", commits[0])
    return path, commits


@pytest.fixture
def services(repo):
    path, commits = repo
    config = get_default_config()
    client = GitClient(repo_path=str(path))
    return AnnotationService(config, client), DeltaService(config, client), commits


class TestRealRepository:

    def test_annotate_and_list(self, services):
        annotations, _, commits = services
        annotations.annotate("patch", commits[1])
        annotations.annotate("minor", commits[3])

        entries = list(annotations.entries("HEAD"))

        assert [(e.revision, e.change) for e in entries] == [
            (commits[1], Classification.PATCH),
            (commits[3], Classification.MINOR),
        ]

    def test_non_matching_note_is_skipped(self, services, repo):
        annotations, _, commits = services
        path, _ = repo
        git(path, "notes", "--ref=semver", "add", "-m", "minor", commits[2])
        annotations.annotate("major", commits[4])

        entries = list(annotations.entries("HEAD"))
        assert [e.revision for e in entries] == [commits[4]]

    def test_undo(self, services):
        annotations, _, commits = services
        annotations.annotate("patch", commits[2])
        assert annotations.undo(commits[2]) is True
        assert annotations.undo(commits[2]) is False
        assert list(annotations.entries("HEAD")) == []

    def test_delta(self, services):
        annotations, delta, commits = services
        annotations.annotate("patch", commits[1])
        annotations.annotate("patch", commits[2])
        annotations.annotate("minor", commits[3])

        result = delta.delta("HEAD")
        assert result.old == SemanticVersion(1, 2, 3)
        assert result.new == SemanticVersion(1, 3, 0)

        squashed = delta.delta("HEAD", squash=True)
        assert squashed.new == SemanticVersion(1, 3, 0)

    def test_pre_release_tag_is_passed_over(self, services, repo):
        annotations, delta, commits = services
        path, _ = repo
        git(path, "tag", "2.0.0-rc1", commits[2])
        annotations.annotate("patch", commits[3])

        result = delta.delta("HEAD")
        assert result.base == "1.2.3"
        assert result.old == SemanticVersion(1, 2, 3)
        assert result.new == SemanticVersion(1, 2, 4)

    def test_namespaces_are_independent(self, services):
        annotations, delta, commits = services
        annotations.annotate("major", commits[1], "other")

        assert delta.delta("HEAD").new == SemanticVersion(1, 2, 3)
        assert delta.delta("HEAD", namespace="other").new == SemanticVersion(2, 0, 0)

    def test_tags_pipeline(self, services, repo):
        annotations, _, commits = services
        path, _ = repo
        annotations.annotate("patch", commits[1])
        annotations.annotate("minor", commits[2])

        runner = CliRunner()
        obj = {'config': get_default_config(), 'repo': str(path)}
        notes = runner.invoke(cli, ['-C', str(path), 'notes'], obj=dict(obj))
        assert notes.exit_code == 0, notes.output

        versions = runner.invoke(cli, ['versions', '1.2.3'], input=notes.output, obj=dict(obj))
        assert versions.output == f"{commits[1]} 1.2.4\n{commits[2]} 1.3.0\n"

        # Pre-existing tag makes the first intent fail; the second is still created
        git(path, "tag", "1.2.4", commits[0])
        tags = runner.invoke(cli, ['tags', '--apply'], input=versions.output, obj=dict(obj))
        assert tags.exit_code == 71
        assert git(path, "rev-parse", "1.3.0^{commit}") == commits[2]
        assert git(path, "rev-parse", "1.2.4^{commit}") == commits[0]
