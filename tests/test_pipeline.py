"""
Tests for the version pipeline stages.

Tests cover:
- squash (most severe change at the last revision)
- squeeze (one entry per run, up or down)
- versions (running version fold)
- tag_intents
- properties relating the stages
"""

from itertools import permutations, product

import pytest

from semnote.domain import AnnotatedEntry, Classification, Direction, SemanticVersion, TagIntent
from semnote.exit_codes import ArgumentError, FormatError
from semnote.pipeline import latest_version, squash, squeeze, tag_intents, versions

MAJOR = Classification.MAJOR
MINOR = Classification.MINOR
PATCH = Classification.PATCH


def entries(*changes):
    """Build entries c1..cN with the given changes."""
    return [AnnotatedEntry(f"c{i}", change) for i, change in enumerate(changes, start=1)]


class TestSquash:
    """Tests for squash."""

    def test_empty(self):
        assert squash([]) == []

    def test_single(self):
        assert squash(entries(PATCH)) == [AnnotatedEntry("c1", PATCH)]

    def test_max_at_last_revision(self):
        """Test the most severe change is reported at the last revision."""
        result = squash(entries(PATCH, MINOR, PATCH))
        assert result == [AnnotatedEntry("c3", MINOR)]

    def test_major_wins(self):
        result = squash(entries(MINOR, MAJOR, PATCH, MINOR))
        assert result == [AnnotatedEntry("c4", MAJOR)]

    def test_all_patch(self):
        assert squash(entries(PATCH, PATCH, PATCH)) == [AnnotatedEntry("c3", PATCH)]

    def test_accepts_iterator(self):
        assert squash(iter(entries(PATCH, MAJOR))) == [AnnotatedEntry("c2", MAJOR)]

    @pytest.mark.parametrize("changes", [
        (PATCH, MINOR, MAJOR),
        (PATCH, PATCH, MINOR, MINOR),
        (MAJOR, PATCH, PATCH),
    ])
    def test_classification_is_order_independent(self, changes):
        """Test permuting the input never changes the classification."""
        results = set()
        for perm in permutations(entries(*changes)):
            [result] = squash(perm)
            results.add(result.change)
            assert result.revision == perm[-1].revision
        assert len(results) == 1


class TestSqueeze:
    """Tests for squeeze."""

    def test_up_keeps_last_of_run(self):
        items = entries(PATCH, PATCH, MINOR)
        assert list(squeeze(items, Direction.UP)) == [
            AnnotatedEntry("c2", PATCH),
            AnnotatedEntry("c3", MINOR),
        ]

    def test_down_keeps_first_of_run(self):
        items = entries(PATCH, PATCH, MINOR)
        assert list(squeeze(items, Direction.DOWN)) == [
            AnnotatedEntry("c1", PATCH),
            AnnotatedEntry("c3", MINOR),
        ]

    def test_direction_token(self):
        items = entries(PATCH, PATCH)
        assert list(squeeze(items, "up")) == [AnnotatedEntry("c2", PATCH)]
        assert list(squeeze(items, "down")) == [AnnotatedEntry("c1", PATCH)]

    def test_runs_compare_with_previous_entry(self):
        """Test separated runs of the same change stay separate."""
        items = entries(PATCH, MINOR, PATCH, PATCH, MINOR)
        result = list(squeeze(items, Direction.DOWN))
        assert [e.revision for e in result] == ["c1", "c2", "c3", "c5"]
        assert [e.change for e in result] == [PATCH, MINOR, PATCH, MINOR]

    def test_empty(self):
        assert list(squeeze([], Direction.UP)) == []

    @pytest.mark.parametrize("direction", [None, "", "left"])
    def test_invalid_direction(self, direction):
        """Test a bad direction fails at call time."""
        with pytest.raises(ArgumentError):
            squeeze(entries(PATCH), direction)

    def test_directions_agree_on_changes(self):
        """Test both directions keep the same classifications in the same order."""
        for changes in product([MAJOR, MINOR, PATCH], repeat=4):
            items = entries(*changes)
            up = list(squeeze(items, Direction.UP))
            down = list(squeeze(items, Direction.DOWN))
            assert [e.change for e in up] == [e.change for e in down]
            assert len(up) <= len(items)
            for left, right in zip(up, up[1:]):
                assert left.change != right.change


class TestVersions:
    """Tests for versions."""

    def test_worked_example(self):
        """Test PATCH, MINOR, MAJOR from 1.2.3."""
        result = list(versions(entries(PATCH, MINOR, MAJOR), "1.2.3"))
        assert [(e.revision, str(e.version)) for e in result] == [
            ("c1", "1.2.4"),
            ("c2", "1.3.0"),
            ("c3", "2.0.0"),
        ]

    def test_default_initial_is_zero(self):
        result = list(versions(entries(PATCH)))
        assert result[0].version == SemanticVersion(0, 0, 1)

    def test_accepts_version_object(self):
        result = list(versions(entries(MINOR), SemanticVersion(0, 9, 9)))
        assert result[0].version == SemanticVersion(0, 10, 0)

    def test_every_patch_counts(self):
        """Test N patches bump patch by N."""
        result = list(versions(entries(PATCH, PATCH, PATCH), "1.0.0"))
        assert result[-1].version == SemanticVersion(1, 0, 3)

    def test_empty(self):
        assert list(versions([], "1.0.0")) == []

    def test_invalid_initial_fails_at_call_time(self):
        with pytest.raises(FormatError):
            versions(entries(PATCH), "1.0")

    def test_monotonic_and_resets(self):
        """Test output is non-decreasing with the right resets."""
        for changes in product([MAJOR, MINOR, PATCH], repeat=4):
            start = SemanticVersion(1, 2, 3)
            result = list(versions(entries(*changes), start))
            assert len(result) == len(changes)

            previous = start
            for entry, change in zip(result, changes):
                assert entry.version > previous
                if change is MAJOR:
                    assert (entry.version.minor, entry.version.patch) == (0, 0)
                elif change is MINOR:
                    assert entry.version.patch == 0
                previous = entry.version


class TestTagIntents:
    """Tests for tag_intents."""

    def test_names_are_versions(self):
        result = list(tag_intents(versions(entries(PATCH, MAJOR), "0.1.0")))
        assert result == [
            TagIntent(name="0.1.1", revision="c1"),
            TagIntent(name="1.0.0", revision="c2"),
        ]


class TestDivergence:
    """Accumulating every change vs. squashing first."""

    def _new(self, items, squashed):
        start = SemanticVersion(1, 0, 0)
        if squashed:
            items = squash(items)
        return latest_version(versions(items, start), start)

    def test_single_kind_agrees(self):
        """Test a single change agrees whichever way it is applied."""
        for change in (MAJOR, MINOR, PATCH):
            items = entries(change)
            assert self._new(items, False) == self._new(items, True)

    def test_repeated_patches_diverge(self):
        items = entries(PATCH, PATCH)
        assert self._new(items, False) == SemanticVersion(1, 0, 2)
        assert self._new(items, True) == SemanticVersion(1, 0, 1)

    def test_mixed_changes_diverge(self):
        items = entries(MINOR, PATCH)
        assert self._new(items, False) == SemanticVersion(1, 1, 1)
        assert self._new(items, True) == SemanticVersion(1, 1, 0)

    def test_latest_version_default(self):
        assert latest_version(iter([]), SemanticVersion(4, 5, 6)) == SemanticVersion(4, 5, 6)
