"""Tests for the reference classifier."""

from dep_drift.core.classifier import Classification, Verdict, is_commit_sha
from dep_drift.core.resolver import UNDETERMINED

from .conftest import HEAD_SHA, PINNED_SHA, make_refs


class TestIsCommitSha:
    """Test commit sha detection."""

    def test_full_lowercase_hex(self):
        assert is_commit_sha(PINNED_SHA)

    def test_wrong_length(self):
        assert not is_commit_sha(PINNED_SHA[:39])
        assert not is_commit_sha(PINNED_SHA + "0")

    def test_mixed_case(self):
        assert not is_commit_sha(PINNED_SHA.upper())
        assert not is_commit_sha("00397B86dfb3487d9df768cbd3698d362132b5bf")

    def test_non_hex(self):
        assert not is_commit_sha("g" * 40)


class TestRefClassifier:
    """Test classification rules and their order."""

    def test_missing_ref_is_skipped(self, classifier):
        """Test that an absent ref is not audited."""
        refs = make_refs(branches=["main"], tags=["v1.0.0"])
        assert classifier.classify(None, refs).verdict is Verdict.SKIP
        assert classifier.classify("", refs).verdict is Verdict.SKIP

    def test_branch_is_skipped(self, classifier):
        """Test that a branch ref is never compared."""
        refs = make_refs(branches=["main", "develop"], tags=["v1.0.0"])
        result = classifier.classify("main", refs)

        assert result.verdict is Verdict.SKIP
        assert result.latest is None
        assert not result.is_comparison

    def test_branch_wins_over_tag_of_same_name(self, classifier):
        """Test that the branch check precedes the tag check."""
        refs = make_refs(branches=["1.0.0"], tags=["1.0.0", "2.0.0"])
        assert classifier.classify("1.0.0", refs).verdict is Verdict.SKIP

    def test_tag_resolves_latest(self, classifier):
        """Test that a tag ref is compared to the latest tag."""
        refs = make_refs(branches=["main"], tags=["v1.0.0", "v1.2.0", "v1.1.0"])
        result = classifier.classify("v1.0.0", refs)

        assert result == Classification(Verdict.COMPARE_TO_TAG, latest="v1.2.0", reason="ref is a tag")
        assert result.is_comparison

    def test_tag_without_pattern_resolves_sentinel(self, classifier):
        """Test that unrecognized tags produce the undetermined sentinel."""
        refs = make_refs(tags=["stable", "old"])
        result = classifier.classify("stable", refs)

        assert result.verdict is Verdict.COMPARE_TO_TAG
        assert result.latest == UNDETERMINED

    def test_sha_compares_to_head(self, classifier):
        """Test that an unknown 40-char sha is compared to HEAD."""
        refs = make_refs(branches=["main"], tags=["v1.0.0"])
        result = classifier.classify(PINNED_SHA, refs)

        assert result.verdict is Verdict.COMPARE_TO_HEAD_COMMIT
        assert result.latest == HEAD_SHA

    def test_sha_without_head(self, classifier):
        """Test that a remote without HEAD compares against the sentinel."""
        refs = make_refs(tags=["v1.0.0"], head=None)
        result = classifier.classify(PINNED_SHA, refs)

        assert result.verdict is Verdict.COMPARE_TO_HEAD_COMMIT
        assert result.latest == UNDETERMINED

    def test_short_sha_is_unresolvable(self, classifier):
        """Test that a 39-char hex string is not a sha."""
        refs = make_refs(branches=["main"], tags=["v1.0.0"])
        assert classifier.classify(PINNED_SHA[:39], refs).verdict is Verdict.UNRESOLVABLE

    def test_mixed_case_sha_is_unresolvable(self, classifier):
        """Test that an uppercase sha is not a sha."""
        refs = make_refs(branches=["main"], tags=["v1.0.0"])
        assert classifier.classify(PINNED_SHA.upper(), refs).verdict is Verdict.UNRESOLVABLE

    def test_unknown_ref_is_unresolvable(self, classifier):
        """Test that anything else cannot be classified."""
        refs = make_refs(branches=["main"], tags=["v1.0.0"])
        result = classifier.classify("some-branch-like-string", refs)

        assert result.verdict is Verdict.UNRESOLVABLE
        assert result.reason == "unable to determine ref type"
