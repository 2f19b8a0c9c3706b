"""Classification of a declared Git reference against a remote's refs."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..utils.logging import get_logger
from .models import RemoteRefSet
from .resolver import UNDETERMINED, LatestRefResolver

_COMMIT_SHA_RE = re.compile(r"\A[0-9a-f]{40}\Z")


class Verdict(str, Enum):
    """What the driver has to do with a declared reference."""

    SKIP = "skip"
    COMPARE_TO_TAG = "compare_to_tag"
    COMPARE_TO_HEAD_COMMIT = "compare_to_head_commit"
    UNRESOLVABLE = "unresolvable"


@dataclass(frozen=True)
class Classification:
    """Outcome of classifying a declared reference."""

    verdict: Verdict
    latest: Optional[str] = None
    reason: str = ""

    @property
    def is_comparison(self) -> bool:
        return self.verdict in (Verdict.COMPARE_TO_TAG, Verdict.COMPARE_TO_HEAD_COMMIT)


def is_commit_sha(ref: str) -> bool:
    """Check whether a ref is a full, lowercase, hexadecimal commit sha."""
    return bool(_COMMIT_SHA_RE.match(ref))


class RefClassifier:
    """Decide how a declared reference is checked for freshness."""

    def __init__(self, resolver: Optional[LatestRefResolver] = None) -> None:
        """Initialize the classifier.

        Args:
            resolver: Resolver used for tag references
        """
        self.resolver = resolver if resolver is not None else LatestRefResolver()
        self.logger = get_logger("dep_drift.classifier")

    def classify(self, declared_ref: Optional[str], remote_refs: RemoteRefSet) -> Classification:
        """Classify a declared reference.

        Rules are applied in order: unpinned, branch, tag, commit sha.
        Anything else is unresolvable.

        Args:
            declared_ref: Reference declared in the manifest
            remote_refs: References advertised by the remote

        Returns:
            Classification of the reference
        """
        if not declared_ref:
            return Classification(Verdict.SKIP, reason="no ref pinned")

        # branches float on purpose, even when a tag has the same name
        if remote_refs.has_branch(declared_ref):
            self.logger.debug(f"{declared_ref!r} is a branch, skipping")
            return Classification(Verdict.SKIP, reason="ref is a branch")

        if remote_refs.has_tag(declared_ref):
            latest = self.resolver.resolve_latest(remote_refs.tag_names())
            return Classification(Verdict.COMPARE_TO_TAG, latest=latest, reason="ref is a tag")

        if is_commit_sha(declared_ref):
            head_sha = remote_refs.head.sha if remote_refs.head else UNDETERMINED
            return Classification(
                Verdict.COMPARE_TO_HEAD_COMMIT,
                latest=head_sha,
                reason="ref is a commit sha",
            )

        return Classification(Verdict.UNRESOLVABLE, reason="unable to determine ref type")
