"""Version resolution and outdated checking logic for DepDrift."""

from .checker import OutdatedChecker
from .classifier import Classification, RefClassifier, Verdict
from .formats import VersionFormatRegistry, default_registry, semver_strategy
from .models import (
    AuditReport,
    DependencyError,
    DependencyRecord,
    OutdatedFinding,
    RemoteRef,
    RemoteRefSet,
    SourceKind,
)
from .resolver import UNDETERMINED, LatestRefResolver

__all__ = [
    "OutdatedChecker",
    "Classification",
    "RefClassifier",
    "Verdict",
    "VersionFormatRegistry",
    "default_registry",
    "semver_strategy",
    "LatestRefResolver",
    "UNDETERMINED",
    "AuditReport",
    "DependencyError",
    "DependencyRecord",
    "OutdatedFinding",
    "RemoteRef",
    "RemoteRefSet",
    "SourceKind",
]
