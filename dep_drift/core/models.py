"""Data models shared by the resolution engine and its collaborators."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class SourceKind(str, Enum):
    """Where a declared dependency is fetched from."""

    REGISTRY = "registry"
    GIT = "git"


@dataclass(frozen=True)
class RemoteRef:
    """A single reference advertised by a remote repository."""

    name: str
    sha: str


@dataclass
class RemoteRefSet:
    """Snapshot of the branches, tags and HEAD advertised by a remote."""

    branches: Dict[str, RemoteRef] = field(default_factory=dict)
    tags: Dict[str, RemoteRef] = field(default_factory=dict)
    head: Optional[RemoteRef] = None

    def tag_names(self) -> List[str]:
        """Get tag names in the order the remote advertised them.

        Returns:
            List of tag names
        """
        return list(self.tags.keys())

    def has_branch(self, name: str) -> bool:
        return name in self.branches

    def has_tag(self, name: str) -> bool:
        return name in self.tags


@dataclass
class DependencyRecord:
    """One module declared in the dependency manifest."""

    name: str
    source_kind: SourceKind
    declared_ref: Optional[str] = None
    installed_version: Optional[str] = None
    remote: Optional[str] = None
    line_number: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate the record."""
        if not self.name or not self.name.strip():
            raise ValueError("Dependency name cannot be empty")
        self.name = self.name.strip()

        if self.source_kind is SourceKind.GIT and not self.remote:
            raise ValueError(f"Git dependency {self.name} has no remote URL")

    @property
    def is_pinned(self) -> bool:
        """Whether the record pins something that can be compared."""
        if self.source_kind is SourceKind.REGISTRY:
            return bool(self.installed_version)
        return bool(self.declared_ref)


@dataclass(frozen=True)
class OutdatedFinding:
    """A mismatch between a declared reference and the latest available one."""

    name: str
    declared: str
    latest: str
    source_kind: SourceKind

    def describe(self) -> str:
        return f"{self.name} is OUTDATED: {self.declared} vs {self.latest}"


@dataclass(frozen=True)
class DependencyError:
    """A per-dependency failure that did not abort the audit."""

    name: str
    message: str
    kind: str = "lookup"

    UNRESOLVABLE = "unresolvable"
    LOOKUP = "lookup"


@dataclass
class AuditReport:
    """Result of checking a manifest's dependencies."""

    findings: List[OutdatedFinding] = field(default_factory=list)
    errors: List[DependencyError] = field(default_factory=list)
    checked: int = 0
    skipped: int = 0
    ignored: int = 0

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def outdated_names(self) -> List[str]:
        return [finding.name for finding in self.findings]
