"""Shared fixtures and fakes for DepDrift tests."""

from typing import Dict, List, Optional

import pytest

from dep_drift.core.classifier import RefClassifier
from dep_drift.core.formats import default_registry
from dep_drift.core.models import RemoteRef, RemoteRefSet
from dep_drift.core.resolver import LatestRefResolver
from dep_drift.exceptions import RegistryLookupError, RemoteRefError

HEAD_SHA = "1111111111111111111111111111111111111111"
PINNED_SHA = "00397b86dfb3487d9df768cbd3698d362132b5bf"


def make_refs(
    branches: Optional[List[str]] = None,
    tags: Optional[List[str]] = None,
    head: Optional[str] = HEAD_SHA
) -> RemoteRefSet:
    """Build a remote ref set from plain names."""
    return RemoteRefSet(
        branches={name: RemoteRef(name, HEAD_SHA) for name in branches or []},
        tags={name: RemoteRef(name, "2" * 40) for name in tags or []},
        head=RemoteRef("HEAD", head) if head else None,
    )


class FakeRegistryClient:
    """In-memory registry client."""

    def __init__(self, versions: Dict[str, str]) -> None:
        self.versions = versions
        self.calls: List[str] = []

    async def current_version(self, name: str) -> str:
        self.calls.append(name)
        if name not in self.versions:
            raise RegistryLookupError(name, "module not found")
        return self.versions[name]

    async def __aenter__(self) -> "FakeRegistryClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        return None


class FakeRefProvider:
    """In-memory Git remote ref provider."""

    def __init__(self, remotes: Dict[str, RemoteRefSet]) -> None:
        self.remotes = remotes
        self.calls: List[str] = []

    async def ls_remote(self, remote: str) -> RemoteRefSet:
        self.calls.append(remote)
        if remote not in self.remotes:
            raise RemoteRefError(remote, "repository not found")
        return self.remotes[remote]


@pytest.fixture
def classifier() -> RefClassifier:
    """Classifier backed by the default registry."""
    return RefClassifier(LatestRefResolver(default_registry()))
