"""Outdated dependency checking across registry and Git sourced modules."""

import asyncio
from dataclasses import dataclass
from typing import Iterable, List, Optional, Protocol, Set

from ..exceptions import DepDriftError, RegistryLookupError, RemoteRefError, UnresolvableRefError
from ..utils.logging import get_logger
from ..utils.performance import PerformanceMonitor
from .classifier import RefClassifier, Verdict
from .models import (
    AuditReport,
    DependencyError,
    DependencyRecord,
    OutdatedFinding,
    RemoteRefSet,
    SourceKind,
)


class RegistryClient(Protocol):
    """Looks up the current published release of a registry module."""

    async def current_version(self, name: str) -> str:
        ...


class RemoteRefProvider(Protocol):
    """Lists the references advertised by a Git remote."""

    async def ls_remote(self, remote: str) -> RemoteRefSet:
        ...


@dataclass(frozen=True)
class CheckResult:
    """Outcome of checking a single dependency."""

    record: DependencyRecord
    finding: Optional[OutdatedFinding] = None
    skipped: bool = False
    error: Optional[DependencyError] = None


class OutdatedChecker:
    """Check declared dependencies against the latest upstream versions."""

    def __init__(
        self,
        classifier: RefClassifier,
        registry_client: RegistryClient,
        ref_provider: RemoteRefProvider,
        ignore: Optional[Iterable[str]] = None,
        max_concurrent: int = 8,
        performance_monitor: Optional[PerformanceMonitor] = None,
    ) -> None:
        """Initialize the checker.

        Args:
            classifier: Classifier for Git references
            registry_client: Client for registry sourced modules
            ref_provider: Provider of Git remote references
            ignore: Dependency names to exclude silently
            max_concurrent: Maximum number of dependencies checked at once
            performance_monitor: Optional monitor recording timings
        """
        if max_concurrent < 1:
            raise ValueError("max_concurrent must be at least 1")

        self.classifier = classifier
        self.registry_client = registry_client
        self.ref_provider = ref_provider
        self.ignore: Set[str] = set(ignore or ())
        self.max_concurrent = max_concurrent
        self.performance_monitor = performance_monitor or PerformanceMonitor()
        self.logger = get_logger("dep_drift.checker")

    async def check_record(self, record: DependencyRecord) -> CheckResult:
        """Check one dependency.

        Args:
            record: Dependency to check

        Returns:
            Result holding a finding when the dependency is outdated

        Raises:
            UnresolvableRefError: If a Git ref is neither branch, tag nor sha
            DepDriftError: If a collaborator lookup fails
        """
        if record.source_kind is SourceKind.REGISTRY:
            return await self._check_registry(record)
        if record.source_kind is SourceKind.GIT:
            return await self._check_git(record)
        raise ValueError(f"Unknown source kind: {record.source_kind}")

    async def _check_registry(self, record: DependencyRecord) -> CheckResult:
        if not record.is_pinned:
            self.logger.debug(f"{record.name} does not pin a version, skipping")
            return CheckResult(record, skipped=True)

        try:
            latest = await self.registry_client.current_version(record.name)
        except DepDriftError:
            raise
        except Exception as e:
            raise RegistryLookupError(record.name, f"{type(e).__name__}: {e}") from e

        if record.installed_version == latest:
            return CheckResult(record)

        return CheckResult(
            record,
            finding=OutdatedFinding(
                name=record.name,
                declared=record.installed_version,
                latest=latest,
                source_kind=record.source_kind,
            ),
        )

    async def _check_git(self, record: DependencyRecord) -> CheckResult:
        ref = record.declared_ref
        if not record.is_pinned or not ref:
            self.logger.debug(f"{record.name} tracks the remote head, skipping")
            return CheckResult(record, skipped=True)

        remote = record.remote or ""
        try:
            remote_refs = await self.ref_provider.ls_remote(remote)
        except DepDriftError:
            raise
        except Exception as e:
            raise RemoteRefError(remote, f"{type(e).__name__}: {e}") from e

        classification = self.classifier.classify(ref, remote_refs)

        if classification.verdict is Verdict.SKIP:
            self.logger.debug(f"{record.name}: {classification.reason}, skipping")
            return CheckResult(record, skipped=True)

        if classification.verdict is Verdict.UNRESOLVABLE:
            raise UnresolvableRefError(record.name, ref)

        latest = classification.latest or ""
        if ref == latest:
            return CheckResult(record)

        return CheckResult(
            record,
            finding=OutdatedFinding(
                name=record.name,
                declared=ref,
                latest=latest,
                source_kind=record.source_kind,
            ),
        )

    async def _guarded_check(self, record: DependencyRecord, semaphore: asyncio.Semaphore) -> CheckResult:
        async with semaphore:
            with self.performance_monitor.measure(f"check:{record.name}"):
                try:
                    return await self.check_record(record)
                except UnresolvableRefError as e:
                    self.logger.error(str(e))
                    return CheckResult(
                        record,
                        error=DependencyError(record.name, str(e), DependencyError.UNRESOLVABLE),
                    )
                except DepDriftError as e:
                    self.logger.error(f"{record.name}: {e}")
                    return CheckResult(
                        record,
                        error=DependencyError(record.name, str(e), DependencyError.LOOKUP),
                    )

    async def check(self, records: Iterable[DependencyRecord]) -> AuditReport:
        """Check all dependencies concurrently.

        Failures are collected per dependency; findings and errors keep the
        order of ``records``.

        Args:
            records: Dependencies declared in the manifest

        Returns:
            Audit report
        """
        report = AuditReport()
        active: List[DependencyRecord] = []

        for record in records:
            if record.name in self.ignore:
                self.logger.debug(f"{record.name} is ignored")
                report.ignored += 1
                continue
            active.append(record)

        semaphore = asyncio.Semaphore(self.max_concurrent)
        with self.performance_monitor.measure("check"):
            results = await asyncio.gather(
                *(self._guarded_check(record, semaphore) for record in active)
            )

        for result in results:
            if result.error is not None:
                report.errors.append(result.error)
                continue
            if result.skipped:
                report.skipped += 1
                continue
            report.checked += 1
            if result.finding is not None:
                report.findings.append(result.finding)

        return report

    def check_sync(self, records: Iterable[DependencyRecord]) -> AuditReport:
        """Synchronous wrapper around check()."""
        return asyncio.run(self.check(records))
