"""Main CLI interface for DepDrift."""

import asyncio
import time
from pathlib import Path
from typing import Iterable, List, Optional, Set

import typer
from rich.console import Console
from rich.table import Table

from ..clients.forge import ForgeClient
from ..clients.git import GitRemoteClient
from ..config import DEFAULT_FORGE_URL, AuditConfig
from ..core.checker import OutdatedChecker
from ..core.classifier import RefClassifier, Verdict
from ..core.formats import VersionFormatRegistry, default_registry
from ..core.models import AuditReport, DependencyRecord
from ..core.resolver import LatestRefResolver
from ..exceptions import DepDriftError
from ..manifest import PuppetfileParser
from ..output.formatters import ConsoleFormatter, JSONFormatter
from ..utils.logging import get_logger, setup_logging
from ..utils.path_utils import find_manifest, load_ignore_list
from ..utils.performance import PerformanceMonitor

app = typer.Typer(
    name="depdrift",
    help="Report Puppetfile modules that are behind their latest Forge release or Git tag",
    add_completion=False
)

console = Console(soft_wrap=True)
logger = get_logger("dep_drift.cli")


def build_registry() -> VersionFormatRegistry:
    """Create the version format registry used for a run."""
    return default_registry()


async def _run_check(
    records: Iterable[DependencyRecord],
    config: AuditConfig,
    ignore: Set[str],
    monitor: PerformanceMonitor
) -> AuditReport:
    classifier = RefClassifier(LatestRefResolver(build_registry()))

    async with ForgeClient(config) as forge:
        checker = OutdatedChecker(
            classifier,
            registry_client=forge,
            ref_provider=GitRemoteClient(config),
            ignore=ignore,
            max_concurrent=config.max_concurrent,
            performance_monitor=monitor,
        )
        return await checker.check(records)


@app.command()
def check(
    path: Path = typer.Argument(
        Path("."),
        help="Project directory containing the Puppetfile, or the Puppetfile itself"
    ),
    puppetfile: Optional[Path] = typer.Option(
        None,
        "--puppetfile",
        "-p",
        help="Puppetfile path, relative to PATH"
    ),
    ignore_file: Optional[Path] = typer.Option(
        None,
        "--ignore-file",
        envvar="DEPDRIFT_IGNORE_FILE",
        help="File listing modules to ignore (default: .r10kignore next to the Puppetfile)"
    ),
    forge_url: str = typer.Option(
        DEFAULT_FORGE_URL,
        "--forge-url",
        envvar="DEPDRIFT_FORGE_URL",
        help="Forge API host, overridden by a 'forge' line in the Puppetfile"
    ),
    concurrency: int = typer.Option(
        8,
        "--concurrency",
        "-c",
        envvar="DEPDRIFT_CONCURRENCY",
        help="Maximum number of modules checked at once"
    ),
    timeout: float = typer.Option(
        30.0,
        "--timeout",
        envvar="DEPDRIFT_TIMEOUT",
        help="Timeout in seconds for each Forge request or git ls-remote"
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file for JSON results"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also write log records to this file"
    ),
    performance: bool = typer.Option(
        False,
        "--performance",
        help="Show performance summary"
    )
) -> None:
    """Print outdated Forge and Git modules of a Puppetfile."""
    setup_logging(log_file=log_file, verbose=verbose)

    try:
        config = AuditConfig(forge_url=forge_url, max_concurrent=concurrency, timeout=timeout)
        manifest_path = find_manifest(path, puppetfile)
        manifest = PuppetfileParser().parse(manifest_path)
    except (DepDriftError, FileNotFoundError) as e:
        logger.debug(f"Setup failed: {e}")
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    config = config.with_forge(manifest.forge)
    ignore_path = ignore_file or manifest_path.parent / config.ignore_file
    ignore = load_ignore_list(ignore_path)

    logger.info(f"Checking {len(manifest.records)} modules from {manifest_path}")
    monitor = PerformanceMonitor(console)
    start_time = time.perf_counter()
    report = asyncio.run(_run_check(manifest.records, config, ignore, monitor))
    scan_time = time.perf_counter() - start_time

    ConsoleFormatter(console).format_report(report, scan_time)

    if output:
        json_formatter = JSONFormatter(output)
        results = json_formatter.format_report(
            report,
            scan_time,
            metadata={"puppetfile": str(manifest_path), "forge": config.forge_url}
        )
        json_formatter.save_results(results)

    if performance:
        monitor.print_summary()

    if report.has_errors:
        raise typer.Exit(1)


@app.command()
def latest(
    remote: str = typer.Argument(..., help="Git remote URL"),
    ref: Optional[str] = typer.Option(
        None,
        "--ref",
        "-r",
        help="Declared ref to classify against the remote"
    ),
    timeout: float = typer.Option(
        30.0,
        "--timeout",
        envvar="DEPDRIFT_TIMEOUT",
        help="Timeout in seconds for git ls-remote"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging")
) -> None:
    """Show the latest tag of a Git remote and how a ref would be checked."""
    setup_logging(verbose=verbose)

    try:
        config = AuditConfig(timeout=timeout)
        remote_refs = asyncio.run(GitRemoteClient(config).ls_remote(remote))
    except DepDriftError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    resolver = LatestRefResolver(build_registry())
    console.print(f"Branches: {len(remote_refs.branches)}  Tags: {len(remote_refs.tags)}")
    console.print(f"Latest tag: {resolver.resolve_latest(remote_refs.tag_names())}", markup=False)
    console.print(f"HEAD: {remote_refs.head.sha if remote_refs.head else 'unknown'}", markup=False)

    if ref is None:
        return

    classification = RefClassifier(resolver).classify(ref, remote_refs)
    if classification.verdict is Verdict.UNRESOLVABLE:
        console.print(f"[red]Unable to determine ref type for {ref}[/red]")
        raise typer.Exit(1)

    if classification.verdict is Verdict.SKIP:
        console.print(f"{ref}: skipped ({classification.reason})", markup=False)
    elif classification.latest == ref:
        console.print(f"{ref}: up to date ({classification.reason})", markup=False)
    else:
        console.print(f"{ref} is OUTDATED: {ref} vs {classification.latest}", markup=False)


@app.command()
def formats() -> None:
    """List version formats in the order they are tried."""
    registry = build_registry()

    table = Table(title="Version Formats")
    table.add_column("Order", style="cyan")
    table.add_column("Name", style="green")

    names: List[str] = registry.names()
    for index, name in enumerate(names, 1):
        table.add_row(str(index), name)

    console.print(table)


def main() -> None:
    """Main entry point for DepDrift CLI."""
    app()


if __name__ == "__main__":
    main()
