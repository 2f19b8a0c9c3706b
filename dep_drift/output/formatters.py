"""Output formatters for DepDrift."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..core.models import AuditReport
from ..utils.logging import get_logger


class ConsoleFormatter:
    """Rich console formatter for audit reports."""

    def __init__(self, console: Optional[Console] = None) -> None:
        """Initialize the console formatter.

        Args:
            console: Rich console instance
        """
        self.console = console or Console()
        self.logger = get_logger("dep_drift.output")

    def format_report(self, report: AuditReport, scan_time: Optional[float] = None) -> None:
        """Print outdated notices, errors and a summary.

        Args:
            report: Audit report
            scan_time: Time taken for the audit in seconds
        """
        for finding in report.findings:
            self.console.print(finding.describe(), markup=False, highlight=False, soft_wrap=True)

        if report.errors:
            self.console.print(self._create_errors_table(report))

        self.console.print(self._create_summary_panel(report, scan_time))

    def _create_errors_table(self, report: AuditReport) -> Table:
        table = Table(title="Errors", title_style="red bold")
        table.add_column("Module", style="cyan", no_wrap=True)
        table.add_column("Kind", style="yellow")
        table.add_column("Message", style="red")

        for error in report.errors:
            table.add_row(error.name, error.kind, error.message)

        return table

    def _create_summary_panel(self, report: AuditReport, scan_time: Optional[float]) -> Panel:
        if report.errors:
            style = "red"
            title = f"{len(report.errors)} modules could not be checked"
        elif report.findings:
            style = "yellow"
            title = f"{len(report.findings)} outdated modules"
        else:
            style = "green"
            title = "All modules are up to date"

        lines = [
            f"Checked: {report.checked}",
            f"Outdated: {len(report.findings)}",
            f"Skipped: {report.skipped}",
            f"Ignored: {report.ignored}",
            f"Errors: {len(report.errors)}",
        ]
        if scan_time is not None:
            lines.append(f"Time: {scan_time:.2f}s")

        return Panel("\n".join(lines), title=title, style=style)


class JSONFormatter:
    """JSON formatter for audit reports."""

    def __init__(self, output_file: Optional[Path] = None) -> None:
        self.output_file = output_file
        self.logger = get_logger("dep_drift.output")

    def format_report(
        self,
        report: AuditReport,
        scan_time: Optional[float] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Convert a report to JSON serializable data.

        Args:
            report: Audit report
            scan_time: Time taken for the audit in seconds
            metadata: Optional additional metadata

        Returns:
            Formatted JSON data
        """
        result: Dict[str, Any] = {
            "summary": {
                "checked": report.checked,
                "outdated": len(report.findings),
                "skipped": report.skipped,
                "ignored": report.ignored,
                "errors": len(report.errors),
                "scan_time_seconds": scan_time,
                "timestamp": datetime.now().isoformat(),
            },
            "outdated": [
                {
                    "name": finding.name,
                    "source": finding.source_kind.value,
                    "declared": finding.declared,
                    "latest": finding.latest,
                }
                for finding in report.findings
            ],
            "errors": [
                {"name": error.name, "kind": error.kind, "message": error.message}
                for error in report.errors
            ],
        }

        if metadata:
            result["metadata"] = metadata

        return result

    def save_results(self, results: Dict[str, Any], output_file: Optional[Path] = None) -> None:
        """Save results to a JSON file.

        Args:
            results: Results dictionary
            output_file: Output file path (uses instance default if None)
        """
        file_path = output_file or self.output_file
        if not file_path:
            raise ValueError("No output file specified")

        try:
            with open(file_path, 'w', encoding='utf-8') as f:
                json.dump(results, f, indent=2, ensure_ascii=False)
            self.logger.info(f"Results saved to {file_path}")
        except IOError as e:
            self.logger.error(f"Failed to save results to {file_path}: {e}")
            raise
