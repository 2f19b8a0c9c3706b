"""Timing utilities for DepDrift."""

import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional

from rich.console import Console
from rich.table import Table


@dataclass
class PerformanceMetrics:
    """Timing of one measured operation."""

    name: str
    execution_time: float


class PerformanceMonitor:
    """Records wall-clock timings of named operations."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.metrics: List[PerformanceMetrics] = []
        self.console = console or Console()

    @contextmanager
    def measure(self, name: str) -> Iterator[None]:
        """Context manager for measuring an operation.

        Args:
            name: Name of the operation being measured
        """
        start_time = time.perf_counter()
        try:
            yield
        finally:
            self.metrics.append(PerformanceMetrics(name, time.perf_counter() - start_time))

    def get_summary(self) -> Dict[str, Any]:
        """Get performance summary.

        Returns:
            Dictionary with totals, or an empty dict when nothing was measured
        """
        if not self.metrics:
            return {}

        total_time = sum(m.execution_time for m in self.metrics)
        slowest = max(self.metrics, key=lambda m: m.execution_time)

        return {
            "total_executions": len(self.metrics),
            "total_time": total_time,
            "average_time": total_time / len(self.metrics),
            "slowest": slowest.name,
            "slowest_time": slowest.execution_time,
        }

    def print_summary(self) -> None:
        """Print performance summary to console."""
        summary = self.get_summary()
        if not summary:
            return

        table = Table(title="Performance Summary")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="green")

        table.add_row("Total Executions", str(summary["total_executions"]))
        table.add_row("Total Time", f"{summary['total_time']:.4f}s")
        table.add_row("Average Time", f"{summary['average_time']:.4f}s")
        table.add_row("Slowest", f"{summary['slowest']} ({summary['slowest_time']:.4f}s)")

        self.console.print(table)
