"""Utility functions and helpers for DepDrift."""

from .logging import setup_logging, get_logger
from .performance import PerformanceMonitor
from .path_utils import find_manifest, load_ignore_list

__all__ = [
    "setup_logging",
    "get_logger",
    "PerformanceMonitor",
    "find_manifest",
    "load_ignore_list",
]
