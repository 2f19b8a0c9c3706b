"""Dependency manifest parsing for DepDrift."""

from .puppetfile import Manifest, PuppetfileParser

__all__ = [
    "Manifest",
    "PuppetfileParser",
]
