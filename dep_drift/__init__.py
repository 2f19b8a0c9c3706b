"""DepDrift - report Puppetfile modules that lag behind their latest upstream version."""

__version__ = "0.1.0"

from .core.checker import OutdatedChecker
from .core.classifier import RefClassifier
from .core.formats import VersionFormatRegistry, default_registry
from .core.resolver import UNDETERMINED, LatestRefResolver
from .manifest import PuppetfileParser
from .output.formatters import ConsoleFormatter, JSONFormatter

__all__ = [
    "OutdatedChecker",
    "RefClassifier",
    "LatestRefResolver",
    "VersionFormatRegistry",
    "default_registry",
    "UNDETERMINED",
    "PuppetfileParser",
    "ConsoleFormatter",
    "JSONFormatter",
]
