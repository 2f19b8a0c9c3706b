"""Audit configuration for DepDrift."""

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional

from . import __version__
from .exceptions import ConfigError
from .utils.path_utils import DEFAULT_IGNORE_FILE

DEFAULT_FORGE_URL = "https://forgeapi.puppet.com"


@dataclass(frozen=True)
class AuditConfig:
    """Settings shared by the checker and its I/O clients."""

    forge_url: str = DEFAULT_FORGE_URL
    ignore_file: Path = Path(DEFAULT_IGNORE_FILE)
    max_concurrent: int = 8
    timeout: float = 30.0
    git_binary: str = "git"
    user_agent: str = field(default=f"depdrift/{__version__}")

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not self.forge_url.startswith(("http://", "https://")):
            raise ConfigError(f"Forge URL must be http(s): {self.forge_url}")
        if self.max_concurrent < 1:
            raise ConfigError("Concurrency must be at least 1")
        if self.timeout <= 0:
            raise ConfigError("Timeout must be positive")
        if not self.git_binary:
            raise ConfigError("Git binary cannot be empty")

    def with_forge(self, forge: Optional[str]) -> "AuditConfig":
        """Apply a forge host declared in the manifest.

        Only http(s) URLs replace the configured host.

        Args:
            forge: Forge declared in the manifest, if any

        Returns:
            Config using the manifest's forge, or self
        """
        if forge and forge.startswith(("http://", "https://")):
            return replace(self, forge_url=forge.rstrip("/"))
        return self
