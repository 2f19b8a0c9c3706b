"""Resolution of the latest tag of a remote repository."""

from typing import Optional, Sequence

from ..utils.logging import get_logger
from .formats import VersionFormatRegistry, default_registry

UNDETERMINED = "undef (tags do not follow any known pattern)"


class LatestRefResolver:
    """Resolve the latest tag by trying version formats in registration order."""

    def __init__(self, registry: Optional[VersionFormatRegistry] = None) -> None:
        """Initialize the resolver.

        Args:
            registry: Version format registry (a default one if None)
        """
        self.registry = registry if registry is not None else default_registry()
        self.logger = get_logger("dep_drift.resolver")

    def resolve_latest(self, tag_names: Sequence[str]) -> str:
        """Resolve the latest tag.

        The first strategy returning a non-empty result wins; later
        strategies are not called.

        Args:
            tag_names: Tag names in advertised order

        Returns:
            The latest tag as returned by the strategy, or UNDETERMINED
        """
        tags = list(tag_names)

        for name, strategy in self.registry.strategies().items():
            latest = strategy(tags)
            if latest:
                self.logger.debug(f"Version format {name!r} resolved latest tag {latest!r}")
                return latest
            self.logger.debug(f"Version format {name!r} found no match among {len(tags)} tags")

        return UNDETERMINED
