"""Version format registry used to pick the latest tag of a Git remote."""

from typing import Callable, Dict, List, Optional, Sequence

from semantic_version import Version

from ..utils.logging import get_logger

VersionFormatStrategy = Callable[[Sequence[str]], Optional[str]]

logger = get_logger("dep_drift.formats")


def parse_semver(tag: str) -> Optional[Version]:
    """Parse a tag as a semantic version, allowing one leading ``v``.

    Args:
        tag: Tag name as advertised by the remote

    Returns:
        Parsed version or None if the tag is not a semantic version
    """
    text = tag[1:] if tag.startswith("v") else tag
    try:
        return Version(text)
    except ValueError:
        logger.debug(f"Ignoring tag {tag!r}: not a semantic version")
        return None


def semver_strategy(tags: Sequence[str]) -> Optional[str]:
    """Pick the tag with the highest semantic version.

    Tags that do not parse are dropped. When several tags normalize to the
    same highest version the first one in ``tags`` is returned.

    Args:
        tags: Tag names in advertised order

    Returns:
        The original tag string, or None when no tag is a semantic version
    """
    latest_tag: Optional[str] = None
    latest_version: Optional[Version] = None

    for tag in tags:
        version = parse_semver(tag)
        if version is None:
            continue
        if latest_version is None or version > latest_version:
            latest_tag, latest_version = tag, version

    return latest_tag


class VersionFormatRegistry:
    """Ordered registry of version format strategies."""

    def __init__(self, include_builtins: bool = True) -> None:
        """Initialize the registry.

        Args:
            include_builtins: Register the built-in ``semver`` strategy first
        """
        self._strategies: Dict[str, VersionFormatStrategy] = {}

        if include_builtins:
            self.register("semver", semver_strategy)

    def register(self, name: str, strategy: VersionFormatStrategy) -> None:
        """Register a strategy under a name.

        Re-registering a name replaces the previous strategy and keeps its
        position in the resolution order.

        Args:
            name: Format name (e.g. 'semver')
            strategy: Callable receiving tag names and returning the latest one or None
        """
        if not name:
            raise ValueError("Version format name cannot be empty")
        if not callable(strategy):
            raise TypeError(f"Version format {name!r} is not callable")

        if name in self._strategies:
            logger.debug(f"Replacing version format {name!r}")
        self._strategies[name] = strategy

    def version_format(self, name: str) -> Callable[[VersionFormatStrategy], VersionFormatStrategy]:
        """Decorator registering the decorated function as a strategy.

        Args:
            name: Format name

        Returns:
            Decorator returning the function unchanged
        """
        def decorator(strategy: VersionFormatStrategy) -> VersionFormatStrategy:
            self.register(name, strategy)
            return strategy
        return decorator

    def strategies(self) -> Dict[str, VersionFormatStrategy]:
        """Get the registered strategies in resolution order.

        Returns:
            Copy of the name to strategy mapping
        """
        return dict(self._strategies)

    def names(self) -> List[str]:
        return list(self._strategies.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._strategies

    def __len__(self) -> int:
        return len(self._strategies)


def default_registry() -> VersionFormatRegistry:
    """Create a registry holding the built-in strategies."""
    return VersionFormatRegistry(include_builtins=True)
