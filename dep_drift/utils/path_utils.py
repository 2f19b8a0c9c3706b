"""Path helpers for locating the manifest and reading the ignore list."""

from pathlib import Path
from typing import Optional, Set

MANIFEST_NAMES = ("Puppetfile",)
DEFAULT_IGNORE_FILE = ".r10kignore"


def find_manifest(root_path: Path, manifest: Optional[Path] = None) -> Path:
    """Locate the dependency manifest of a project.

    Args:
        root_path: Project directory, or a manifest file
        manifest: Explicit manifest path, relative to root_path if not absolute

    Returns:
        Path to the manifest

    Raises:
        FileNotFoundError: If no manifest is found
    """
    if manifest is not None:
        candidate = manifest if manifest.is_absolute() else root_path / manifest
        if not candidate.is_file():
            raise FileNotFoundError(f"Manifest not found: {candidate}")
        return candidate

    if root_path.is_file():
        return root_path

    for name in MANIFEST_NAMES:
        candidate = root_path / name
        if candidate.is_file():
            return candidate

    raise FileNotFoundError(f"No {' or '.join(MANIFEST_NAMES)} found in {root_path}")


def load_ignore_list(ignore_file: Path) -> Set[str]:
    """Read dependency names to ignore, one per line.

    Blank lines and lines starting with ``#`` are skipped. A missing file
    means nothing is ignored.

    Args:
        ignore_file: Path to the ignore file

    Returns:
        Set of dependency names
    """
    if not ignore_file.is_file():
        return set()

    names = set()
    with open(ignore_file, 'r', encoding='utf-8') as f:
        for line in f:
            name = line.strip()
            if name and not name.startswith('#'):
                names.add(name)
    return names
