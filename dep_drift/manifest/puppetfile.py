"""Puppetfile parser producing dependency records."""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from ..core.models import DependencyRecord, SourceKind
from ..exceptions import ManifestError
from ..utils.logging import get_logger

Value = Union[str, bool]

_STATEMENT_RE = re.compile(r"^(?P<keyword>mod|forge|moduledir)\b\s*\(?\s*(?P<args>.*?)\s*\)?\s*$")
_OPTION_RE = re.compile(r"^(?::(?P<rocket>\w+)\s*=>|(?P<keyword>\w+):(?!:))\s*(?P<value>.+)$")

# first match wins when a module declares several of them
_GIT_REF_OPTIONS = ("ref", "tag", "commit", "branch")


@dataclass
class Manifest:
    """Dependencies declared in a Puppetfile."""

    records: List[DependencyRecord] = field(default_factory=list)
    forge: Optional[str] = None
    source_file: Optional[Path] = None

    def find(self, name: str) -> Optional[DependencyRecord]:
        """Find a record by name.

        Args:
            name: Dependency name

        Returns:
            The record, or None if not declared
        """
        for record in self.records:
            if record.name == name:
                return record
        return None


class PuppetfileParser:
    """Parser for r10k style Puppetfiles."""

    def __init__(self) -> None:
        self.logger = get_logger("dep_drift.manifest")

    def can_parse(self, file_path: Path) -> bool:
        return file_path.name == "Puppetfile" or file_path.suffix == ".puppetfile"

    def parse(self, file_path: Path) -> Manifest:
        """Parse a Puppetfile.

        Args:
            file_path: Path to the Puppetfile

        Returns:
            Parsed manifest

        Raises:
            ManifestError: If the file is missing or a statement is malformed
        """
        if not file_path.is_file():
            raise ManifestError(f"Puppetfile not found: {file_path}")
        if not os.access(file_path, os.R_OK):
            raise ManifestError(f"Puppetfile is not readable: {file_path}")

        with open(file_path, 'r', encoding='utf-8') as f:
            manifest = self.parse_text(f.read())
        manifest.source_file = file_path
        return manifest

    def parse_text(self, text: str) -> Manifest:
        """Parse Puppetfile content.

        Args:
            text: Puppetfile content

        Returns:
            Parsed manifest
        """
        manifest = Manifest()

        for line_number, statement in self._statements(text):
            match = _STATEMENT_RE.match(statement)
            if not match:
                self.logger.debug(f"Ignoring unsupported statement on line {line_number}: {statement}")
                continue

            keyword = match.group("keyword")
            args = _split_arguments(match.group("args"), line_number)

            if keyword == "forge":
                forge = args[0].value if args else None
                if not isinstance(forge, str) or not forge or forge.startswith(":"):
                    raise ManifestError("forge expects a URL", line_number)
                manifest.forge = forge
            elif keyword == "mod":
                record = self._parse_mod(args, line_number)
                if record is not None:
                    manifest.records.append(record)

        return manifest

    def _statements(self, text: str) -> List[Tuple[int, str]]:
        """Join continuation lines into statements.

        A line continues the previous statement when that statement ends
        with a comma.
        """
        statements: List[Tuple[int, str]] = []

        for line_number, raw in enumerate(text.splitlines(), 1):
            line = _strip_comment(raw).strip()
            if not line:
                continue

            if statements and statements[-1][1].endswith(","):
                start, previous = statements[-1]
                statements[-1] = (start, f"{previous} {line}")
            else:
                statements.append((line_number, line))

        return statements

    def _parse_mod(self, args: List["_Argument"], line_number: int) -> Optional[DependencyRecord]:
        positional = [a.value for a in args if a.key is None]
        options: Dict[str, Value] = {a.key: a.value for a in args if a.key is not None}

        if not positional or not isinstance(positional[0], str) or positional[0].startswith(":"):
            raise ManifestError("mod expects a quoted module name", line_number)
        name = positional[0]

        if "git" in options:
            remote = options["git"]
            if not isinstance(remote, str) or not remote or remote.startswith(":"):
                raise ManifestError("git expects a URL", line_number)
            return DependencyRecord(
                name=name,
                source_kind=SourceKind.GIT,
                declared_ref=_git_ref(options),
                remote=remote,
                line_number=line_number,
            )

        if "local" in options or "svn" in options:
            self.logger.debug(f"{name} is not sourced from the forge or git, ignoring")
            return None

        version = positional[1] if len(positional) > 1 else None
        if isinstance(version, bool) or (isinstance(version, str) and version.startswith(":")):
            # :latest and friends do not pin anything
            version = None

        return DependencyRecord(
            name=name,
            source_kind=SourceKind.REGISTRY,
            installed_version=version,
            line_number=line_number,
        )


@dataclass(frozen=True)
class _Argument:
    key: Optional[str]
    value: Value


def _git_ref(options: Dict[str, Value]) -> Optional[str]:
    for option in _GIT_REF_OPTIONS:
        value = options.get(option)
        if isinstance(value, str) and value and not value.startswith(":"):
            return value
    return None


def _strip_comment(line: str) -> str:
    quote = None
    for index, char in enumerate(line):
        if quote:
            if char == quote:
                quote = None
        elif char in "'\"":
            quote = char
        elif char == "#":
            return line[:index]
    return line


def _split_arguments(text: str, line_number: int) -> List[_Argument]:
    """Split a comma separated argument list, respecting quotes."""
    parts: List[str] = []
    current: List[str] = []
    quote = None

    for char in text:
        if quote:
            current.append(char)
            if char == quote:
                quote = None
        elif char in "'\"":
            quote = char
            current.append(char)
        elif char == ",":
            parts.append("".join(current).strip())
            current = []
        else:
            current.append(char)

    if quote:
        raise ManifestError("unterminated string", line_number)

    tail = "".join(current).strip()
    if tail:
        parts.append(tail)

    arguments = []
    for part in parts:
        if not part:
            raise ManifestError("empty argument", line_number)
        match = _OPTION_RE.match(part)
        if match and not part.startswith(("'", '"')):
            key = match.group("rocket") or match.group("keyword")
            arguments.append(_Argument(key, _parse_value(match.group("value").strip(), line_number)))
        else:
            arguments.append(_Argument(None, _parse_value(part, line_number)))
    return arguments


def _parse_value(text: str, line_number: int) -> Value:
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"":
        return text[1:-1]
    if text in ("true", "false"):
        return text == "true"
    if re.match(r"^:\w+$", text):
        return text
    raise ManifestError(f"unsupported value {text!r}", line_number)
