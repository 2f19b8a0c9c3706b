"""Exception hierarchy for DepDrift."""

from typing import Optional


class DepDriftError(Exception):
    """Base class for all errors raised by DepDrift."""


class ConfigError(DepDriftError):
    """Raised when the audit configuration is invalid."""


class ManifestError(DepDriftError):
    """Raised when a dependency manifest cannot be read or parsed."""

    def __init__(self, message: str, line_number: Optional[int] = None) -> None:
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class UnresolvableRefError(DepDriftError):
    """Raised when a declared ref is neither a branch, a tag nor a commit sha."""

    def __init__(self, name: str, ref: str) -> None:
        self.name = name
        self.ref = ref
        super().__init__(f"Unable to determine ref type for {name} (ref: {ref})")


class RegistryLookupError(DepDriftError):
    """Raised when the module registry cannot report a current release."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Registry lookup failed for {name}: {reason}")


class RemoteRefError(DepDriftError):
    """Raised when the references of a Git remote cannot be listed."""

    def __init__(self, remote: str, reason: str) -> None:
        self.remote = remote
        self.reason = reason
        super().__init__(f"Unable to list refs of {remote}: {reason}")
