"""Exception hierarchy for fatal build conditions.

Recoverable problems (a missing ``src/``, a bad directive, an absent config
subtree) are reported as warnings and never raised.
"""

from __future__ import annotations

from pathlib import Path

EXIT_USAGE = 2
EXIT_PARSE_ERROR = 3
EXIT_NOT_A_PACKAGE = 4


class BuildError(Exception):
    """Base exception for fatal build errors."""

    exit_code: int = 1


class ManifestParseError(BuildError):
    """The manifest exists but cannot be decoded into copy directives."""

    exit_code = EXIT_PARSE_ERROR

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to parse {path}: {reason}")


class NotAPackageError(BuildError):
    """Neither a manifest nor a package marker exists in the package root."""

    exit_code = EXIT_NOT_A_PACKAGE

    def __init__(self, package_root: Path, manifest_name: str, marker_names: tuple[str, ...]):
        self.package_root = package_root
        candidates = " nor ".join((manifest_name, *marker_names))
        super().__init__(f"Neither {candidates} found in {package_root}")


__all__ = [
    "BuildError",
    "EXIT_NOT_A_PACKAGE",
    "EXIT_PARSE_ERROR",
    "EXIT_USAGE",
    "ManifestParseError",
    "NotAPackageError",
]
