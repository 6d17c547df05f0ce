"""Run configuration for a single overlay-build invocation.

The configuration is resolved once by the CLI and passed explicitly to the
orchestrator and the tree copier. Nothing reads process-wide flags.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from overlay_build.core.constants import (
    CONFIGS_DIR,
    DIST_DIR,
    MANIFEST_FILENAME,
    PACKAGE_MARKER_FILENAMES,
    SRC_DIR,
)


@dataclass(frozen=True, slots=True)
class BuildConfig:
    """Immutable settings for one build run."""

    package_root: Path
    dry_run: bool = False
    verbose: bool = False
    manifest_name: str = MANIFEST_FILENAME
    marker_names: tuple[str, ...] = PACKAGE_MARKER_FILENAMES
    src_dir_name: str = SRC_DIR
    dist_dir_name: str = DIST_DIR
    configs_dir_name: str = CONFIGS_DIR

    @property
    def src_root(self) -> Path:
        return self.package_root / self.src_dir_name

    @property
    def dist_root(self) -> Path:
        return self.package_root / self.dist_dir_name

    @property
    def manifest_path(self) -> Path:
        return self.package_root / self.manifest_name

    @classmethod
    def from_options(
        cls,
        pkg: Path | str | None = None,
        *,
        dry_run: bool = False,
        verbose: bool = False,
    ) -> "BuildConfig":
        """Build a config from CLI-level options.

        Args:
            pkg: Package directory; defaults to the current working directory.
            dry_run: Plan every mutation without touching the filesystem.
            verbose: Echo planned actions during a real run as well.
        """
        root = Path(pkg).expanduser() if pkg else Path.cwd()
        return cls(package_root=root.resolve(), dry_run=dry_run, verbose=verbose)


__all__ = ["BuildConfig"]
