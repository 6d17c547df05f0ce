"""Package build: bulk ``src/`` copy plus manifest-driven config overlays."""

from overlay_build.build.copier import ActionKind, PlannedAction, TreeCopier
from overlay_build.build.errors import (
    EXIT_NOT_A_PACKAGE,
    EXIT_PARSE_ERROR,
    EXIT_USAGE,
    BuildError,
    ManifestParseError,
    NotAPackageError,
)
from overlay_build.build.manifest import (
    BuildManifest,
    CopyDirective,
    ManifestLocation,
    load_manifest,
    locate_manifest,
)
from overlay_build.build.orchestrator import BuildReport, run_build
from overlay_build.build.resolver import OverlayOperation, resolve_overlays

__all__ = [
    "ActionKind",
    "BuildError",
    "BuildManifest",
    "BuildReport",
    "CopyDirective",
    "EXIT_NOT_A_PACKAGE",
    "EXIT_PARSE_ERROR",
    "EXIT_USAGE",
    "ManifestLocation",
    "ManifestParseError",
    "NotAPackageError",
    "OverlayOperation",
    "PlannedAction",
    "TreeCopier",
    "load_manifest",
    "locate_manifest",
    "resolve_overlays",
    "run_build",
]
