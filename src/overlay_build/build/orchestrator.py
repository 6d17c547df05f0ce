"""Top-level build sequence.

1. Locate ``build.json`` (or a package marker); abort if neither exists.
2. Copy ``src/`` into ``dist/`` (warn and continue when ``src/`` is absent).
3. Decode the manifest; abort on invalid JSON.
4. Resolve copy directives and overlay each config in manifest order.

Overlays always run after the bulk copy, so they take precedence. A fatal
error stops the run where it is; copies already made are not rolled back.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from overlay_build.build.copier import PlannedAction, TreeCopier
from overlay_build.build.manifest import ManifestDecoder, load_manifest, locate_manifest
from overlay_build.build.resolver import OverlayOperation, resolve_overlays
from overlay_build.core.config import BuildConfig
from overlay_build.core.reporting import BuildReporter

logger = logging.getLogger(__name__)


@dataclass
class BuildReport:
    """What a build run resolved and did (or, in dry-run mode, would do)."""

    package_root: Path
    dist_root: Path
    src_root: Path
    manifest_path: Optional[Path] = None
    operations: List[OverlayOperation] = field(default_factory=list)
    actions: List[PlannedAction] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    dry_run: bool = False


def run_build(
    config: BuildConfig,
    reporter: Optional[BuildReporter] = None,
    decoder: ManifestDecoder = json.loads,
) -> BuildReport:
    """Run the full copy-then-overlay sequence for one package.

    Raises:
        NotAPackageError: Before any copying, if the package root holds
            neither the manifest nor a marker file.
        ManifestParseError: After the bulk copy, if the manifest cannot be
            decoded.
    """
    reporter = reporter or BuildReporter()
    location = locate_manifest(config)
    if not location.has_manifest:
        reporter.warn(
            f"No {config.manifest_name} in {config.package_root}; "
            f"proceeding with defaults from {location.marker_path.name} location."
        )

    report = BuildReport(
        package_root=config.package_root,
        dist_root=config.dist_root,
        src_root=config.src_root,
        manifest_path=location.manifest_path,
        dry_run=config.dry_run,
    )
    copier = TreeCopier(reporter=reporter, dry_run=config.dry_run, verbose=config.verbose)

    reporter.info(f"Package: {report.package_root}")
    reporter.info(f"Dist:    {report.dist_root}")
    reporter.info(f"Src:     {report.src_root}")

    if report.src_root.is_dir():
        copier.copy_tree(report.src_root, report.dist_root)
    else:
        reporter.warn(f"src directory not found at {report.src_root}")

    if location.manifest_path is None:
        reporter.warn(f"{config.manifest_name} not found; skipped configs overlay.")
    else:
        manifest = load_manifest(location.manifest_path, decoder)
        if not manifest.has_copy:
            reporter.warn(f"No 'copy' entries in {config.manifest_name}; skipping configs copy.")
        report.operations = resolve_overlays(
            config.package_root,
            report.dist_root,
            manifest.directives,
            reporter,
            src_dir_name=config.src_dir_name,
            configs_dir_name=config.configs_dir_name,
        )
        for operation in report.operations:
            copier.copy_tree(operation.source, operation.destination)

    report.actions = list(copier.actions)
    report.warnings = reporter.warnings
    logger.debug("Recorded %d action(s) for %s", len(report.actions), report.package_root)
    reporter.info("Build completed.")
    return report


__all__ = ["BuildReport", "run_build"]
