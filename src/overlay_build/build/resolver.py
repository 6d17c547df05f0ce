"""Resolve manifest copy directives into concrete overlay operations.

For a directive ``{"from": F, "configs": [N, ...]}`` each config name N maps

    <package>/F/src/configs/N  ->  <dist>/configs/N

Directive order and config order are preserved: later operations overwrite
earlier ones when destinations collide. Unusable directives and config names
are skipped with a warning; nothing here is fatal.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List

from overlay_build.build.manifest import CopyDirective
from overlay_build.core.constants import CONFIGS_DIR, SRC_DIR
from overlay_build.core.reporting import BuildReporter


@dataclass(frozen=True)
class OverlayOperation:
    """Copy one named config subtree from a source package into dist."""

    config: str
    source: Path
    destination: Path
    directive_index: int


def _is_path_segment(name: str) -> bool:
    if not name or name in {".", ".."}:
        return False
    return not any(sep in name for sep in ("/", "\\", "\x00"))


def resolve_source_package(package_root: Path, source: str) -> Path:
    """Resolve a directive's ``from`` against the package root."""
    return (package_root / source).resolve()


def resolve_overlays(
    package_root: Path,
    dist_root: Path,
    directives: Iterable[CopyDirective],
    reporter: BuildReporter,
    *,
    src_dir_name: str = SRC_DIR,
    configs_dir_name: str = CONFIGS_DIR,
) -> List[OverlayOperation]:
    """Turn copy directives into an ordered list of overlay operations."""
    operations: List[OverlayOperation] = []

    for directive in directives:
        if not directive.is_valid:
            problem = directive.problem or "missing 'from'"
            reporter.warn(f"Entry #{directive.index + 1} {problem}; skipping.")
            continue

        try:
            from_dir = resolve_source_package(package_root, directive.source)
        except (ValueError, OSError) as exc:
            reporter.warn(f"Entry #{directive.index + 1} has an unusable 'from' ({exc}); skipping.")
            continue
        if not from_dir.is_dir():
            reporter.warn(f"from path not found: {from_dir}")
            continue

        for name in directive.configs:
            if not _is_path_segment(name):
                reporter.warn(f"Config name {name!r} in entry #{directive.index + 1} is not a path segment; skipping.")
                continue
            src_cfg = from_dir / src_dir_name / configs_dir_name / name
            dst_cfg = dist_root / configs_dir_name / name
            reporter.info(f"Config [{name}]: {src_cfg} -> {dst_cfg}")
            operations.append(
                OverlayOperation(
                    config=name,
                    source=src_cfg,
                    destination=dst_cfg,
                    directive_index=directive.index,
                )
            )

    return operations


__all__ = ["OverlayOperation", "resolve_overlays", "resolve_source_package"]
