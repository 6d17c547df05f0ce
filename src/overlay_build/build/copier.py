"""Non-destructive recursive tree copy with a recorded action plan.

Every filesystem mutation goes through ``TreeCopier``, which appends a
``PlannedAction`` before (optionally) performing it. Dry-run and real runs
therefore produce the same plan for the same inputs; only the real run
touches the disk.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

from overlay_build.core.reporting import BuildReporter

logger = logging.getLogger(__name__)


class ActionKind(str, Enum):
    MKDIR = "mkdir"
    COPY = "copy"


@dataclass(frozen=True)
class PlannedAction:
    """A single filesystem mutation, planned or performed."""

    kind: ActionKind
    destination: Path
    source: Optional[Path] = None

    def describe(self) -> str:
        if self.kind is ActionKind.MKDIR:
            return f"mkdir -p {self.destination}"
        return f"copy: {self.source} -> {self.destination}"


def merge_tree(source: Path, destination: Path) -> None:
    """Recursively merge *source* into *destination*.

    A symlink or file already at a target path is replaced; a directory is
    merged into. Links are recreated with their original (possibly dangling
    or self-referential) target.
    """
    destination.mkdir(parents=True, exist_ok=True)
    for entry in sorted(source.iterdir()):
        target = destination / entry.name
        if entry.is_symlink():
            if target.is_symlink() or target.is_file():
                target.unlink()
            target.symlink_to(entry.readlink())
        elif entry.is_dir():
            if target.is_symlink():
                target.unlink()
            merge_tree(entry, target)
        else:
            if target.is_symlink():
                target.unlink()
            shutil.copy2(entry, target)
    shutil.copystat(source, destination)


@dataclass
class TreeCopier:
    """Copy directory trees into place, or just plan the copies.

    Attributes:
        reporter: Status output; planned actions are echoed in dry-run mode
            and, when ``verbose`` is set, in real runs too.
        dry_run: Record actions without performing them.
        verbose: Echo actions during a real run.
        actions: Every action recorded so far, in execution order.
    """

    reporter: BuildReporter
    dry_run: bool = False
    verbose: bool = False
    actions: List[PlannedAction] = field(default_factory=list)

    def _record(self, action: PlannedAction) -> None:
        self.actions.append(action)
        if self.dry_run or self.verbose:
            self.reporter.info(action.describe())

    def mkdir(self, path: Path) -> None:
        """Ensure *path* exists, parents included."""
        self._record(PlannedAction(ActionKind.MKDIR, path))
        if not self.dry_run:
            path.mkdir(parents=True, exist_ok=True)

    def copy_tree(self, source: Path, destination: Path) -> bool:
        """Merge the contents of *source* into *destination*.

        Entries only present in *destination* are left alone, entries present
        in both are overwritten, and subdirectories are merged recursively.
        Dot-prefixed entries are copied like any other. Symlinks are copied
        as links, never followed. Modes and timestamps are kept where the
        platform allows (``shutil.copy2``).

        Returns:
            True if the copy was planned/performed, False if *source* is
            missing and the copy was skipped with a warning.
        """
        if not source.is_dir():
            self.reporter.warn(f"Source not found, skipping: {source}")
            return False

        self.mkdir(destination)
        self._record(PlannedAction(ActionKind.COPY, destination, source))
        if not self.dry_run:
            merge_tree(source, destination)
            logger.debug("Copied %s -> %s", source, destination)
        return True


__all__ = ["ActionKind", "PlannedAction", "TreeCopier", "merge_tree"]
