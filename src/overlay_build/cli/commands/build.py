"""The ``overlay-build`` command.

Usage:
    overlay-build                    # build the package in the current directory
    overlay-build --pkg path/to/pkg  # build another package
    overlay-build --dry-run          # print every mkdir/copy without performing it

Copies ``<pkg>/src`` into ``<pkg>/dist``, then overlays each config listed in
``<pkg>/build.json`` from ``<from>/src/configs/<name>`` into
``<pkg>/dist/configs/<name>``. Overlays take precedence over the bulk copy.

Exit codes: 0 success (warnings included), 2 usage error, 3 manifest parse
error, 4 not a package.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from overlay_build.build.errors import BuildError
from overlay_build.build.orchestrator import run_build
from overlay_build.core.reporting import BuildReporter
from overlay_build.core.config import BuildConfig


def build(
    pkg: Optional[Path] = typer.Option(
        None,
        "--pkg",
        help="Package directory containing build.json or package.json (default: current directory)",
        envvar="OVERLAY_BUILD_PKG",
        exists=True,
        file_okay=False,
        dir_okay=True,
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Print actions without performing copies",
        envvar="OVERLAY_BUILD_DRY_RUN",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Also print each action during a real run"),
) -> None:
    """Copy src/ into dist/ and overlay configs listed in build.json."""
    config = BuildConfig.from_options(pkg, dry_run=dry_run, verbose=verbose)
    reporter = BuildReporter()

    try:
        run_build(config, reporter)
    except BuildError as exc:
        reporter.error(str(exc))
        raise typer.Exit(exc.exit_code)
    except OSError as exc:
        reporter.error(f"Copy failed: {exc}")
        raise typer.Exit(1)


__all__ = ["build"]
