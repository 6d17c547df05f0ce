from __future__ import annotations

import io
import json
from pathlib import Path
from typing import Callable

import pytest
from rich.console import Console

from overlay_build.core.reporting import BuildReporter


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """Create *files* (relative path -> text) under *root*."""
    for rel, content in files.items():
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    return root


def snapshot(root: Path) -> dict[str, bytes]:
    """Map every file under *root* (relative posix path) to its bytes."""
    if not root.exists():
        return {}
    return {
        path.relative_to(root).as_posix(): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


@pytest.fixture()
def reporter() -> BuildReporter:
    """Reporter writing into in-memory consoles."""
    return BuildReporter(
        console=Console(file=io.StringIO(), width=200),
        err_console=Console(file=io.StringIO(), width=200),
    )


@pytest.fixture()
def make_package(tmp_path: Path) -> Callable[..., Path]:
    """Factory creating a package directory with optional manifest and files."""

    def _make(
        name: str = "pkg",
        files: dict[str, str] | None = None,
        manifest: dict | str | None = None,
        marker: bool = False,
    ) -> Path:
        root = tmp_path / name
        root.mkdir(parents=True, exist_ok=True)
        write_tree(root, files or {})
        if manifest is not None:
            text = manifest if isinstance(manifest, str) else json.dumps(manifest)
            (root / "build.json").write_text(text, encoding="utf-8")
        if marker:
            (root / "package.json").write_text('{"name": "%s"}' % name, encoding="utf-8")
        return root

    return _make


@pytest.fixture()
def write_files() -> Callable[[Path, dict[str, str]], Path]:
    return write_tree


@pytest.fixture()
def tree_snapshot() -> Callable[[Path], dict[str, bytes]]:
    return snapshot
