"""Shared path constants for the package layout overlay-build works on."""

from __future__ import annotations

MANIFEST_FILENAME = "build.json"
PACKAGE_MARKER_FILENAMES = ("package.json",)
SRC_DIR = "src"
DIST_DIR = "dist"
CONFIGS_DIR = "configs"

__all__ = [
    "CONFIGS_DIR",
    "DIST_DIR",
    "MANIFEST_FILENAME",
    "PACKAGE_MARKER_FILENAMES",
    "SRC_DIR",
]
