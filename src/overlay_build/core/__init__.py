"""Core configuration and reporting exports."""

from .config import BuildConfig
from .constants import (
    CONFIGS_DIR,
    DIST_DIR,
    MANIFEST_FILENAME,
    PACKAGE_MARKER_FILENAMES,
    SRC_DIR,
)
from .reporting import BuildReporter

__all__ = [
    "BuildConfig",
    "BuildReporter",
    "CONFIGS_DIR",
    "DIST_DIR",
    "MANIFEST_FILENAME",
    "PACKAGE_MARKER_FILENAMES",
    "SRC_DIR",
]
