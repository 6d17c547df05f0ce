"""CLI command modules for overlay-build."""

from .build import build

__all__ = ["build"]
