"""Command-line surface for overlay-build."""
