"""Build manifest discovery and decoding.

A package is buildable when its root holds ``build.json`` (the manifest) or,
failing that, one of the package marker files (``package.json``). The
manifest is a small JSON document::

    {
      "copy": [
        {"from": "../shared", "configs": ["base", "ci"]}
      ]
    }

Decoding is delegated to an injectable ``ManifestDecoder`` (``json.loads``
by default); this module only maps the decoded value onto typed directives.
A malformed ``copy`` entry never aborts the read: it becomes an invalid
``CopyDirective`` carrying a ``problem`` that the resolver reports and skips.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from overlay_build.build.errors import ManifestParseError, NotAPackageError
from overlay_build.core.config import BuildConfig

logger = logging.getLogger(__name__)

ManifestDecoder = Callable[[bytes], Any]


class CopyDirective(BaseModel):
    """One ``copy`` entry: overlay ``configs`` from the package at ``from``.

    Attributes:
        index: Zero-based position of the entry in the manifest.
        source: The raw ``from`` value, relative to the package root.
        configs: Config names to overlay, in manifest order.
        problem: Why the entry is unusable, or None when it is well formed.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    index: int = Field(..., ge=0)
    source: Optional[str] = Field(default=None, alias="from")
    configs: List[str] = Field(default_factory=list)
    problem: Optional[str] = None

    @field_validator("configs", mode="before")
    @classmethod
    def _null_configs_are_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def is_valid(self) -> bool:
        return self.problem is None and bool(self.source)


class BuildManifest(BaseModel):
    """Decoded manifest: the ordered copy directives.

    ``has_copy`` is False when the document has no ``copy`` key or it is null;
    an explicit empty array counts as present.
    """

    path: Path
    directives: List[CopyDirective] = Field(default_factory=list)
    has_copy: bool = False


@dataclass(frozen=True)
class ManifestLocation:
    """Result of probing a package root for a manifest or marker file."""

    package_root: Path
    manifest_path: Path | None = None
    marker_path: Path | None = None

    @property
    def has_manifest(self) -> bool:
        return self.manifest_path is not None


def locate_manifest(config: BuildConfig) -> ManifestLocation:
    """Find the manifest, or a package marker standing in for it.

    Raises:
        NotAPackageError: If the root holds neither.
    """
    root = config.package_root
    if config.manifest_path.is_file():
        return ManifestLocation(package_root=root, manifest_path=config.manifest_path)

    for marker_name in config.marker_names:
        marker = root / marker_name
        if marker.is_file():
            logger.debug("No manifest in %s; using marker %s", root, marker)
            return ManifestLocation(package_root=root, marker_path=marker)

    raise NotAPackageError(root, config.manifest_name, config.marker_names)


def _describe_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    where = ".".join(str(part) for part in first.get("loc", ())) or "entry"
    return f"invalid '{where}': {first.get('msg', 'validation failed')}"


def parse_directive(index: int, raw: Any) -> CopyDirective:
    """Map one decoded ``copy`` entry onto a directive, never raising."""
    if not isinstance(raw, dict):
        return CopyDirective(index=index, problem=f"entry is a {type(raw).__name__}, not an object")

    source = raw.get("from")
    if source is None or source == "":
        return CopyDirective(index=index, problem="missing 'from'")
    if isinstance(source, str) and "\x00" in source:
        return CopyDirective(index=index, problem="has a NUL byte in 'from'")

    try:
        return CopyDirective.model_validate(
            {"index": index, "from": source, "configs": raw.get("configs")}
        )
    except ValidationError as exc:
        return CopyDirective(
            index=index,
            source=source if isinstance(source, str) else None,
            problem=_describe_validation_error(exc),
        )


def decode_manifest(path: Path, payload: bytes, decoder: ManifestDecoder = json.loads) -> BuildManifest:
    """Decode manifest bytes into a ``BuildManifest``.

    Raises:
        ManifestParseError: If the payload is not valid JSON, is not an
            object, or carries a ``copy`` value that is not a list.
    """
    try:
        data = decoder(payload)
    except (ValueError, TypeError) as exc:
        raise ManifestParseError(path, str(exc)) from exc

    if not isinstance(data, dict):
        raise ManifestParseError(path, f"expected a JSON object, got {type(data).__name__}")

    entries = data.get("copy")
    if entries is None:
        return BuildManifest(path=path)
    if not isinstance(entries, list):
        raise ManifestParseError(path, f"'copy' must be an array, got {type(entries).__name__}")

    directives = [parse_directive(index, raw) for index, raw in enumerate(entries)]
    logger.debug("Decoded %d copy directive(s) from %s", len(directives), path)
    return BuildManifest(path=path, directives=directives, has_copy=True)


def load_manifest(path: Path, decoder: ManifestDecoder = json.loads) -> BuildManifest:
    """Read and decode the manifest at *path*."""
    try:
        payload = path.read_bytes()
    except OSError as exc:
        raise ManifestParseError(path, exc.strerror or str(exc)) from exc
    return decode_manifest(path, payload, decoder)


__all__ = [
    "BuildManifest",
    "CopyDirective",
    "ManifestDecoder",
    "ManifestLocation",
    "decode_manifest",
    "load_manifest",
    "locate_manifest",
    "parse_directive",
]
