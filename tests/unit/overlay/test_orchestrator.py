"""Tests for overlay_build.build.orchestrator - the full build sequence.

Covers idempotence, overlay precedence and ordering, non-destructiveness,
dry-run equivalence, tolerance of missing optional inputs, and the fatal
error paths.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from overlay_build.build.copier import ActionKind
from overlay_build.build.errors import ManifestParseError, NotAPackageError
from overlay_build.build.orchestrator import run_build
from overlay_build.core.config import BuildConfig


def _build(root: Path, reporter, **options):
    return run_build(BuildConfig.from_options(root, **options), reporter)


class TestExampleScenario:
    def test_bulk_copy_then_overlay_then_rebuild(self, make_package, reporter) -> None:
        root = make_package(
            files={"src/index.txt": "A", "src/configs/base/env.txt": "B"},
            manifest={"copy": [{"from": ".", "configs": ["base"]}]},
        )

        _build(root, reporter)

        assert (root / "dist" / "index.txt").read_text() == "A"
        assert (root / "dist" / "configs" / "base" / "env.txt").read_text() == "B"

        (root / "src" / "configs" / "base" / "env.txt").write_text("C")
        _build(root, reporter)

        assert (root / "dist" / "configs" / "base" / "env.txt").read_text() == "C"
        assert (root / "dist" / "index.txt").read_text() == "A"


class TestBuildProperties:
    def test_idempotent(self, make_package, reporter, tree_snapshot) -> None:
        make_package(name="shared", files={"src/configs/ci/.env": "shared-ci"})
        root = make_package(
            files={"src/a.txt": "a", "src/sub/.hidden": "h"},
            manifest={"copy": [{"from": "../shared", "configs": ["ci"]}]},
        )

        _build(root, reporter)
        first = tree_snapshot(root / "dist")
        _build(root, reporter)

        assert tree_snapshot(root / "dist") == first
        assert first["configs/ci/.env"] == b"shared-ci"

    def test_overlay_beats_bulk_copy(self, make_package, reporter) -> None:
        make_package(name="shared", files={"src/configs/base/env.txt": "overlay"})
        root = make_package(
            files={"src/configs/base/env.txt": "bulk", "src/configs/base/local.txt": "local"},
            manifest={"copy": [{"from": "../shared", "configs": ["base"]}]},
        )

        _build(root, reporter)

        assert (root / "dist" / "configs" / "base" / "env.txt").read_text() == "overlay"
        # Overlay is a merge, so bulk-only files survive
        assert (root / "dist" / "configs" / "base" / "local.txt").read_text() == "local"

    def test_later_directive_wins(self, make_package, reporter) -> None:
        make_package(name="first", files={"src/configs/x/value.txt": "first"})
        make_package(name="second", files={"src/configs/x/value.txt": "second"})
        root = make_package(
            manifest={
                "copy": [
                    {"from": "../first", "configs": ["x"]},
                    {"from": "../second", "configs": ["x"]},
                ]
            },
        )

        report = _build(root, reporter)

        assert (root / "dist" / "configs" / "x" / "value.txt").read_text() == "second"
        assert [op.directive_index for op in report.operations] == [0, 1]

    def test_pre_existing_dist_content_survives(self, make_package, reporter) -> None:
        root = make_package(
            files={
                "src/a.txt": "a",
                "src/configs/base/env.txt": "B",
                "dist/untouched.txt": "keep",
                "dist/configs/base/extra.txt": "keep",
            },
            manifest={"copy": [{"from": ".", "configs": ["base"]}]},
        )

        _build(root, reporter)

        assert (root / "dist" / "untouched.txt").read_text() == "keep"
        assert (root / "dist" / "configs" / "base" / "extra.txt").read_text() == "keep"
        assert (root / "src" / "a.txt").exists()

    def test_dry_run_plans_exactly_what_a_real_run_does(self, make_package, reporter, tree_snapshot) -> None:
        make_package(name="shared", files={"src/configs/ci/a.txt": "ci"})
        root = make_package(
            files={"src/a.txt": "a"},
            manifest={
                "copy": [
                    {"from": "../shared", "configs": ["ci", "missing"]},
                    {"from": "../ghost", "configs": ["ci"]},
                ]
            },
        )

        planned = _build(root, reporter, dry_run=True)
        assert not (root / "dist").exists()

        performed = _build(root, reporter)

        assert planned.dry_run and not performed.dry_run
        assert planned.actions == performed.actions
        assert [a.kind for a in performed.actions] == [
            ActionKind.MKDIR,
            ActionKind.COPY,
            ActionKind.MKDIR,
            ActionKind.COPY,
        ]
        assert tree_snapshot(root / "dist") == {"a.txt": b"a", "configs/ci/a.txt": b"ci"}

    def test_no_src_and_empty_copy_still_succeeds(self, make_package, reporter) -> None:
        root = make_package(manifest={"copy": []})

        report = _build(root, reporter)

        assert not (root / "dist").exists()
        assert report.actions == []
        assert report.warnings == [f"src directory not found at {root / 'src'}"]

    @pytest.mark.parametrize("manifest", [{}, {"copy": None}])
    def test_missing_copy_key_warns(self, make_package, reporter, manifest: dict) -> None:
        root = make_package(files={"src/a.txt": "a"}, manifest=manifest)

        report = _build(root, reporter)

        assert report.warnings == ["No 'copy' entries in build.json; skipping configs copy."]
        assert (root / "dist" / "a.txt").read_text() == "a"

    def test_nul_byte_in_from_is_skipped(self, make_package, reporter) -> None:
        root = make_package(
            files={"src/a.txt": "a", "src/configs/base/env.txt": "B"},
            manifest={"copy": [{"from": "a\u0000b", "configs": ["x"]}, {"from": ".", "configs": ["base"]}]},
        )

        report = _build(root, reporter)

        assert report.warnings == ["Entry #1 has a NUL byte in 'from'; skipping."]
        assert [op.config for op in report.operations] == ["base"]
        assert ("info", "Build completed.") in reporter.messages


class TestMissingInputs:
    def test_marker_only_package_copies_src_and_skips_overlays(self, make_package, reporter) -> None:
        root = make_package(files={"src/a.txt": "a"}, marker=True)

        report = _build(root, reporter)

        assert (root / "dist" / "a.txt").read_text() == "a"
        assert report.manifest_path is None
        assert report.operations == []
        assert report.warnings == [
            f"No build.json in {root}; proceeding with defaults from package.json location.",
            "build.json not found; skipped configs overlay.",
        ]

    def test_missing_config_subtree_warns(self, make_package, reporter) -> None:
        root = make_package(manifest={"copy": [{"from": ".", "configs": ["absent"]}]})

        report = _build(root, reporter)

        missing = root / "src" / "configs" / "absent"
        assert f"Source not found, skipping: {missing}" in report.warnings
        assert not (root / "dist" / "configs" / "absent").exists()

    def test_report_paths(self, make_package, reporter) -> None:
        root = make_package(manifest={})

        report = _build(root, reporter)

        assert report.package_root == root
        assert report.dist_root == root / "dist"
        assert report.src_root == root / "src"
        assert report.manifest_path == root / "build.json"
        assert ("info", "Build completed.") in reporter.messages


class TestFatalErrors:
    def test_not_a_package_aborts_before_copying(self, make_package, reporter) -> None:
        root = make_package(files={"src/a.txt": "a"})

        with pytest.raises(NotAPackageError):
            _build(root, reporter)

        assert not (root / "dist").exists()

    def test_invalid_manifest_aborts_after_bulk_copy(self, make_package, reporter) -> None:
        root = make_package(files={"src/a.txt": "a"}, manifest="{ not json")

        with pytest.raises(ManifestParseError):
            _build(root, reporter)

        # No rollback of work completed before the failure
        assert (root / "dist" / "a.txt").read_text() == "a"
        assert ("info", "Build completed.") not in reporter.messages
