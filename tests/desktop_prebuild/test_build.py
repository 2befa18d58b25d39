"""Tests for prebuild orchestration."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from desktop_prebuild import assets
from desktop_prebuild.aliases import SymlinkAliasCreator
from desktop_prebuild.build import emit_directives, run_prebuild, warning_directive
from desktop_prebuild.build_config import PrebuildConfig
from desktop_prebuild.errors import AssetError


def _config(tmp_path: Path, target_os: str = "linux", pkg_config: str = "pkg-config") -> PrebuildConfig:
    return PrebuildConfig(
        manifest_dir=tmp_path / "src-tauri",
        out_dir=tmp_path / "target" / "out",
        target_os=target_os,
        pkg_config=pkg_config,
    )


def test_webkit_end_to_end(tmp_path: Path, libdir: Path, fake_resolver_factory) -> None:
    (libdir / "libwebkit2gtk-4.1.so").write_bytes(b"webkit")
    config = _config(tmp_path)
    resolver = fake_resolver_factory({"webkit2gtk-4.1": libdir})

    report = run_prebuild(config, resolver=resolver, creator=SymlinkAliasCreator())

    alias = config.staging_dir / "libwebkit2gtk-4.0.so"
    assert alias.exists()
    assert alias.read_bytes() == b"webkit"
    assert config.icon_path.exists()
    assert report.icon_created
    assert report.success
    assert report.directives[-1] == f"cargo:rustc-link-search=native={config.staging_dir}"
    assert sum(d.startswith("cargo:rustc-link-search") for d in report.directives) == 1


def test_absent_query_tool_still_registers_search_path(tmp_path: Path) -> None:
    config = _config(tmp_path, pkg_config="definitely-not-a-real-pkg-config-binary")

    report = run_prebuild(config)

    assert report.success
    assert len(report.warnings) == 4
    assert all(w.startswith("Missing pkg-config libdir") for w in report.warnings)
    assert report.directives[:4] == [f"cargo:warning={w}" for w in report.warnings]
    assert report.directives[4:] == [f"cargo:rustc-link-search=native={config.staging_dir}"]
    assert list(config.staging_dir.iterdir()) == []


def test_non_linux_target_only_guarantees_icon(tmp_path: Path, fake_resolver_factory) -> None:
    resolver = fake_resolver_factory()

    report = run_prebuild(_config(tmp_path, target_os="windows"), resolver=resolver)

    assert report.icon_path.exists()
    assert report.aliases is None
    assert report.directives == []
    assert resolver.queries == []


def test_corrupt_payload_aborts_before_aliases(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, fake_resolver_factory
) -> None:
    monkeypatch.setattr(assets, "PLACEHOLDER_ICON", "%%%")
    resolver = fake_resolver_factory()
    config = _config(tmp_path)

    with pytest.raises(AssetError):
        run_prebuild(config, resolver=resolver)

    assert resolver.queries == []
    assert not config.staging_dir.exists()


def test_existing_icon_is_reported_unchanged(tmp_path: Path, fake_resolver_factory) -> None:
    config = _config(tmp_path, target_os="macos")
    config.icon_path.parent.mkdir(parents=True)
    config.icon_path.write_bytes(b"designed icon")

    report = run_prebuild(config, resolver=fake_resolver_factory())

    assert not report.icon_created
    assert config.icon_path.read_bytes() == b"designed icon"


def test_emit_directives_writes_lines(tmp_path: Path, fake_resolver_factory) -> None:
    config = _config(tmp_path)
    report = run_prebuild(config, resolver=fake_resolver_factory(), creator=SymlinkAliasCreator())
    stream = io.StringIO()

    emit_directives(report, stream)

    lines = stream.getvalue().splitlines()
    assert lines == report.directives
    assert lines[-1].endswith(str(config.staging_dir))


def test_warning_directive_stays_on_one_line() -> None:
    assert warning_directive("first\nsecond\r\nthird") == "cargo:warning=first second third"


def test_multiline_errors_do_not_split_directives(tmp_path: Path, libdir: Path, fake_resolver_factory) -> None:
    class ExplodingCreator:
        def create(self, source: Path, alias: Path) -> None:
            raise OSError("cannot link\nsee dmesg")

    (libdir / "libwebkit2gtk-4.1.so").write_bytes(b"webkit")
    config = _config(tmp_path)
    report = run_prebuild(config, resolver=fake_resolver_factory({"webkit2gtk-4.1": libdir}), creator=ExplodingCreator())
    stream = io.StringIO()

    emit_directives(report, stream)

    lines = stream.getvalue().splitlines()
    assert len(lines) == len(report.directives)
    assert all(line.startswith("cargo:") for line in lines)
    assert any("cannot link see dmesg" in line for line in lines)
