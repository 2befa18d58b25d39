"""Prebuild configuration dataclasses."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .aliases import STAGING_DIR_NAME

DEFAULT_ICON_RELPATH = Path("icons") / "icon.png"
TARGET_OS_CHOICES = ("linux", "macos", "windows")


def host_target_os(platform: Optional[str] = None) -> str:
    name = sys.platform if platform is None else platform
    if name.startswith("linux"):
        return "linux"
    if name == "darwin":
        return "macos"
    if name.startswith(("win", "cygwin", "msys")):
        return "windows"
    return name


@dataclass(slots=True)
class PrebuildConfig:
    """Paths and tools used by a single prebuild invocation."""

    manifest_dir: Path
    out_dir: Path
    target_os: str
    pkg_config: str = "pkg-config"
    icon_relpath: Path = DEFAULT_ICON_RELPATH
    pkgconfig_dir: Optional[Path] = None

    @property
    def icon_path(self) -> Path:
        return self.manifest_dir / self.icon_relpath

    @property
    def staging_dir(self) -> Path:
        return self.out_dir / STAGING_DIR_NAME

    @property
    def bundled_pkgconfig_dir(self) -> Path:
        return self.pkgconfig_dir or self.manifest_dir / "pkgconfig"

    @classmethod
    def from_env(
        cls,
        manifest_dir: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "PrebuildConfig":
        env = os.environ if environ is None else environ
        if manifest_dir is None:
            manifest_dir = Path(env.get("CARGO_MANIFEST_DIR") or Path.cwd())
        out_dir = env.get("OUT_DIR")
        target_os = env.get("PREBUILD_TARGET_OS") or env.get("CARGO_CFG_TARGET_OS") or host_target_os()
        if target_os == "darwin":
            target_os = "macos"
        icon = env.get("PREBUILD_ICON_PATH")
        return cls(
            manifest_dir=manifest_dir,
            out_dir=Path(out_dir) if out_dir else manifest_dir / "build" / "prebuild",
            target_os=target_os,
            pkg_config=env.get("PKG_CONFIG") or "pkg-config",
            icon_relpath=Path(icon) if icon else DEFAULT_ICON_RELPATH,
        )


__all__ = ["PrebuildConfig", "DEFAULT_ICON_RELPATH", "TARGET_OS_CHOICES", "host_target_os"]
