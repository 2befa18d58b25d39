"""Library directory lookup through pkg-config."""

from __future__ import annotations

import os
import subprocess
from pathlib import Path
from typing import Iterable, Mapping, Optional, Protocol

from loguru import logger


class LibraryDirResolver(Protocol):
    def resolve_library_dir(self, package: str) -> Optional[Path]:
        ...


def pkg_config_environment(
    extra_dirs: Iterable[Path],
    base_env: Optional[Mapping[str, str]] = None,
) -> dict[str, str]:
    """Return ``base_env`` with existing ``extra_dirs`` prepended to PKG_CONFIG_PATH."""

    env = dict(os.environ if base_env is None else base_env)
    prefix = [str(path) for path in extra_dirs if path.is_dir()]
    if not prefix:
        return env
    existing = env.get("PKG_CONFIG_PATH")
    if existing:
        prefix.append(existing)
    env["PKG_CONFIG_PATH"] = os.pathsep.join(prefix)
    return env


class PkgConfigResolver:
    """Resolve ``libdir`` for a package by shelling out to pkg-config.

    Every failure mode (tool missing, non-zero exit, empty or undecodable
    output) yields ``None``; a system without a package's development
    metadata is normal.
    """

    def __init__(
        self,
        tool: str = "pkg-config",
        *,
        search_dirs: Iterable[Path] = (),
        env: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.tool = tool
        self.env = pkg_config_environment(search_dirs, env)

    def resolve_library_dir(self, package: str) -> Optional[Path]:
        cmd = [self.tool, "--variable=libdir", package]
        logger.debug("Running {}", " ".join(cmd))
        try:
            result = subprocess.run(cmd, capture_output=True, env=self.env)
            # paths are bytes on disk; fsdecode keeps non-UTF-8 names round-trippable
            libdir = os.fsdecode(result.stdout).strip()
        except (OSError, ValueError) as exc:
            logger.debug("Could not query {} for {}: {}", self.tool, package, exc)
            return None

        if result.returncode != 0:
            logger.debug(
                "{} exited with {} for {}: {}",
                self.tool,
                result.returncode,
                package,
                result.stderr.decode("utf-8", errors="replace").strip(),
            )
            return None

        if not libdir:
            logger.debug("{} reported an empty libdir for {}", self.tool, package)
            return None
        return Path(libdir)


__all__ = ["LibraryDirResolver", "PkgConfigResolver", "pkg_config_environment"]
