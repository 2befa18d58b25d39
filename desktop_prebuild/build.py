"""Prebuild orchestration run ahead of native packaging."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, TextIO

from loguru import logger

from .aliases import AliasCreator, AliasReport, ensure_library_aliases, select_alias_creator
from .assets import ensure_placeholder_icon
from .build_config import PrebuildConfig
from .pkg_config import LibraryDirResolver, PkgConfigResolver

ALIAS_TARGET_OS = "linux"
WARNING_DIRECTIVE = "cargo:warning={}"
LINK_SEARCH_DIRECTIVE = "cargo:rustc-link-search=native={}"


def warning_directive(message: str) -> str:
    # cargo reads one directive per line
    return WARNING_DIRECTIVE.format(" ".join(message.splitlines()))


@dataclass(slots=True)
class PrebuildReport:
    icon_path: Path
    icon_created: bool
    aliases: Optional[AliasReport] = None
    warnings: list[str] = field(default_factory=list)
    directives: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.aliases is None or self.aliases.success


def run_prebuild(
    config: PrebuildConfig,
    resolver: Optional[LibraryDirResolver] = None,
    creator: Optional[AliasCreator] = None,
) -> PrebuildReport:
    """Run the asset guarantee and, on Linux targets, the alias resolver.

    :class:`~desktop_prebuild.errors.AssetError` propagates untouched so the
    build stops before anything else happens.
    """

    logger.info("Running prebuild for {} ({})", config.manifest_dir, config.target_os)
    icon_created = ensure_placeholder_icon(config.icon_path)
    report = PrebuildReport(icon_path=config.icon_path, icon_created=icon_created)

    if config.target_os != ALIAS_TARGET_OS:
        logger.debug("Skipping library aliases for target {}", config.target_os)
        return report

    if resolver is None:
        resolver = PkgConfigResolver(config.pkg_config, search_dirs=[config.bundled_pkgconfig_dir])
    if creator is None:
        creator = select_alias_creator()

    aliases = ensure_library_aliases(config.staging_dir, resolver, creator)
    report.aliases = aliases
    report.warnings.extend(aliases.warnings)
    report.directives.extend(warning_directive(message) for message in aliases.warnings)
    if aliases.search_path is not None:
        report.directives.append(LINK_SEARCH_DIRECTIVE.format(aliases.search_path))
    return report


def emit_directives(report: PrebuildReport, stream: Optional[TextIO] = None) -> None:
    out = stream or sys.stdout
    for directive in report.directives:
        out.write(directive + "\n")
    out.flush()


__all__ = ["PrebuildReport", "run_prebuild", "emit_directives", "warning_directive"]
