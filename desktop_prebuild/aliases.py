"""Compatibility aliases for shared libraries the linker looks up by old names.

Some distributions only ship the 4.1 WebKitGTK stack while the native
toolchain still links against the 4.0 names. For each entry of
:data:`ALIAS_TABLE` we look up the package's ``libdir`` and, when the real
library is there, expose it under the expected name inside a staging
directory that is then added to the linker search path.

Every per-entry problem is advisory: it is logged, recorded in the returned
:class:`AliasReport`, and processing moves on to the next entry.
"""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Protocol, Sequence

from loguru import logger

from .pkg_config import LibraryDirResolver

STAGING_DIR_NAME = "compat-libs"

STATUS_CREATED = "created"
STATUS_EXISTS = "exists"
STATUS_NO_LIBDIR = "no-libdir"
STATUS_MISSING_SOURCE = "missing-source"
STATUS_FAILED = "failed"


@dataclass(frozen=True, slots=True)
class AliasSpec:
    package: str
    expected_library_file: str
    desired_alias_file: str


ALIAS_TABLE: tuple[AliasSpec, ...] = (
    AliasSpec("webkit2gtk-4.1", "libwebkit2gtk-4.1.so", "libwebkit2gtk-4.0.so"),
    AliasSpec("webkit2gtk-4.1", "libwebkit2gtk-4.1.so.0", "libwebkit2gtk-4.0.so.0"),
    AliasSpec("javascriptcoregtk-4.1", "libjavascriptcoregtk-4.1.so", "libjavascriptcoregtk-4.0.so"),
    AliasSpec("javascriptcoregtk-4.1", "libjavascriptcoregtk-4.1.so.0", "libjavascriptcoregtk-4.0.so.0"),
)


@dataclass(slots=True)
class AliasOutcome:
    spec: AliasSpec
    status: str
    source: Optional[Path] = None
    alias: Optional[Path] = None
    message: Optional[str] = None


@dataclass(slots=True)
class AliasReport:
    """Result of one resolver pass."""

    staging_dir: Path
    outcomes: list[AliasOutcome] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    search_path: Optional[Path] = None
    success: bool = True

    @property
    def created(self) -> list[Path]:
        return [o.alias for o in self.outcomes if o.status == STATUS_CREATED and o.alias is not None]

    def warn(self, message: str) -> None:
        logger.warning(message)
        self.warnings.append(message)


class AliasCreator(Protocol):
    def create(self, source: Path, alias: Path) -> None:
        ...


class SymlinkAliasCreator:
    """Point ``alias`` at ``source`` with a symbolic link."""

    def create(self, source: Path, alias: Path) -> None:
        os.symlink(source, alias)


class CopyAliasCreator:
    """Copy the bytes of ``source`` to ``alias`` on hosts without symlinks."""

    def create(self, source: Path, alias: Path) -> None:
        if alias.exists():
            return
        shutil.copyfile(source, alias)


def select_alias_creator(os_name: Optional[str] = None) -> AliasCreator:
    name = os.name if os_name is None else os_name
    if name == "posix":
        return SymlinkAliasCreator()
    return CopyAliasCreator()


def _alias_present(alias: Path) -> bool:
    # a dangling link left by an earlier run still occupies the name
    return alias.exists() or alias.is_symlink()


def _process_entry(
    spec: AliasSpec,
    staging_dir: Path,
    resolver: LibraryDirResolver,
    creator: AliasCreator,
    report: AliasReport,
) -> AliasOutcome:
    libdir = resolver.resolve_library_dir(spec.package)
    if libdir is None:
        message = f"Missing pkg-config libdir for {spec.package}"
        report.warn(message)
        return AliasOutcome(spec, STATUS_NO_LIBDIR, message=message)

    source = libdir / spec.expected_library_file
    if not source.exists():
        message = f"Expected library {spec.expected_library_file} from {spec.package} at {source}"
        report.warn(message)
        return AliasOutcome(spec, STATUS_MISSING_SOURCE, source=source, message=message)

    alias = staging_dir / spec.desired_alias_file
    if _alias_present(alias):
        logger.debug("Alias {} already present", alias)
        return AliasOutcome(spec, STATUS_EXISTS, source=source, alias=alias)

    try:
        creator.create(source, alias)
    except OSError as exc:
        message = f"Failed to create compatibility alias {alias} -> {source}: {exc}"
        report.warn(message)
        return AliasOutcome(spec, STATUS_FAILED, source=source, alias=alias, message=message)

    logger.info("Created compatibility alias {} -> {}", alias, source)
    return AliasOutcome(spec, STATUS_CREATED, source=source, alias=alias)


def ensure_library_aliases(
    staging_dir: Path,
    resolver: LibraryDirResolver,
    creator: AliasCreator,
    specs: Sequence[AliasSpec] = ALIAS_TABLE,
) -> AliasReport:
    """Stage compatibility aliases and register ``staging_dir`` for linking.

    The search path is recorded once all entries are processed, whether or
    not any alias was created. It is only withheld when the staging
    directory itself cannot be prepared.
    """

    report = AliasReport(staging_dir=staging_dir)
    try:
        staging_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        report.warn(f"Failed to prepare compat lib dir: {exc}")
        report.success = False
        return report

    for spec in specs:
        report.outcomes.append(_process_entry(spec, staging_dir, resolver, creator, report))

    report.search_path = staging_dir
    logger.debug(
        "Alias pass finished: {} created, {} warnings",
        len(report.created),
        len(report.warnings),
    )
    return report


__all__ = [
    "ALIAS_TABLE",
    "STAGING_DIR_NAME",
    "AliasCreator",
    "AliasOutcome",
    "AliasReport",
    "AliasSpec",
    "CopyAliasCreator",
    "SymlinkAliasCreator",
    "ensure_library_aliases",
    "select_alias_creator",
]
