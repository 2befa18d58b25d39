"""Prebuild utilities run ahead of desktop native packaging."""

from importlib.metadata import PackageNotFoundError, version

from .aliases import ALIAS_TABLE, AliasReport, AliasSpec, ensure_library_aliases
from .assets import ensure_placeholder_icon
from .build import PrebuildReport, emit_directives, run_prebuild
from .build_config import PrebuildConfig
from .errors import AssetError, PrebuildError
from .pkg_config import PkgConfigResolver

try:
    __version__ = version("desktop-prebuild")
except PackageNotFoundError:  # pragma: no cover - package metadata absent in dev
    __version__ = "0.0.0"

__all__ = [
    "__version__",
    "ALIAS_TABLE",
    "AliasReport",
    "AliasSpec",
    "AssetError",
    "PkgConfigResolver",
    "PrebuildConfig",
    "PrebuildError",
    "PrebuildReport",
    "emit_directives",
    "ensure_library_aliases",
    "ensure_placeholder_icon",
    "run_prebuild",
]
