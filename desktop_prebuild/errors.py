"""Exceptions raised by the prebuild steps."""

from __future__ import annotations


class PrebuildError(RuntimeError):
    """Base class for failures that must stop the build."""


class AssetError(PrebuildError):
    """The required asset could not be materialized."""


__all__ = ["PrebuildError", "AssetError"]
