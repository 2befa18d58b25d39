"""Pytest configuration for prebuild tests."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import pytest

ROOT = Path(__file__).resolve().parents[1]

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


class FakeResolver:
    """Deterministic stand-in for pkg-config."""

    def __init__(self, libdirs: Optional[dict[str, Path]] = None) -> None:
        self.libdirs = libdirs or {}
        self.queries: list[str] = []

    def resolve_library_dir(self, package: str) -> Optional[Path]:
        self.queries.append(package)
        return self.libdirs.get(package)


@pytest.fixture
def fake_resolver_factory():
    return FakeResolver


@pytest.fixture
def libdir(tmp_path: Path) -> Path:
    path = tmp_path / "usr" / "lib" / "x86_64-linux-gnu"
    path.mkdir(parents=True)
    return path
