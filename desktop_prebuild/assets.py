"""Guarantee the application icon exists before packaging."""

from __future__ import annotations

import base64
import binascii
from pathlib import Path

from loguru import logger

from .errors import AssetError

# 1x1 transparent PNG
PLACEHOLDER_ICON = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mP8z/C/HwAHAAL/3LjXLwAAAABJRU5ErkJggg=="
)


def placeholder_icon_bytes() -> bytes:
    try:
        return base64.b64decode(PLACEHOLDER_ICON, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise AssetError(f"Placeholder icon payload is corrupt: {exc}") from exc


def ensure_placeholder_icon(icon_path: Path) -> bool:
    """Write the built-in placeholder to ``icon_path`` unless it already exists.

    Returns ``True`` when the file was created. Any failure raises
    :class:`AssetError`; a build without its icon must not continue.
    """

    if icon_path.exists():
        logger.debug("Icon already present at {}", icon_path)
        return False

    payload = placeholder_icon_bytes()
    try:
        icon_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise AssetError(f"Failed to create icon directory: {exc}") from exc

    try:
        icon_path.write_bytes(payload)
    except OSError as exc:
        raise AssetError(f"Failed to write placeholder icon: {exc}") from exc

    logger.info("Wrote placeholder icon to {}", icon_path)
    return True


__all__ = ["PLACEHOLDER_ICON", "ensure_placeholder_icon", "placeholder_icon_bytes"]
