"""Command line entry point for the prebuild step."""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

from .build import emit_directives, run_prebuild
from .build_config import TARGET_OS_CHOICES, PrebuildConfig
from .errors import PrebuildError
from .logger import setup_logging


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Prepare assets and library aliases before packaging")
    parser.add_argument("--manifest-dir", type=Path, help="Directory holding the native manifest")
    parser.add_argument("--out-dir", type=Path, help="Build output directory for staged files")
    parser.add_argument("--target-os", choices=TARGET_OS_CHOICES, help="Override the target platform")
    parser.add_argument("--pkg-config", help="pkg-config executable to query")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Console log level",
    )
    parser.add_argument("--log-dir", help="Also write structured logs to this directory")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    setup_logging(console_level=args.log_level, log_directory=args.log_dir)

    manifest_dir = args.manifest_dir.resolve() if args.manifest_dir else None
    load_dotenv((manifest_dir or Path.cwd()) / ".env", override=False)

    config = PrebuildConfig.from_env(manifest_dir)
    if args.out_dir:
        config = replace(config, out_dir=args.out_dir)
    if args.target_os:
        config = replace(config, target_os=args.target_os)
    if args.pkg_config:
        config = replace(config, pkg_config=args.pkg_config)

    try:
        report = run_prebuild(config)
    except PrebuildError as exc:
        logger.exception("Prebuild failed: {}", exc)
        return 1

    emit_directives(report)
    if report.warnings:
        logger.warning("Prebuild finished with {} warnings", len(report.warnings))
    else:
        logger.success("Prebuild finished")
    return 0


__all__ = ["main", "parse_args"]
