"""Command-line entrypoint.

Usage:
    dillc build --mode release --target lib/main.dart --engine-root ~/engine
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path

from dillc.artifacts import LocalEngineArtifacts
from dillc.compiler import KernelCompiler
from dillc.config import ENGINE_ROOT_ENV, BuildConfig
from dillc.errors import DillcError, ValidationError
from dillc.models import DEFAULT_TARGET, BuildMode, FuchsiaProject
from dillc.observability import LOGGER_NAME, BuildLogger
from dillc.process import LocalProcessManager


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dillc", description="Fuchsia kernel compiler wrapper")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show compiler trace output")
    sub = parser.add_subparsers(dest="command", required=True)

    build_p = sub.add_parser("build", help="Compile an app to split .dilp files and a manifest")
    build_p.add_argument("--project", type=Path, default=Path("."), help="Project root directory")
    build_p.add_argument("--app-name", help="Component name (defaults to the project directory name)")
    build_p.add_argument("--packages", type=Path, help="Packages file, relative to the project root (default: .packages)")
    build_p.add_argument("--target", default=DEFAULT_TARGET, help="Entrypoint relative to the project root")
    build_p.add_argument(
        "--mode",
        choices=[mode.value for mode in BuildMode],
        default=BuildMode.DEBUG.value,
    )
    build_p.add_argument("--engine-root", type=Path, help=f"Engine artifact cache (or ${ENGINE_ROOT_ENV})")
    build_p.add_argument("--build-dir", type=Path, help="Build output root; kernel files go in <dir>/fuchsia")
    build_p.add_argument("--log-json", type=Path, help="Write structured log records to this file")
    return parser


def cmd_build(args: argparse.Namespace, logger: BuildLogger) -> None:
    config = BuildConfig.from_env()
    if args.build_dir is not None:
        config = replace(config, build_dir=args.build_dir)
    engine_root = args.engine_root or config.engine_root
    if engine_root is None:
        raise ValidationError(
            "No engine root configured.",
            hint=f"Pass --engine-root or set {ENGINE_ROOT_ENV}.",
        )

    project = FuchsiaProject.from_directory(
        args.project,
        app_name=args.app_name,
        packages_file=args.packages,
    )
    compiler = KernelCompiler(
        artifacts=LocalEngineArtifacts(engine_root=engine_root),
        process_manager=LocalProcessManager(),
        logger=logger,
        config=config,
    )
    result = compiler.build(project, args.target, args.mode)
    logger.print_status(f"Built {result.output_dill}")


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(format="%(message)s", stream=sys.stderr)
    logging.getLogger(LOGGER_NAME).setLevel(logging.DEBUG if args.verbose else logging.INFO)

    logger = BuildLogger(operation=args.command)
    try:
        if args.command == "build":
            cmd_build(args, logger)
    except DillcError as exc:
        logger.log(level="error", message=f"error[{exc.code}]: {exc}", extra=exc.to_dict())
        return 1
    finally:
        if getattr(args, "log_json", None) is not None:
            logger.to_json_lines(args.log_json)
    return 0


if __name__ == "__main__":
    sys.exit(main())
