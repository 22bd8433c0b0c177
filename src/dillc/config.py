"""Process-wide build settings and their environment overrides."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

BUILD_DIR_ENV = "DILLC_BUILD_DIR"
ENGINE_ROOT_ENV = "DILLC_ENGINE_ROOT"

DEFAULT_BUILD_DIR = Path("build")
MULTI_ROOT_SCHEME = "main-root"
COMPILE_TARGET = "flutter_runner"


@dataclass(frozen=True, slots=True)
class BuildConfig:
    build_dir: Path = DEFAULT_BUILD_DIR
    multi_root_scheme: str = MULTI_ROOT_SCHEME
    compile_target: str = COMPILE_TARGET
    engine_root: Path | None = None

    def fuchsia_build_directory(self) -> Path:
        return self.build_dir / "fuchsia"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> BuildConfig:
        """Read overrides from *environ* (defaults to ``os.environ``)."""
        env = os.environ if environ is None else environ
        build_dir = env.get(BUILD_DIR_ENV)
        engine_root = env.get(ENGINE_ROOT_ENV)
        return cls(
            build_dir=Path(build_dir) if build_dir else DEFAULT_BUILD_DIR,
            engine_root=Path(engine_root) if engine_root else None,
        )
