"""Core typed dataclasses for kernel compile requests and results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Literal

from dillc.errors import ValidationError

TargetPlatform = Literal["fuchsia_x64", "fuchsia_arm64"]

DEFAULT_PACKAGES_FILENAME = ".packages"
DEFAULT_TARGET = "lib/main.dart"


class BuildMode(StrEnum):
    DEBUG = "debug"
    PROFILE = "profile"
    RELEASE = "release"

    @classmethod
    def parse(cls, value: BuildMode | str) -> BuildMode:
        """Return the mode named by *value* or raise ``ValidationError``."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValidationError(
                "Expected build type to be debug, profile, or release.",
                hint="Pass one of: " + ", ".join(mode.value for mode in cls),
                context={"mode": str(value)},
            ) from None


@dataclass(frozen=True, slots=True)
class FuchsiaProject:
    directory: Path
    packages_file: Path
    app_name: str

    @classmethod
    def from_directory(
        cls,
        directory: str | Path,
        *,
        app_name: str | None = None,
        packages_file: str | Path | None = None,
    ) -> FuchsiaProject:
        root = Path(directory).resolve()
        packages = Path(packages_file) if packages_file is not None else root / DEFAULT_PACKAGES_FILENAME
        if not packages.is_absolute():
            packages = root / packages
        return cls(
            directory=root,
            packages_file=packages,
            app_name=app_name or root.name,
        )


@dataclass(frozen=True, slots=True)
class BuildRequest:
    project: FuchsiaProject
    target: str = DEFAULT_TARGET
    mode: BuildMode = BuildMode.DEBUG


@dataclass(frozen=True, slots=True)
class ResolvedPaths:
    dart_binary: Path
    frontend_server: Path
    sdk_root: Path
    platform_dill: Path
    output_dir: Path


@dataclass(frozen=True, slots=True)
class InvocationResult:
    exit_code: int
    command: tuple[str, ...]
    output_dill: Path
    far_manifest: Path
