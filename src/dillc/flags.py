"""Frontend server command-line assembly.

The flag list is a pure function of the build mode and the resolved paths so
it can be checked without launching anything.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path, PurePath
from types import MappingProxyType

from dillc.config import COMPILE_TARGET, MULTI_ROOT_SCHEME
from dillc.models import BuildMode

_BYTECODE_FLAGS = ("--gen-bytecode", "--drop-ast")

MODE_FLAGS: Mapping[BuildMode, tuple[str, ...]] = MappingProxyType(
    {
        BuildMode.DEBUG: ("--embed-source-text", *_BYTECODE_FLAGS),
        BuildMode.PROFILE: (
            "--no-embed-source-text",
            "-Ddart.vm.profile=true",
            *_BYTECODE_FLAGS,
        ),
        BuildMode.RELEASE: (
            "--no-embed-source-text",
            "-Ddart.vm.release=true",
            *_BYTECODE_FLAGS,
        ),
    }
)


def mode_flags(mode: BuildMode | str) -> tuple[str, ...]:
    return MODE_FLAGS[BuildMode.parse(mode)]


def multi_root_uri(scheme: str, path: str | PurePath) -> str:
    return f"{scheme}:///{PurePath(path).as_posix()}"


def output_dill_path(output_dir: Path, app_name: str) -> Path:
    return output_dir / f"{app_name}.dil"


def far_manifest_path(output_dir: Path, app_name: str) -> Path:
    return output_dir / f"{app_name}.dilpmanifest"


def base_flags(
    *,
    sdk_root: Path,
    platform_dill: Path,
    fs_root: Path,
    relative_packages_file: str | PurePath,
    output_dir: Path,
    app_name: str,
    scheme: str = MULTI_ROOT_SCHEME,
    compile_target: str = COMPILE_TARGET,
) -> tuple[str, ...]:
    return (
        "--target", compile_target,
        "--sdk-root", str(sdk_root),
        "--platform", str(platform_dill),
        "--filesystem-scheme", scheme,
        "--filesystem-root", str(fs_root),
        "--packages", multi_root_uri(scheme, relative_packages_file),
        "--output-dill", str(output_dill_path(output_dir, app_name)),
        "--no-link-platform",
        "--split-output-by-packages",
        "--far-manifest", str(far_manifest_path(output_dir, app_name)),
        "--component-name", app_name,
    )  # fmt: skip


def compile_flags(
    *,
    mode: BuildMode | str,
    target: str,
    sdk_root: Path,
    platform_dill: Path,
    fs_root: Path,
    relative_packages_file: str | PurePath,
    output_dir: Path,
    app_name: str,
    scheme: str = MULTI_ROOT_SCHEME,
    compile_target: str = COMPILE_TARGET,
) -> tuple[str, ...]:
    """Return the full frontend server argument list, entrypoint last."""
    extra = mode_flags(mode)
    return (
        *base_flags(
            sdk_root=sdk_root,
            platform_dill=platform_dill,
            fs_root=fs_root,
            relative_packages_file=relative_packages_file,
            output_dir=output_dir,
            app_name=app_name,
            scheme=scheme,
            compile_target=compile_target,
        ),
        *extra,
        multi_root_uri(scheme, target),
    )
