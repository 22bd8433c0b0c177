"""Wrapper around the frontend server that compiles Fuchsia apps to kernel files.

The app is compiled to a collection of ``.dilp`` files split along package
boundaries, plus a manifest that refers to them. Nothing here reads those
outputs back.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path, PurePath

from dillc.artifacts import Artifact, Artifacts
from dillc.config import BuildConfig
from dillc.errors import BuildExecutionError, ToolchainError
from dillc.flags import compile_flags, far_manifest_path, output_dill_path
from dillc.models import BuildMode, BuildRequest, FuchsiaProject, InvocationResult, ResolvedPaths
from dillc.observability import BuildLogger
from dillc.process import LocalProcessManager, ProcessManager, stream_process_output

PROGRESS_MESSAGE = "Building Fuchsia application..."


@dataclass(slots=True)
class KernelCompiler:
    artifacts: Artifacts
    process_manager: ProcessManager = field(default_factory=LocalProcessManager)
    logger: BuildLogger = field(default_factory=BuildLogger)
    config: BuildConfig = field(default_factory=BuildConfig)

    def build(
        self,
        project: FuchsiaProject,
        target: str,
        mode: BuildMode | str = BuildMode.DEBUG,
    ) -> InvocationResult:
        """Compile *project* with entrypoint *target* (e.g. ``lib/main.dart``)."""
        return self.run(BuildRequest(project=project, target=target, mode=BuildMode.parse(mode)))

    def run(self, request: BuildRequest) -> InvocationResult:
        mode = BuildMode.parse(request.mode)
        paths = self.resolve_paths(mode)
        project = request.project
        flags = compile_flags(
            mode=mode,
            target=request.target,
            sdk_root=paths.sdk_root,
            platform_dill=paths.platform_dill,
            fs_root=project.directory,
            relative_packages_file=_relative_to(project.packages_file, project.directory),
            output_dir=paths.output_dir,
            app_name=project.app_name,
            scheme=self.config.multi_root_scheme,
            compile_target=self.config.compile_target,
        )
        command = (str(paths.dart_binary), str(paths.frontend_server), *flags)

        try:
            process = self.process_manager.start(command)
        except OSError as exc:
            raise ToolchainError(
                f"Unable to launch Dart binary at {paths.dart_binary}",
                hint="Check that the engine artifacts match this host.",
                context={
                    "artifact": Artifact.ENGINE_DART_BINARY.value,
                    "error": str(exc),
                    "command": " ".join(command),
                },
            ) from exc
        status = self.logger.start_progress(PROGRESS_MESSAGE, timeout=None)
        try:
            exit_code = stream_process_output(
                process,
                on_stdout=self.logger.print_trace,
                on_stderr=self.logger.print_error,
            )
        finally:
            status.cancel()

        if exit_code != 0:
            raise BuildExecutionError(
                "Build process failed",
                hint="Check the compiler output above for details.",
                context={
                    "app": project.app_name,
                    "mode": mode.value,
                    "returncode": str(exit_code),
                    "command": " ".join(command),
                },
            )
        return InvocationResult(
            exit_code=exit_code,
            command=command,
            output_dill=output_dill_path(paths.output_dir, project.app_name),
            far_manifest=far_manifest_path(paths.output_dir, project.app_name),
        )

    def resolve_paths(self, mode: BuildMode) -> ResolvedPaths:
        """Look up every toolchain path and fail on the first missing one."""
        dart_binary = self.artifacts.get_artifact_path(Artifact.ENGINE_DART_BINARY)
        if not self.process_manager.can_run(dart_binary):
            raise ToolchainError(
                f"Unable to find Dart binary at {dart_binary}",
                hint="Point the engine root at an unpacked engine artifact cache.",
                context={"artifact": Artifact.ENGINE_DART_BINARY.value},
            )

        frontend_server = self.artifacts.get_artifact_path(Artifact.FRONTEND_SERVER_SNAPSHOT)
        if not Path(frontend_server).is_file():
            raise ToolchainError(
                f'Frontend server not found at "{frontend_server}"',
                context={"artifact": Artifact.FRONTEND_SERVER_SNAPSHOT.value},
            )

        sdk_root = self.artifacts.get_artifact_path(Artifact.FUCHSIA_PATCHED_SDK, mode=mode)
        platform_dill = self.artifacts.get_artifact_path(
            Artifact.FUCHSIA_PLATFORM_DILL,
            platform="fuchsia_x64",
            mode=mode,
        )
        if not Path(platform_dill).is_file():
            raise ToolchainError(
                f'Fuchsia platform file not found at "{platform_dill}"',
                context={"artifact": Artifact.FUCHSIA_PLATFORM_DILL.value, "mode": mode.value},
            )

        return ResolvedPaths(
            dart_binary=Path(dart_binary),
            frontend_server=Path(frontend_server),
            sdk_root=Path(sdk_root),
            platform_dill=Path(platform_dill),
            output_dir=self.config.fuchsia_build_directory(),
        )


def _relative_to(path: Path, root: Path) -> PurePath:
    return PurePath(os.path.relpath(path, root))
