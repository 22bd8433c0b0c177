"""Engine artifact lookup for the kernel compiler toolchain."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Protocol

from dillc.errors import ValidationError
from dillc.models import BuildMode, TargetPlatform


class Artifact(StrEnum):
    ENGINE_DART_BINARY = "engine_dart_binary"
    FRONTEND_SERVER_SNAPSHOT = "frontend_server_snapshot"
    FUCHSIA_PATCHED_SDK = "fuchsia_patched_sdk"
    FUCHSIA_PLATFORM_DILL = "fuchsia_platform_dill"


class Artifacts(Protocol):
    def get_artifact_path(
        self,
        artifact: Artifact,
        *,
        platform: TargetPlatform | None = None,
        mode: BuildMode | None = None,
    ) -> Path:
        """Return where *artifact* lives; existence is not checked."""


@dataclass(frozen=True, slots=True)
class LocalEngineArtifacts:
    """Resolve artifacts inside an unpacked engine cache directory.

    Layout::

        <engine_root>/dart-sdk/bin/dart
        <engine_root>/dart-sdk/bin/snapshots/frontend_server.dart.snapshot
        <engine_root>/fuchsia/<mode>/flutter_runner_patched_sdk/
        <engine_root>/fuchsia/<mode>/flutter_runner_patched_sdk/platform_strong.dill

    The platform dill is not architecture specific, so ``platform`` only
    matters to resolvers that key on it.
    """

    engine_root: Path

    def get_artifact_path(
        self,
        artifact: Artifact,
        *,
        platform: TargetPlatform | None = None,
        mode: BuildMode | None = None,
    ) -> Path:
        dart_sdk = self.engine_root / "dart-sdk"
        if artifact is Artifact.ENGINE_DART_BINARY:
            return dart_sdk / "bin" / "dart"
        if artifact is Artifact.FRONTEND_SERVER_SNAPSHOT:
            return dart_sdk / "bin" / "snapshots" / "frontend_server.dart.snapshot"
        if artifact is Artifact.FUCHSIA_PATCHED_SDK:
            return self._patched_sdk(artifact, mode)
        if artifact is Artifact.FUCHSIA_PLATFORM_DILL:
            return self._patched_sdk(artifact, mode) / "platform_strong.dill"
        raise ValidationError(
            f"Unknown engine artifact: {artifact}",
            context={"engine_root": str(self.engine_root)},
        )

    def _patched_sdk(self, artifact: Artifact, mode: BuildMode | None) -> Path:
        if mode is None:
            raise ValidationError(
                f"Artifact {artifact} depends on the build mode.",
                hint="Pass mode= when resolving Fuchsia SDK artifacts.",
                context={"artifact": str(artifact)},
            )
        return self.engine_root / "fuchsia" / BuildMode.parse(mode).value / "flutter_runner_patched_sdk"
