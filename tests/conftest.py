"""Shared test fixtures."""

from __future__ import annotations

import io
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from dillc.artifacts import LocalEngineArtifacts
from dillc.config import BuildConfig
from dillc.models import BuildMode, FuchsiaProject
from dillc.observability import BuildLogger


@dataclass
class FakeProcess:
    stdout_bytes: bytes = b""
    stderr_bytes: bytes = b""
    returncode: int = 0

    def __post_init__(self) -> None:
        self.stdout = io.BytesIO(self.stdout_bytes)
        self.stderr = io.BytesIO(self.stderr_bytes)

    def wait(self) -> int:
        return self.returncode


@dataclass
class FakeProcessManager:
    """Records launched commands instead of running them."""

    process: FakeProcess = field(default_factory=FakeProcess)
    runnable: bool = True
    started: list[tuple[str, ...]] = field(default_factory=list)
    checked: list[str] = field(default_factory=list)

    def can_run(self, executable: str | Path) -> bool:
        self.checked.append(str(executable))
        return self.runnable and Path(executable).is_file()

    def start(self, command: Sequence[str]) -> FakeProcess:
        self.started.append(tuple(command))
        return self.process


@pytest.fixture
def engine_root(tmp_path: Path) -> Path:
    """Unpacked engine cache with the dart binary, snapshot and every platform dill."""
    root = tmp_path / "engine"
    dart = root / "dart-sdk" / "bin" / "dart"
    dart.parent.mkdir(parents=True)
    dart.write_text("#!/bin/sh\n", encoding="utf-8")
    dart.chmod(0o755)
    snapshot = root / "dart-sdk" / "bin" / "snapshots" / "frontend_server.dart.snapshot"
    snapshot.parent.mkdir(parents=True)
    snapshot.write_bytes(b"snapshot")
    for mode in BuildMode:
        sdk = root / "fuchsia" / mode.value / "flutter_runner_patched_sdk"
        sdk.mkdir(parents=True)
        (sdk / "platform_strong.dill").write_bytes(b"dill")
    return root


@pytest.fixture
def artifacts(engine_root: Path) -> LocalEngineArtifacts:
    return LocalEngineArtifacts(engine_root=engine_root)


@pytest.fixture
def project(tmp_path: Path) -> FuchsiaProject:
    root = tmp_path / "myapp"
    root.mkdir()
    (root / ".packages").write_text("myapp:lib/\n", encoding="utf-8")
    return FuchsiaProject.from_directory(root)


@pytest.fixture
def config(tmp_path: Path) -> BuildConfig:
    return BuildConfig(build_dir=tmp_path / "build")


@pytest.fixture
def build_logger() -> BuildLogger:
    return BuildLogger()


@pytest.fixture
def process_manager() -> FakeProcessManager:
    return FakeProcessManager()
