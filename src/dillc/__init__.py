"""Public package entrypoint for the Fuchsia kernel compiler wrapper."""

from .artifacts import Artifact, Artifacts, LocalEngineArtifacts
from .compiler import KernelCompiler
from .config import BuildConfig
from .errors import (
    BuildExecutionError,
    DillcError,
    ErrorCode,
    ToolchainError,
    ValidationError,
)
from .flags import MODE_FLAGS, compile_flags, mode_flags
from .models import BuildMode, BuildRequest, FuchsiaProject, InvocationResult, ResolvedPaths
from .observability import BuildLogger, Status
from .process import LocalProcessManager, ProcessManager

__all__ = [
    "Artifact",
    "Artifacts",
    "BuildConfig",
    "BuildExecutionError",
    "BuildLogger",
    "BuildMode",
    "BuildRequest",
    "DillcError",
    "ErrorCode",
    "FuchsiaProject",
    "InvocationResult",
    "KernelCompiler",
    "LocalEngineArtifacts",
    "LocalProcessManager",
    "MODE_FLAGS",
    "ProcessManager",
    "ResolvedPaths",
    "Status",
    "ToolchainError",
    "ValidationError",
    "compile_flags",
    "mode_flags",
]
