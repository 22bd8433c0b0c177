"""Typed error model with stable, machine-readable error codes."""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import ClassVar


class ErrorCode(StrEnum):
    """Stable error identifiers used across the compiler invocation surface."""

    VALIDATION = "E_VALIDATION"
    ENVIRONMENT = "E_ENVIRONMENT"
    BUILD_EXECUTION = "E_BUILD_EXECUTION"


class DillcError(Exception):
    """Base error class that carries code, optional hint, and context.

    Subclasses pick their code through ``default_code``; ``code=`` overrides it
    for one instance.
    """

    default_code: ClassVar[ErrorCode] = ErrorCode.VALIDATION

    code: str
    hint: str | None
    context: Mapping[str, str]

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode | None = None,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = (code or self.default_code).value
        self.message = message
        self.hint = hint
        self.context = dict(context or {})

    def __str__(self) -> str:
        parts = [self.message]
        if self.hint:
            parts.append(f"Hint: {self.hint}")
        for key, value in self.context.items():
            if value:
                parts.append(f"  {key}: {value}")
        return "\n".join(parts)

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "code": self.code,
            "message": self.message,
            "context": dict(self.context),
        }
        if self.hint is not None:
            payload["hint"] = self.hint
        return payload


class ValidationError(DillcError):
    """Caller broke the invocation contract, e.g. an unknown build mode."""

    default_code = ErrorCode.VALIDATION


class ToolchainError(DillcError):
    """A required binary or engine artifact is missing or cannot be launched."""

    default_code = ErrorCode.ENVIRONMENT


class BuildExecutionError(DillcError):
    """The kernel compiler ran and exited with a non-zero status."""

    default_code = ErrorCode.BUILD_EXECUTION


__all__ = [
    "BuildExecutionError",
    "DillcError",
    "ErrorCode",
    "ToolchainError",
    "ValidationError",
]
