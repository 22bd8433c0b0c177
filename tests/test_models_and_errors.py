from pathlib import Path

import pytest

from dillc.errors import (
    BuildExecutionError,
    DillcError,
    ErrorCode,
    ToolchainError,
    ValidationError,
)
from dillc.models import BuildMode, FuchsiaProject


def test_build_mode_parse_accepts_members_and_values() -> None:
    assert BuildMode.parse(BuildMode.PROFILE) is BuildMode.PROFILE
    assert BuildMode.parse("release") is BuildMode.RELEASE


@pytest.mark.parametrize("value", ["Debug", "jit_release", ""])
def test_build_mode_parse_rejects_unknown_values(value: str) -> None:
    with pytest.raises(ValidationError) as excinfo:
        BuildMode.parse(value)

    assert excinfo.value.context["mode"] == value
    assert excinfo.value.__cause__ is None


def test_project_from_directory_defaults(tmp_path: Path) -> None:
    root = tmp_path / "hello_app"
    root.mkdir()

    project = FuchsiaProject.from_directory(root)

    assert project.directory == root.resolve()
    assert project.packages_file == root.resolve() / ".packages"
    assert project.app_name == "hello_app"


def test_project_from_directory_overrides(tmp_path: Path) -> None:
    packages = tmp_path / "elsewhere" / ".packages"

    project = FuchsiaProject.from_directory(tmp_path, app_name="named", packages_file=packages)

    assert project.app_name == "named"
    assert project.packages_file == packages


def test_error_codes_are_stable_and_machine_readable() -> None:
    errors = [
        ValidationError("bad input"),
        ToolchainError("missing binary"),
        BuildExecutionError("compiler failed"),
    ]
    assert [error.code for error in errors] == [
        ErrorCode.VALIDATION.value,
        ErrorCode.ENVIRONMENT.value,
        ErrorCode.BUILD_EXECUTION.value,
    ]
    assert all(isinstance(error, DillcError) for error in errors)


def test_error_rendering_and_payload() -> None:
    error = BuildExecutionError(
        "Build process failed",
        hint="Check the compiler output.",
        context={"returncode": "1", "stderr": ""},
    )

    rendered = str(error)
    assert rendered.splitlines() == [
        "Build process failed",
        "Hint: Check the compiler output.",
        "  returncode: 1",
    ]
    assert error.to_dict() == {
        "code": "E_BUILD_EXECUTION",
        "message": "Build process failed",
        "context": {"returncode": "1", "stderr": ""},
        "hint": "Check the compiler output.",
    }


def test_explicit_code_overrides_class_default() -> None:
    error = ToolchainError("launch failed", code=ErrorCode.BUILD_EXECUTION)

    assert error.code == "E_BUILD_EXECUTION"
    assert DillcError("plain").code == "E_VALIDATION"
