"""Error taxonomy for catalog lookup, argument binding and script execution."""

from __future__ import annotations

from typing import Any, Iterable


class ScriptControllerError(RuntimeError):
    """Structured error surfaced to callers of the dispatcher."""

    code = "script_controller_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.reason = message

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "reason": self.reason}


class UnknownCategoryError(ScriptControllerError, LookupError):
    code = "unknown_category"

    def __init__(self, category: str) -> None:
        super().__init__(f"Unknown category '{category}'")
        self.category = category


class UnknownActionError(ScriptControllerError, LookupError):
    code = "unknown_action"

    def __init__(self, category: str, action: str) -> None:
        super().__init__(f"Unknown action '{action}' in category '{category}'")
        self.category = category
        self.action = action


class DuplicateCategoryError(ScriptControllerError):
    code = "duplicate_category"

    def __init__(self, category: str) -> None:
        super().__init__(f"Category '{category}' is already registered")
        self.category = category


class DuplicateActionError(ScriptControllerError):
    code = "duplicate_action"

    def __init__(self, category: str, action: str) -> None:
        super().__init__(f"Action '{action}' is declared twice in category '{category}'")
        self.category = category
        self.action = action


class ParameterError(ScriptControllerError, ValueError):
    """Base for errors raised while binding caller arguments."""

    code = "invalid_parameters"


class InvalidArgumentsError(ParameterError):
    code = "invalid_arguments"

    def __init__(self, actual: str) -> None:
        super().__init__(f"Arguments must be an object, got {actual}")
        self.actual = actual


class MissingParameterError(ParameterError):
    code = "missing_parameter"

    def __init__(self, parameter: str) -> None:
        super().__init__(f"Missing required parameter '{parameter}'")
        self.parameter = parameter


class InvalidParameterTypeError(ParameterError):
    code = "invalid_parameter_type"

    def __init__(self, parameter: str, expected: str, actual: str) -> None:
        super().__init__(
            f"Parameter '{parameter}' must be of type {expected}, got {actual}"
        )
        self.parameter = parameter
        self.expected = expected
        self.actual = actual


class UnknownParameterError(ParameterError):
    code = "unknown_parameter"

    def __init__(self, parameters: Iterable[str]) -> None:
        self.parameters = sorted(parameters)
        names = ", ".join(f"'{name}'" for name in self.parameters)
        super().__init__(f"Unknown parameter(s) {names}")


class TemplateGenerationError(ScriptControllerError):
    code = "template_generation_failed"

    def __init__(self, category: str, action: str, message: str) -> None:
        super().__init__(f"Failed to build script for {category}.{action}: {message}")
        self.category = category
        self.action = action


class InvalidTimeoutError(ScriptControllerError, ValueError):
    code = "invalid_timeout"

    def __init__(self, timeout_secs: float) -> None:
        super().__init__(f"timeout_secs must be positive, got {timeout_secs!r}")
        self.timeout_secs = timeout_secs


class ExecutionTimeoutError(ScriptControllerError):
    code = "execution_timeout"

    def __init__(self, timeout_secs: float) -> None:
        super().__init__(f"Script did not finish within {timeout_secs:g}s")
        self.timeout_secs = timeout_secs


class ExecutionFailedError(ScriptControllerError):
    """Pass-through of whatever the executor collaborator reported."""

    code = "execution_failed"

    def __init__(
        self,
        message: str,
        *,
        returncode: int | None = None,
        stderr: str | None = None,
    ) -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        if self.returncode is not None:
            payload["returncode"] = self.returncode
        return payload
