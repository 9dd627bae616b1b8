"""Dispatch facade: lookup, argument binding and script generation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from script_controller.errors import InvalidTimeoutError, TemplateGenerationError
from script_controller.executors.base import BaseScriptExecutor, ScriptResult
from script_controller.registry import ActionDescriptor, CategoryRegistry
from script_controller.schema import validate_arguments
from script_controller.templates import strip_string_literals
from utils.settings_store import deep_log, get_settings


@dataclass(frozen=True)
class ExecutionRequest:
    category: str
    action: str
    script_text: str
    arguments: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "action": self.action,
            "arguments": dict(self.arguments),
            "script": self.script_text,
        }


class Dispatcher:
    """Single entry point tying registry, validation and templates together.

    ``invoke`` never touches the operating system; ``execute``/``run`` hand
    the generated text to the executor collaborator.
    """

    def __init__(
        self,
        registry: CategoryRegistry,
        *,
        strict: bool | None = None,
        executor: BaseScriptExecutor | None = None,
        timeout_secs: float | None = None,
    ) -> None:
        settings = get_settings()
        self.registry = registry
        if strict is None:
            strict = bool(settings.get("reject_unknown_parameters", True))
        self.strict = strict
        self.timeout_secs = float(
            timeout_secs if timeout_secs is not None else settings.get("osascript_timeout_secs", 30.0)
        )
        self._executor = executor

    @property
    def executor(self) -> BaseScriptExecutor:
        if self._executor is None:
            from script_controller.executors.osascript_executor import OsascriptExecutor

            self._executor = OsascriptExecutor()
        return self._executor

    def bind_arguments(
        self, action: ActionDescriptor, raw_args: Mapping[str, Any] | None
    ) -> dict[str, Any]:
        if not action.has_schema:
            # Schemaless actions take no parameters; whatever came in is ignored.
            return {}
        return validate_arguments(action.params, raw_args, strict=self.strict)

    def invoke(
        self,
        category_name: str,
        action_name: str,
        raw_args: Mapping[str, Any] | None = None,
    ) -> ExecutionRequest:
        action = self.registry.lookup(category_name).lookup_action(action_name)
        arguments = self.bind_arguments(action, raw_args)
        try:
            script_text = action.template.render(dict(arguments))
        except Exception as exc:
            raise TemplateGenerationError(category_name, action_name, str(exc)) from exc
        if not isinstance(script_text, str):
            raise TemplateGenerationError(
                category_name,
                action_name,
                f"generator returned {type(script_text).__name__}, expected str",
            )
        try:
            strip_string_literals(script_text)
        except ValueError as exc:
            raise TemplateGenerationError(category_name, action_name, str(exc)) from exc
        deep_log(
            f"[DEEP][DISPATCH] {category_name}.{action_name} args={arguments} "
            f"template={action.template.kind}"
        )
        return ExecutionRequest(
            category=category_name,
            action=action_name,
            script_text=script_text,
            arguments=arguments,
        )

    def execute(
        self, request: ExecutionRequest, timeout_secs: float | None = None
    ) -> ScriptResult:
        timeout = self.timeout_secs if timeout_secs is None else float(timeout_secs)
        if timeout <= 0:
            raise InvalidTimeoutError(timeout)
        return self.executor.run_script(request.script_text, timeout)

    def run(
        self,
        category_name: str,
        action_name: str,
        raw_args: Mapping[str, Any] | None = None,
        *,
        timeout_secs: float | None = None,
    ) -> ScriptResult:
        request = self.invoke(category_name, action_name, raw_args)
        return self.execute(request, timeout_secs=timeout_secs)
