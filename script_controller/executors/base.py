"""Executor interface and result payload."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class ScriptResult:
    output: str
    ok: bool = True
    returncode: int | None = None
    stderr: str | None = None
    elapsed_ms: int | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"output": self.output, "ok": self.ok}
        if self.returncode is not None:
            payload["returncode"] = self.returncode
        if self.stderr:
            payload["stderr"] = self.stderr
        if self.elapsed_ms is not None:
            payload["elapsed_ms"] = self.elapsed_ms
        return payload


class BaseScriptExecutor:
    """Runs AppleScript source and returns its output as opaque text.

    Implementations raise ``ExecutionTimeoutError`` when ``timeout_secs``
    elapses and ``ExecutionFailedError`` for anything the interpreter reports.
    """

    def run_script(self, script_text: str, timeout_secs: float) -> ScriptResult:
        raise NotImplementedError
