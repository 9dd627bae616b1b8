"""Caller-side pipeline: dispatch, execute, and report status payloads."""

from __future__ import annotations

import time
from typing import Any, Mapping

from script_controller.dispatcher import Dispatcher
from script_controller.errors import ExecutionTimeoutError, ScriptControllerError
from script_controller.logger import CommandLogger
from utils.settings_store import deep_log


class ScriptEngine:
    def __init__(
        self,
        dispatcher: Dispatcher,
        *,
        logger: CommandLogger | None = None,
    ) -> None:
        self.dispatcher = dispatcher
        self.logger = logger or CommandLogger()
        self._last_result: dict | None = None

    def render(
        self, category: str, action: str, args: Mapping[str, Any] | None = None
    ) -> dict:
        """Build the script without running it."""
        try:
            request = self.dispatcher.invoke(category, action, args)
        except ScriptControllerError as exc:
            self.logger.error(f"Render {category}.{action} failed: {exc}")
            return self._error(exc)
        self.logger.debug(f"Rendered {category}.{action} ({len(request.script_text)} chars)")
        return {"status": "ok", **request.to_dict()}

    def run(
        self,
        category: str,
        action: str,
        args: Mapping[str, Any] | None = None,
        *,
        timeout_secs: float | None = None,
    ) -> dict:
        start = time.monotonic()
        try:
            request = self.dispatcher.invoke(category, action, args)
        except ScriptControllerError as exc:
            self.logger.error(f"Invoke {category}.{action} rejected: {exc}")
            result = self._error(exc)
            self._store_result(result)
            return result

        deep_log(f"[DEEP][ENGINE] run {category}.{action} script={request.script_text!r}")
        try:
            script_result = self.dispatcher.execute(request, timeout_secs=timeout_secs)
        except ExecutionTimeoutError as exc:
            self.logger.warn(f"Execution of {category}.{action} timed out: {exc}")
            result = self._error(exc)
            self._store_result(result)
            return result
        except ScriptControllerError as exc:
            self.logger.error(f"Execution of {category}.{action} failed: {exc}")
            result = self._error(exc)
            self._store_result(result)
            return result

        elapsed_ms = (time.monotonic() - start) * 1000.0
        self.logger.info(f"{category}.{action} finished in {elapsed_ms:.0f} ms")
        # "Note ... not found" and friends are regular output, not failures.
        result = {"status": "ok", "category": category, "action": action}
        result.update(script_result.to_dict())
        self._store_result(result)
        return result

    def get_last_result(self) -> dict | None:
        return self._last_result

    def _error(self, exc: ScriptControllerError) -> dict:
        return {"status": "error", **exc.to_dict()}

    def _store_result(self, result: dict) -> None:
        payload = dict(result)
        payload["timestamp"] = time.time()
        self._last_result = payload
