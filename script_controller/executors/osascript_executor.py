"""macOS executor that hands script text to ``osascript``."""

from __future__ import annotations

import subprocess
import threading
import time

from script_controller.errors import (
    ExecutionFailedError,
    ExecutionTimeoutError,
    InvalidTimeoutError,
)
from script_controller.executors.base import BaseScriptExecutor, ScriptResult
from utils.log_utils import tprint
from utils.settings_store import deep_log, get_setting, get_settings

# Notes.app handles one Apple Event conversation at a time.
_EXEC_LOCK = threading.Lock()


class OsascriptExecutor(BaseScriptExecutor):
    def __init__(
        self,
        *,
        osascript_path: str | None = None,
        serialize: bool | None = None,
    ) -> None:
        settings = get_settings()
        self.osascript_path = osascript_path or str(settings.get("osascript_path", "osascript"))
        if serialize is None:
            serialize = bool(settings.get("serialize_execution", True))
        self.serialize = serialize

    def run_script(self, script_text: str, timeout_secs: float) -> ScriptResult:
        if timeout_secs <= 0:
            raise InvalidTimeoutError(timeout_secs)
        deep_log(f"[DEEP][OSA_EXEC] script={script_text!r} timeout={timeout_secs}")
        start = time.monotonic()
        if self.serialize:
            if not _EXEC_LOCK.acquire(timeout=timeout_secs):
                raise ExecutionTimeoutError(timeout_secs)
            try:
                remaining = timeout_secs - (time.monotonic() - start)
                if remaining <= 0:
                    raise ExecutionTimeoutError(timeout_secs)
                completed = self._spawn(script_text, remaining, timeout_secs)
            finally:
                _EXEC_LOCK.release()
        else:
            completed = self._spawn(script_text, timeout_secs, timeout_secs)
        elapsed_ms = int((time.monotonic() - start) * 1000)

        stdout = (completed.stdout or "").rstrip("\n")
        stderr = (completed.stderr or "").strip()
        if completed.returncode != 0:
            tprint(f"[OSA_EXEC][ERROR] osascript exited {completed.returncode}: {stderr}")
            raise ExecutionFailedError(
                stderr or f"osascript exited with status {completed.returncode}",
                returncode=completed.returncode,
                stderr=stderr,
            )
        if get_setting("log_command_debug"):
            tprint(f"[OSA_EXEC][DEBUG] finished in {elapsed_ms} ms")
        return ScriptResult(
            output=stdout,
            ok=True,
            returncode=completed.returncode,
            stderr=stderr or None,
            elapsed_ms=elapsed_ms,
        )

    def _spawn(
        self, script_text: str, timeout: float, reported_timeout: float
    ) -> subprocess.CompletedProcess:
        try:
            return subprocess.run(
                [self.osascript_path, "-e", script_text],
                capture_output=True,
                text=True,
                timeout=timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            tprint(f"[OSA_EXEC][WARN] osascript timed out after {reported_timeout:g}s")
            raise ExecutionTimeoutError(reported_timeout) from exc
        except OSError as exc:
            raise ExecutionFailedError(f"Could not start {self.osascript_path}: {exc}") from exc
