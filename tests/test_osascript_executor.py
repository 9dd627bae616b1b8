"""Tests for OsascriptExecutor (subprocess handoff, timeouts, failures)."""

import subprocess
from unittest.mock import patch

import pytest

from script_controller.errors import (
    ExecutionFailedError,
    ExecutionTimeoutError,
    InvalidTimeoutError,
    ScriptControllerError,
)
from script_controller.executors.osascript_executor import OsascriptExecutor

RUN = "script_controller.executors.osascript_executor.subprocess.run"


def _completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(
        args=["osascript"], returncode=returncode, stdout=stdout, stderr=stderr
    )


class TestOsascriptExecutor:
    """Test suite for OsascriptExecutor."""

    def test_returns_output(self):
        """Test that stdout becomes the result text without its trailing newline."""
        executor = OsascriptExecutor(osascript_path="osascript", serialize=False)
        with patch(RUN, return_value=_completed(stdout="Note 'X' created successfully\n")) as run:
            result = executor.run_script('return "hi"', timeout_secs=5)

        assert result.ok is True
        assert result.output == "Note 'X' created successfully"
        assert result.returncode == 0
        assert result.elapsed_ms is not None
        args, kwargs = run.call_args
        assert args[0] == ["osascript", "-e", 'return "hi"']
        assert kwargs["timeout"] == 5
        assert kwargs["capture_output"] is True
        assert kwargs["text"] is True

    def test_not_found_output_is_success(self):
        """Test that a domain 'not found' message is an ordinary result."""
        executor = OsascriptExecutor(serialize=False)
        with patch(RUN, return_value=_completed(stdout="Note 'X' not found\n")):
            result = executor.run_script("script", timeout_secs=5)
        assert result.ok is True
        assert result.output == "Note 'X' not found"

    def test_multiline_output_preserved(self):
        """Test that list output keeps its inner line breaks."""
        executor = OsascriptExecutor(serialize=False)
        with patch(RUN, return_value=_completed(stdout="Notes\nWork\n\n")):
            result = executor.run_script("script", timeout_secs=5)
        assert result.output == "Notes\nWork"

    def test_custom_osascript_path(self):
        """Test that the interpreter path is configurable."""
        executor = OsascriptExecutor(osascript_path="/usr/local/bin/osascript", serialize=False)
        with patch(RUN, return_value=_completed()) as run:
            executor.run_script("script", timeout_secs=5)
        assert run.call_args[0][0][0] == "/usr/local/bin/osascript"

    def test_timeout(self):
        """Test that a subprocess timeout becomes ExecutionTimeoutError."""
        executor = OsascriptExecutor(serialize=False)
        with patch(RUN, side_effect=subprocess.TimeoutExpired(cmd="osascript", timeout=2)):
            with pytest.raises(ExecutionTimeoutError) as exc_info:
                executor.run_script("delay 10", timeout_secs=2)
        assert exc_info.value.timeout_secs == 2
        assert exc_info.value.code == "execution_timeout"

    def test_nonzero_exit(self):
        """Test that interpreter errors surface as ExecutionFailedError."""
        executor = OsascriptExecutor(serialize=False)
        completed = _completed(returncode=1, stderr="execution error: Notes got an error (-1728)\n")
        with patch(RUN, return_value=completed):
            with pytest.raises(ExecutionFailedError) as exc_info:
                executor.run_script("script", timeout_secs=5)
        err = exc_info.value
        assert err.returncode == 1
        assert "-1728" in err.reason
        assert err.to_dict()["returncode"] == 1

    def test_missing_interpreter(self):
        """Test that a missing osascript binary is an execution failure."""
        executor = OsascriptExecutor(osascript_path="osascript-missing", serialize=False)
        with patch(RUN, side_effect=FileNotFoundError("osascript-missing")):
            with pytest.raises(ExecutionFailedError):
                executor.run_script("script", timeout_secs=5)

    def test_rejects_non_positive_timeout(self):
        """Test that a zero timeout is refused before spawning."""
        executor = OsascriptExecutor(serialize=False)
        with patch(RUN) as run:
            with pytest.raises(InvalidTimeoutError) as exc_info:
                executor.run_script("script", timeout_secs=0)
        run.assert_not_called()
        assert isinstance(exc_info.value, ScriptControllerError)
        assert isinstance(exc_info.value, ValueError)
        assert exc_info.value.code == "invalid_timeout"

    def test_serialized_execution_passes_remaining_timeout(self):
        """Test that serialized runs hand the remaining budget to subprocess."""
        executor = OsascriptExecutor(serialize=True)
        with patch(RUN, return_value=_completed(stdout="ok")) as run:
            result = executor.run_script("script", timeout_secs=5)
        assert result.output == "ok"
        assert 0 < run.call_args.kwargs["timeout"] <= 5

    def test_serialized_timeout_waiting_for_lock(self):
        """Test that waiting on a busy interpreter counts against the timeout."""
        from script_controller.executors import osascript_executor

        executor = OsascriptExecutor(serialize=True)
        osascript_executor._EXEC_LOCK.acquire()
        try:
            with patch(RUN) as run:
                with pytest.raises(ExecutionTimeoutError):
                    executor.run_script("script", timeout_secs=0.05)
            run.assert_not_called()
        finally:
            osascript_executor._EXEC_LOCK.release()
