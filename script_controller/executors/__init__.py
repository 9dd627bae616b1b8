"""Executors that run generated script text."""

from script_controller.executors.base import BaseScriptExecutor, ScriptResult
from script_controller.executors.osascript_executor import OsascriptExecutor

__all__ = ["BaseScriptExecutor", "OsascriptExecutor", "ScriptResult"]
