"""Command-line entry point for the AppleScript action catalog."""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from script_controller.categories import build_default_registry
from script_controller.dispatcher import Dispatcher
from script_controller.engine import ScriptEngine
from script_controller.errors import UnknownCategoryError
from utils.settings_store import refresh_settings


def _load_env_files() -> None:
    """Load .env files from common locations (repo, home)."""
    candidates: list[Path] = []
    cwd = Path.cwd()
    candidates.extend([cwd / "env/.env", cwd / ".env"])

    module_root = Path(__file__).resolve().parent
    candidates.extend([module_root / "env/.env", module_root / ".env"])

    home = Path.home()
    candidates.append(home / ".script_controller.env")

    for path in candidates:
        if path.exists():
            load_dotenv(dotenv_path=str(path), override=False)


def _parse_args_json(raw: str | None) -> dict:
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SystemExit(f"--args is not valid JSON: {exc}")
    if not isinstance(data, dict):
        raise SystemExit("--args must be a JSON object")
    return data


def _positive_float(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {raw!r}")
    if value <= 0:
        raise argparse.ArgumentTypeError("must be greater than 0")
    return value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render and run AppleScript catalog actions.")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("categories", help="List registered categories.")

    actions = sub.add_parser("actions", help="List the actions of a category.")
    actions.add_argument("category")

    for name, help_text in (
        ("render", "Print the generated script without running it."),
        ("run", "Generate the script and run it with osascript."),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("category")
        cmd.add_argument("action")
        cmd.add_argument("--args", default=None, help="Action arguments as a JSON object.")
        if name == "run":
            cmd.add_argument("--timeout", type=_positive_float, default=None, help="Timeout in seconds.")

    serve = sub.add_parser("serve", help="Start the HTTP API.")
    serve.add_argument("--host", default=os.getenv("SCRIPT_CONTROLLER_HOST", "127.0.0.1"))
    serve.add_argument("--port", type=int, default=int(os.getenv("SCRIPT_CONTROLLER_PORT", "8000")))
    return parser


def main(argv: list[str] | None = None) -> int:
    _load_env_files()
    refresh_settings()
    args = _build_parser().parse_args(argv)

    if args.command == "serve":
        import uvicorn

        uvicorn.run("api.server:app", host=args.host, port=args.port)
        return 0

    dispatcher = Dispatcher(build_default_registry())
    engine = ScriptEngine(dispatcher)

    if args.command == "categories":
        for name, description in dispatcher.registry.list_categories():
            print(f"{name}\t{description}")
        return 0

    if args.command == "actions":
        try:
            actions = dispatcher.registry.list_actions(args.category)
        except UnknownCategoryError as exc:
            print(json.dumps({"status": "error", **exc.to_dict()}, indent=2), file=sys.stderr)
            return 1
        print(json.dumps(actions, indent=2))
        return 0

    call_args = _parse_args_json(args.args)
    if args.command == "render":
        result = engine.render(args.category, args.action, call_args)
        if result["status"] != "ok":
            print(json.dumps(result, indent=2), file=sys.stderr)
            return 1
        print(result["script"], end="")
        return 0

    result = engine.run(args.category, args.action, call_args, timeout_secs=args.timeout)
    if result["status"] != "ok":
        print(json.dumps(result, indent=2), file=sys.stderr)
        return 1
    print(result["output"])
    return 0


if __name__ == "__main__":
    sys.exit(main())
