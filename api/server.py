"""FastAPI server exposing the action catalog to tool-calling clients."""

from __future__ import annotations

from typing import Any, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from script_controller.categories import build_default_registry
from script_controller.dispatcher import Dispatcher
from script_controller.engine import ScriptEngine
from script_controller.errors import UnknownCategoryError

_STATUS_BY_CODE = {
    "unknown_category": 404,
    "unknown_action": 404,
    "invalid_arguments": 422,
    "missing_parameter": 422,
    "invalid_parameter_type": 422,
    "unknown_parameter": 422,
    "invalid_timeout": 422,
    "template_generation_failed": 500,
    "execution_timeout": 504,
    "execution_failed": 502,
}


class InvokeRequest(BaseModel):
    args: dict[str, Any] = Field(default_factory=dict)
    timeout_secs: Optional[float] = Field(default=None, gt=0, le=600)


def _raise_for_error(result: dict) -> dict:
    if result.get("status") != "error":
        return result
    code = result.get("code", "")
    detail = {"code": code, "reason": result.get("reason", "")}
    raise HTTPException(status_code=_STATUS_BY_CODE.get(code, 400), detail=detail)


def create_app(dispatcher: Dispatcher | None = None) -> FastAPI:
    dispatcher = dispatcher or Dispatcher(build_default_registry())
    engine = ScriptEngine(dispatcher)
    registry = dispatcher.registry

    app = FastAPI(title="AppleScript Action Catalog", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.engine = engine

    @app.get("/categories")
    def list_categories():
        return {
            "items": [
                {"name": name, "description": description}
                for name, description in registry.list_categories()
            ]
        }

    @app.get("/categories/{category}/actions")
    def list_actions(category: str):
        try:
            return {"items": registry.list_actions(category)}
        except UnknownCategoryError as exc:
            raise HTTPException(status_code=404, detail=exc.to_dict())

    @app.post("/categories/{category}/actions/{action}/render")
    def render_action(category: str, action: str, req: InvokeRequest):
        return _raise_for_error(engine.render(category, action, req.args))

    @app.post("/categories/{category}/actions/{action}/run")
    def run_action(category: str, action: str, req: InvokeRequest):
        result = engine.run(category, action, req.args, timeout_secs=req.timeout_secs)
        return _raise_for_error(result)

    @app.get("/status")
    def status():
        return {"last_result": engine.get_last_result()}

    @app.get("/", response_class=HTMLResponse)
    def root():
        return "<html><body><h1>AppleScript Action Catalog</h1><p>Status: OK</p></body></html>"

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api.server:app", host="127.0.0.1", port=8000, reload=False)
