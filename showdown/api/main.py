"""FastAPI application entrypoint and HTTP endpoints."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import structlog
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from showdown.core.gateway import ToolCaller
from showdown.core.live_bridge import create_mcp_caller, is_live_mode
from showdown.core.logging import configure_logging
from showdown.core.pipeline import run_showdown
from showdown.core.reporter import ReportFormat, generate_report
from showdown.core.settings import get_settings
from showdown.models.showdown_models import ShowdownConfig

log = structlog.get_logger(__name__)


class ShowdownRequest(ShowdownConfig):
    format: ReportFormat | None = None


@asynccontextmanager
async def lifespan(application: FastAPI):
    """FastAPI lifespan hook: configure logging and open the live MCP caller when enabled."""
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL, json_logs=settings.LOG_JSON)
    application.state.caller = None
    if is_live_mode(settings) and settings.NEXUS_MCP_URL:
        application.state.caller = create_mcp_caller(settings)
    log.info("api_startup_complete", live=application.state.caller is not None)
    yield
    caller = getattr(application.state, "caller", None)
    if caller is not None and hasattr(caller, "close"):
        await caller.close()
    log.info("api_shutdown_complete")


app = FastAPI(title="Model Showdown API", version="1.0.0", lifespan=lifespan)


@app.get("/health")
async def health(request: Request) -> dict[str, Any]:
    return {"status": "healthy", "live": getattr(request.app.state, "caller", None) is not None}


@app.post("/v1/showdown")
async def showdown(body: ShowdownRequest, request: Request) -> JSONResponse:
    """Run the full pipeline synchronously and return the result (or a rendered report)."""
    caller: ToolCaller | None = getattr(request.app.state, "caller", None)
    if caller is None:
        raise HTTPException(status_code=503, detail="Live MCP caller is not configured")

    config = ShowdownConfig.model_validate(body.model_dump(exclude={"format"}))
    try:
        result = await run_showdown(caller, config)
    except (ValidationError, RuntimeError, OSError, TimeoutError) as e:
        log.error("showdown_failed", task=config.task, error=str(e))
        raise HTTPException(status_code=502, detail=f"Showdown failed: {e}") from e

    if body.format is not None:
        return JSONResponse(content={"report": generate_report(result, body.format)})
    return JSONResponse(content=result.model_dump(mode="json", by_alias=True))
