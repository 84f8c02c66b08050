"""Log access and liveness endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from sbomfix import __version__

router = APIRouter(tags=["system"])


@router.get("/logs", response_class=PlainTextResponse)
def logs(request: Request):
    try:
        return request.app.state.log_file.read_text(encoding="utf-8")
    except OSError:
        return PlainTextResponse("Failed to read logs", status_code=500)


@router.get("/health")
def health(request: Request):
    config = request.app.state.config
    return {
        "status": "ok",
        "llamaIndexAPI": config.semantic_endpoint,
        "ollamaHost": config.ollama_host,
        "version": __version__,
    }
