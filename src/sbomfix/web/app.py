"""FastAPI application factory for the sbomfix service."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from sbomfix import __version__
from sbomfix.config import SbomFixConfig
from sbomfix.errors import SbomFixError
from sbomfix.service import RemediationService

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_LOG_DATEFMT = "%Y/%m/%d %H:%M:%S"


def create_app(
    config: SbomFixConfig | None = None,
    service: RemediationService | None = None,
) -> FastAPI:
    """Build and return the FastAPI application."""
    config = config or SbomFixConfig.load()
    service = service or RemediationService.from_config(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.log_handler = _attach_log_file(config.log_file)
        try:
            yield
        finally:
            logging.getLogger("sbomfix").removeHandler(app.state.log_handler)
            app.state.log_handler.close()
            app.state.log_handler = None
            service.close()

    app = FastAPI(
        title="sbomfix",
        version=__version__,
        docs_url="/api/docs",
        lifespan=lifespan,
    )

    app.state.config = config
    app.state.service = service
    app.state.log_file = config.log_file
    app.state.log_handler = None

    @app.exception_handler(SbomFixError)
    async def sbomfix_error(request: Request, exc: SbomFixError) -> JSONResponse:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc)})

    from sbomfix.web.api.remediation import router as remediation_router
    from sbomfix.web.api.sbom import router as sbom_router
    from sbomfix.web.api.system import router as system_router

    app.include_router(sbom_router)
    app.include_router(remediation_router)
    app.include_router(system_router)

    # Static UI last so it never shadows the API routes
    if config.static_dir.is_dir():
        app.mount(
            "/",
            StaticFiles(directory=str(config.static_dir), html=True),
            name="static",
        )

    return app


def _attach_log_file(path: Path) -> logging.FileHandler:
    """Append ``sbomfix.*`` records to the log file served by ``/logs``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_LOG_DATEFMT))
    handler.setLevel(logging.INFO)

    package_logger = logging.getLogger("sbomfix")
    if package_logger.level == logging.NOTSET:
        package_logger.setLevel(logging.INFO)
    package_logger.addHandler(handler)
    return handler
