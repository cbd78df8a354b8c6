"""FastAPI application exposing the spreadsheet analysis engine."""

import logging
from importlib.metadata import PackageNotFoundError, version

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sheet_insights.action.routers.analysis import router as analysis_router
from sheet_insights.config.settings import settings

logger = logging.getLogger(__name__)

try:
    __version__ = version("sheet-insights")
except PackageNotFoundError:
    __version__ = "0.0.0"

app = FastAPI(title="Sheet Insights API", version=__version__)

# CORS: lock down in production via SHEET_INSIGHTS_CORS_ORIGINS (comma-separated).
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.cors_origins.split(",")],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(analysis_router)


@app.on_event("startup")
async def _configure_logging():
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Sheet Insights API %s started", __version__)


@app.exception_handler(Exception)
async def _global_error_handler(request: Request, exc: Exception):
    """Catch-all: ensure every unhandled error returns JSON, not raw HTML."""
    logger.exception("Unhandled error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=500,
        content={
            "detail": f"Server error: {exc}",
            "error": str(exc),
            "status": "failed",
        },
    )


@app.get("/health")
async def health() -> dict:
    return {"status": "ok", "version": __version__}
