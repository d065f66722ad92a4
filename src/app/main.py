"""SHEETMAP - spreadsheet places on an interactive map.

Main FastAPI application.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from loguru import logger

from app.config import settings
from app.routers.points import current_view, make_source, router as points_router
from sheetmap import __version__
from sheetmap.errors import SheetSourceError
from sheetmap.options import MapSettings
from sheetmap.render import render_html
from sheetmap.source import load_view
from sheetmap.view import MapView


# ---------------------------------------------------------------------------
# Startup helpers
# ---------------------------------------------------------------------------

async def _load_sheet() -> MapView:
    """Fetch the configured sheets. On failure return an empty view with the error."""
    map_settings = MapSettings.from_settings(settings)
    try:
        return await load_view(make_source(), map_settings)
    except SheetSourceError as e:
        logger.warning(f"Sheet load failed, serving an empty map: {e}")
        view = MapView(map_settings)
        view.load_error = str(e)
        return view


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info("=" * 60)
    logger.info(f"  SHEETMAP v{__version__} - INITIALIZING")
    logger.info("=" * 60)

    app.state.view = await _load_sheet()

    logger.info(
        f"Map ready: {len(app.state.view.markers)} markers, "
        f"{len(app.state.view.shapes)} shapes"
    )
    yield
    logger.info("SHEETMAP shutting down...")


# Create FastAPI app
app = FastAPI(
    title="SHEETMAP",
    description="Spreadsheet places on an interactive map",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(points_router)


@app.get("/", response_class=HTMLResponse)
async def root(request: Request):
    """Serve the rendered map."""
    return HTMLResponse(content=render_html(current_view(request)))


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "operational",
        "version": __version__,
        "system": "SHEETMAP",
    }


@app.get("/api/status")
async def status(request: Request):
    """System status endpoint."""
    view = current_view(request)
    return {
        "name": settings.app_name,
        "version": __version__,
        "points_url": settings.points_url,
        "shapes_url": settings.shapes_url,
        "markers": len(view.markers),
        "shapes": len(view.shapes),
        "load_error": view.load_error,
        "panel": view.panel.status.value,
    }
