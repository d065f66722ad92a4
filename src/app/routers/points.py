"""Points API — the loaded sheet as GeoJSON, reload, and geometry parsing.

The current MapView lives on ``app.state.view``; reload replaces it
wholesale with a freshly fetched one.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Request
from loguru import logger
from pydantic import BaseModel

from app.config import settings
from sheetmap.errors import InvalidInputError, SheetSourceError
from sheetmap.layers.parsers.geom import parse_geom
from sheetmap.options import MapSettings
from sheetmap.source import SheetSource, load_view
from sheetmap.view import MapView

router = APIRouter(prefix="/api", tags=["points"])


# ---------------------------------------------------------------------------
# Request / Response models
# ---------------------------------------------------------------------------

class GeometryRequest(BaseModel):
    """Any GeoJSON-ish value: collection, feature, geometry or bare coordinates."""
    geometry: Any


class GeometryResponse(BaseModel):
    """Normalized features."""
    type: str = "FeatureCollection"
    features: list[dict]


class ReloadResponse(BaseModel):
    """Result of refetching the sheets."""
    markers: int
    shapes: int


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def current_view(request: Request) -> MapView:
    """The app's MapView, or an empty one if nothing has been loaded."""
    view = getattr(request.app.state, "view", None)
    if view is None:
        view = MapView(MapSettings.from_settings(settings))
        request.app.state.view = view
    return view


def make_source() -> SheetSource:
    return SheetSource(
        settings.points_url,
        shapes_url=settings.shapes_url,
        timeout=settings.fetch_timeout,
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get("/points")
async def get_points(request: Request):
    """The point layer as a GeoJSON FeatureCollection."""
    return current_view(request).to_geojson()


@router.get("/shapes")
async def get_shapes(request: Request):
    """The shape layer as a GeoJSON FeatureCollection."""
    return current_view(request).shapes_geojson()


@router.post("/points/reload", response_model=ReloadResponse)
async def reload_points(request: Request):
    """Refetch the sheets and replace the current view."""
    try:
        view = await load_view(make_source(), MapSettings.from_settings(settings))
    except SheetSourceError as e:
        logger.warning(f"Sheet reload failed: {e}")
        raise HTTPException(status_code=502, detail=str(e))
    request.app.state.view = view
    return ReloadResponse(markers=len(view.markers), shapes=len(view.shapes))


@router.post("/geometry/parse", response_model=GeometryResponse)
async def parse_geometry(body: GeometryRequest):
    """Normalize a GeoJSON-ish value into a FeatureCollection."""
    try:
        features = parse_geom(body.geometry)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return GeometryResponse(features=features)
