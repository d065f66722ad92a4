"""Download a published sheet and hand its parsed rows to a callback.

One GET per load, no retries, no caching. A failed download raises
SheetSourceError instead of silently leaving the map empty.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Callable

import httpx
from loguru import logger

from sheetmap.errors import SheetSourceError
from sheetmap.layers.layer import Layer
from sheetmap.layers.parsers.csv_import import parse_rows, parse_shape_rows
from sheetmap.options import MapSettings
from sheetmap.view import MapView

_USER_AGENT = "sheetmap/0.1.0"


async def fetch_text(url: str, timeout: float = 30.0) -> str:
    """GET ``url`` and return the body as text.

    Raises:
        SheetSourceError: On network errors or a non-2xx response.
    """
    try:
        async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
            resp = await client.get(url, headers={"User-Agent": _USER_AGENT})
            resp.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SheetSourceError(url, f"HTTP {exc.response.status_code}") from exc
    except httpx.HTTPError as exc:
        raise SheetSourceError(url, str(exc) or type(exc).__name__) from exc
    return resp.text


class SheetSource:
    """A published sheet of points (and optionally one of shapes).

    Usage:
        source = SheetSource(points_url)
        await source.load(view.add_points)
    """

    def __init__(self, points_url: str, shapes_url: str = "", timeout: float = 30.0) -> None:
        self.points_url = points_url
        self.shapes_url = shapes_url
        self.timeout = timeout

    async def load(self, complete: Callable[[list], object]) -> Layer:
        """Fetch and parse the points sheet, then call ``complete(rows)``.

        Returns:
            The Layer holding the parsed rows.

        Raises:
            SheetSourceError: If the sheet cannot be fetched.
        """
        layer = await self._load_layer(self.points_url, "Points", parse_rows)
        complete(layer.rows)
        return layer

    async def load_shapes(self, complete: Callable[[list], object]) -> Layer | None:
        """Fetch and parse the shapes sheet, if one is configured."""
        if not self.shapes_url:
            return None
        layer = await self._load_layer(self.shapes_url, "Shapes", parse_shape_rows)
        complete(layer.rows)
        return layer

    async def _load_layer(self, url: str, name: str, parse: Callable[[str], list]) -> Layer:
        if not url:
            raise SheetSourceError(url, "no sheet URL configured")
        text = await fetch_text(url, timeout=self.timeout)
        rows = parse(text)
        logger.info(f"Loaded {len(rows)} rows from {name.lower()} sheet")
        return Layer(
            layer_id=f"layer-{uuid.uuid4().hex[:8]}",
            name=name,
            source_url=url,
            rows=rows,
            created_at=datetime.now(timezone.utc).isoformat(),
        )


async def load_view(source: SheetSource, settings: MapSettings | None = None) -> MapView:
    """Build a MapView from ``source``: points first, then shapes.

    Raises:
        SheetSourceError: If either sheet cannot be fetched.
    """
    view = MapView(settings)
    await source.load(view.add_points)
    await source.load_shapes(view.add_shapes)
    return view
