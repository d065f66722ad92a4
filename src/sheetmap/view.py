"""MapView — the one map and one panel of a page session.

Holds the point markers, shape features and panel state, and dispatches
clicks the same way the rendered page does:

    marker/shape click -> stop propagation, fill panel, open it
    map click          -> close panel (unless a marker already handled it)
"""

from __future__ import annotations

from collections.abc import Mapping

from loguru import logger

from sheetmap.errors import InvalidInputError
from sheetmap.layers.layer import Row, ShapeRow
from sheetmap.layers.parsers.geom import parse_geom_text
from sheetmap.markers import ClickEvent, PointMarker, build_markers
from sheetmap.options import MapSettings
from sheetmap.panel import Panel


class MapView:
    """Presentation state for one rendered map.

    Usage:
        view = MapView(MapSettings())
        await SheetSource(url).load(view.add_points)
        view.click_marker(0)
    """

    def __init__(self, settings: MapSettings | None = None) -> None:
        self.settings = settings or MapSettings()
        self.panel = Panel(panel_id=self.settings.panel_id, title=self.settings.panel_title)
        self.markers: list[PointMarker] = []
        self.shapes: list[dict] = []
        self.load_error: str | None = None

    def add_points(self, rows: list[Row]) -> list[PointMarker]:
        """Build markers for ``rows`` and add them to the point layer."""
        markers = build_markers(
            rows,
            self.settings.marker_type,
            self.settings.marker_radius,
        )
        self.markers.extend(markers)
        logger.info(f"Point layer: {len(markers)} markers from {len(rows)} rows")
        return markers

    def add_shapes(self, rows: list[ShapeRow]) -> list[dict]:
        """Normalize each row's geometry cell and add the resulting features."""
        added: list[dict] = []
        for idx, row in enumerate(rows):
            try:
                features = parse_geom_text(row.geometry)
            except InvalidInputError as exc:
                logger.warning(f"Skipping shape row {idx} ({row.name!r}): {exc}")
                continue
            for feature in features:
                if not isinstance(feature, Mapping):
                    logger.warning(f"Skipping non-object feature in shape row {idx} ({row.name!r})")
                    continue
                extra = feature.get("properties")
                properties = dict(extra) if isinstance(extra, Mapping) else {}
                properties.update(
                    name=row.name,
                    description=row.description,
                    color=row.color,
                )
                added.append({**feature, "properties": properties})
        self.shapes.extend(added)
        logger.info(f"Shape layer: {len(added)} features from {len(rows)} rows")
        return added

    def click_marker(self, index: int, event: ClickEvent | None = None) -> ClickEvent:
        marker = self.markers[index]
        event = event or ClickEvent(target=marker)
        if not self.settings.use_sidebar:
            return event
        event.stop_propagation()
        self.panel.open(marker.label, marker.label, marker.detail)
        return event

    def click_shape(self, index: int, event: ClickEvent | None = None) -> ClickEvent:
        feature = self.shapes[index]
        event = event or ClickEvent(target=feature)
        if not self.settings.use_sidebar:
            return event
        event.stop_propagation()
        props = feature["properties"]
        self.panel.open(props["name"], props["name"], props["description"])
        return event

    def click_map(self, event: ClickEvent | None = None) -> None:
        if event is not None and event.propagation_stopped:
            return
        self.panel.close()

    def to_geojson(self) -> dict:
        """The point layer as a GeoJSON FeatureCollection."""
        return {
            "type": "FeatureCollection",
            "features": [m.to_geojson() for m in self.markers],
        }

    def shapes_geojson(self) -> dict:
        return {"type": "FeatureCollection", "features": list(self.shapes)}
