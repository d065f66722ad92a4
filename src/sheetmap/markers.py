"""Turn sheet rows into point markers.

Three marker kinds, matching Leaflet's primitives:
    marker        standard pin with an AwesomeMarkers icon
    circleMarker  circle with a radius in pixels
    circle        circle with a radius in metres
Marker type names are case-sensitive; anything else falls back to "marker".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from loguru import logger

from sheetmap.layers.layer import Row

DEFAULT_RADIUS = 100


class MarkerType(str, Enum):
    MARKER = "marker"
    CIRCLE_MARKER = "circleMarker"
    CIRCLE = "circle"

    @classmethod
    def parse(cls, value: "str | MarkerType") -> "MarkerType":
        """Return the matching type, or MARKER for unknown values."""
        if isinstance(value, MarkerType):
            return value
        try:
            return cls(value)
        except ValueError:
            logger.warning(f"Unknown marker type {value!r}, using 'marker'")
            return cls.MARKER

    @property
    def is_circle(self) -> bool:
        return self is not MarkerType.MARKER


@dataclass(frozen=True)
class IconStyle:
    """Leaflet.AwesomeMarkers icon options."""

    marker_color: str
    icon: str = "info-circle"
    icon_color: str = "white"
    prefix: str = "fa"
    extra_classes: str = "fa-rotate-0"


@dataclass
class ClickEvent:
    """A click on a map element.

    Marker handlers call :meth:`stop_propagation` so the map's own click
    handler (which closes the panel) ignores the same click.
    """

    target: object = None
    propagation_stopped: bool = False

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


@dataclass
class PointMarker:
    """A marker built from one Row.

    Attributes:
        location: (lat, lon) in degrees.
        label: Row name; becomes the panel title.
        detail: Row description; becomes the panel body.
        color: Row color token.
        kind: Marker primitive.
        radius: Pixels for circleMarker, metres for circle, unused for marker.
        icon: AwesomeMarkers style, only for the "marker" kind.
        properties: Feature properties exposed to click handlers.
    """

    location: tuple[float, float]
    label: str
    detail: str
    color: str
    kind: MarkerType = MarkerType.MARKER
    radius: float = DEFAULT_RADIUS
    icon: IconStyle | None = None
    properties: dict = field(default_factory=dict)

    def popup_html(self) -> str:
        return f"<h2>{self.label}</h2>{self.detail}"

    def to_geojson(self) -> dict:
        lat, lon = self.location
        return {
            "type": "Feature",
            "geometry": {"type": "Point", "coordinates": [lon, lat]},
            "properties": dict(self.properties),
        }


def build_marker(
    row: Row,
    marker_type: "str | MarkerType" = MarkerType.MARKER,
    radius: float = DEFAULT_RADIUS,
) -> PointMarker:
    """Build the marker for ``row``.

    Raises:
        ValueError: If the row's lat/lon are not numeric.
    """
    kind = MarkerType.parse(marker_type)
    return PointMarker(
        location=row.location,
        label=row.name,
        detail=row.description,
        color=row.color,
        kind=kind,
        radius=radius,
        icon=None if kind.is_circle else IconStyle(marker_color=row.color),
        properties={
            "name": row.name,
            "description": row.description,
            "color": row.color,
        },
    )


def build_markers(
    rows: list[Row],
    marker_type: "str | MarkerType" = MarkerType.MARKER,
    radius: float = DEFAULT_RADIUS,
) -> list[PointMarker]:
    """Build markers for every row with usable coordinates."""
    kind = MarkerType.parse(marker_type)
    markers: list[PointMarker] = []
    for idx, row in enumerate(rows):
        try:
            markers.append(build_marker(row, kind, radius))
        except ValueError:
            logger.warning(f"Skipping row {idx} ({row.name!r}): bad coordinates {row.lat!r}, {row.lon!r}")
    return markers
