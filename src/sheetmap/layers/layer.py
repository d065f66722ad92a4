"""Row, ShapeRow and Layer dataclasses for the sheet data layer.

Row fields mirror the sheet's column headers verbatim (case-sensitive):
name, description, color, lat, lon. Coordinates are kept exactly as read
and converted to floats only when a marker is built.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Row:
    """One record of the points sheet.

    Attributes:
        name: Label shown as the panel title.
        description: Free text (may contain HTML) shown as the panel body.
        color: AwesomeMarkers color token ("red", "blue", ...).
        lat: Latitude as read from the sheet (string or number).
        lon: Longitude as read from the sheet (string or number).
        extra: Any other columns, passed through untouched.
    """

    name: str
    description: str
    color: str
    lat: str | float
    lon: str | float
    extra: dict = field(default_factory=dict)

    @property
    def location(self) -> tuple[float, float]:
        """(lat, lon) as floats.

        Raises:
            ValueError: If either coordinate is not a finite number.
        """
        try:
            lat, lon = float(self.lat), float(self.lon)
        except TypeError as exc:
            raise ValueError(f"Row {self.name!r} has no coordinates") from exc
        if not (math.isfinite(lat) and math.isfinite(lon)):
            raise ValueError(f"Row {self.name!r} has non-finite coordinates {lat}, {lon}")
        return (lat, lon)


@dataclass(frozen=True)
class ShapeRow:
    """One record of the optional shapes sheet.

    ``geometry`` holds the raw cell text: a FeatureCollection, Feature,
    bare geometry or bare coordinate array serialized as JSON.
    """

    name: str
    description: str
    color: str
    geometry: str
    extra: dict = field(default_factory=dict)


@dataclass
class Layer:
    """A named collection of rows fetched from one sheet.

    Attributes:
        layer_id: Unique identifier for this layer.
        name: Human-readable display name.
        source_url: URL the rows were downloaded from.
        rows: Parsed Row (or ShapeRow) records, in sheet order.
        source_format: Always "csv" for published sheets.
        created_at: ISO8601 timestamp of the fetch.
    """

    layer_id: str
    name: str
    source_url: str
    rows: list
    source_format: str = "csv"
    created_at: str = ""
