"""Typed GeoJSON geometries (RFC 7946).

Each geometry class carries its GeoJSON ``type`` tag as a class attribute,
so code that builds shapes itself never has to guess a type from bracket
depth. Coordinates are [lng, lat] positions, as in GeoJSON.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Union


@dataclass(frozen=True)
class Point:
    coordinates: list
    type: ClassVar[str] = "Point"

    def to_geojson(self) -> dict:
        return {"type": self.type, "coordinates": self.coordinates}


@dataclass(frozen=True)
class MultiPoint:
    coordinates: list
    type: ClassVar[str] = "MultiPoint"

    def to_geojson(self) -> dict:
        return {"type": self.type, "coordinates": self.coordinates}


@dataclass(frozen=True)
class LineString:
    coordinates: list
    type: ClassVar[str] = "LineString"

    def to_geojson(self) -> dict:
        return {"type": self.type, "coordinates": self.coordinates}


@dataclass(frozen=True)
class MultiLineString:
    coordinates: list
    type: ClassVar[str] = "MultiLineString"

    def to_geojson(self) -> dict:
        return {"type": self.type, "coordinates": self.coordinates}


@dataclass(frozen=True)
class Polygon:
    """Polygon as a list of linear rings; the first ring is the exterior."""

    coordinates: list
    type: ClassVar[str] = "Polygon"

    def to_geojson(self) -> dict:
        return {"type": self.type, "coordinates": self.coordinates}


@dataclass(frozen=True)
class MultiPolygon:
    coordinates: list
    type: ClassVar[str] = "MultiPolygon"

    def to_geojson(self) -> dict:
        return {"type": self.type, "coordinates": self.coordinates}


@dataclass(frozen=True)
class GeometryCollection:
    geometries: list
    type: ClassVar[str] = "GeometryCollection"

    def to_geojson(self) -> dict:
        return {
            "type": self.type,
            "geometries": [g.to_geojson() for g in self.geometries],
        }


Geometry = Union[
    Point,
    MultiPoint,
    LineString,
    MultiLineString,
    Polygon,
    MultiPolygon,
    GeometryCollection,
]

GEOMETRY_TYPES: dict[str, type] = {
    cls.type: cls
    for cls in (Point, MultiPoint, LineString, MultiLineString, Polygon, MultiPolygon)
}


def geometry_from_geojson(data: dict) -> Geometry:
    """Build a typed geometry from a GeoJSON geometry dict.

    Raises:
        ValueError: If the type tag is missing or not a GeoJSON geometry type.
    """
    geom_type = data.get("type")
    if geom_type == GeometryCollection.type:
        return GeometryCollection(
            geometries=[geometry_from_geojson(g) for g in data.get("geometries", [])]
        )
    cls = GEOMETRY_TYPES.get(geom_type)
    if cls is None:
        raise ValueError(f"Unsupported geometry type: {geom_type!r}")
    return cls(coordinates=data.get("coordinates"))


@dataclass(frozen=True)
class TypedFeature:
    """A geometry plus descriptive properties."""

    geometry: Geometry
    properties: dict = field(default_factory=dict)

    def to_geojson(self) -> dict:
        feature = {"type": "Feature", "geometry": self.geometry.to_geojson()}
        if self.properties:
            feature["properties"] = dict(self.properties)
        return feature
