"""Normalize loosely-typed GeoJSON into a list of Feature dicts.

Accepts a FeatureCollection, a single Feature, a bare geometry, or a bare
coordinate array pasted from a spreadsheet cell. Bare arrays get their
geometry type guessed from nesting depth of the first element:

    [x, y]                      -> Point
    [[x, y], ...]               -> LineString
    [[[x, y], ...], ...]        -> Polygon
    anything deeper or odd      -> MultiPolygon

The depth guess is lossy (a one-ring Polygon and a MultiPolygon holding
LineStrings look alike); producers we control should build typed
geometries from ``sheetmap.layers.geometry`` instead.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any

from loguru import logger

from sheetmap.errors import InvalidInputError
from sheetmap.layers.geometry import TypedFeature, geometry_from_geojson


def parse_geom(gj: Any) -> list[dict]:
    """Return the Features contained in ``gj``.

    A FeatureCollection's ``features`` list is returned as-is (not copied),
    so an empty collection gives an empty list. The input is never modified.

    Raises:
        InvalidInputError: If ``gj`` is None, a scalar or a string, or a
            FeatureCollection whose ``features`` is not a list of objects.
    """
    if gj is None:
        raise InvalidInputError("Geometry input is missing")

    if isinstance(gj, Mapping):
        if gj.get("type") == "FeatureCollection":
            return _collection_features(gj)
        if gj.get("type") == "Feature":
            return [gj]
        if "type" in gj:
            return [{"type": "Feature", "geometry": gj}]

    if isinstance(gj, (str, bytes)) or not isinstance(gj, (Sequence, Mapping)):
        raise InvalidInputError(f"Cannot read geometry from {type(gj).__name__}")

    return [
        {
            "type": "Feature",
            "geometry": {"type": _guess_type(gj), "coordinates": gj},
        }
    ]


def parse_geom_text(text: str) -> list[dict]:
    """Decode a JSON spreadsheet cell and normalize it with :func:`parse_geom`.

    Raises:
        InvalidInputError: If the cell is blank or not valid JSON.
    """
    if text is None or not str(text).strip():
        raise InvalidInputError("Geometry cell is empty")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidInputError(f"Geometry cell is not JSON: {exc.msg}") from exc
    return parse_geom(data)


def to_typed_features(gj: Any) -> list[TypedFeature]:
    """Normalize ``gj`` and convert every Feature to a TypedFeature.

    Raises:
        InvalidInputError: As :func:`parse_geom`.
        ValueError: If a Feature carries an unknown geometry type.
    """
    return [
        TypedFeature(
            geometry=geometry_from_geojson(f.get("geometry") or {}),
            properties=dict(f.get("properties") or {}),
        )
        for f in parse_geom(gj)
    ]


def _collection_features(gj: Mapping) -> list:
    features = gj.get("features")
    if not isinstance(features, list):
        raise InvalidInputError("FeatureCollection has no features list")
    for idx, feature in enumerate(features):
        if not isinstance(feature, Mapping):
            raise InvalidInputError(
                f"FeatureCollection feature {idx} is {type(feature).__name__}, not an object"
            )
    return features


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _first(value: Any) -> Any:
    """First element of a non-string sequence, or None."""
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)) and value:
        return value[0]
    return None


def _guess_type(coords: Sequence) -> str:
    first = _first(coords)
    if _is_number(first):
        return "Point"
    second = _first(first)
    if _is_number(second):
        return "LineString"
    if _is_number(_first(second)):
        return "Polygon"
    logger.debug("Coordinates nested too deep or unreadable; guessing MultiPolygon")
    return "MultiPolygon"
