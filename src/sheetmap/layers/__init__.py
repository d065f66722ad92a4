"""Sheet data layers — rows from published CSVs and their geometries.

Parsers use only Python stdlib (csv, json).
"""

from sheetmap.layers.layer import Layer, Row, ShapeRow
from sheetmap.layers.parsers.geom import parse_geom, parse_geom_text

__all__ = ["Layer", "Row", "ShapeRow", "parse_geom", "parse_geom_text"]
