"""Parse a published sheet (CSV with a header row) into Row records.

Uses stdlib csv. Column keys are taken verbatim from the header row and
are case-sensitive: the points sheet needs name, description, color, lat
and lon; the shapes sheet needs name, description, color and geometry.
Any other columns are kept in ``extra``.
"""

from __future__ import annotations

import csv
import io

from loguru import logger

from sheetmap.layers.layer import Row, ShapeRow

POINT_COLUMNS = ("name", "description", "color", "lat", "lon")
SHAPE_COLUMNS = ("name", "description", "color", "geometry")


def parse_rows(csv_string: str) -> list[Row]:
    """Parse the points sheet.

    Args:
        csv_string: Raw CSV content with headers.

    Returns:
        One Row per non-blank record, in sheet order. Missing columns read
        as empty strings.
    """
    rows: list[Row] = []
    for record in _records(csv_string, POINT_COLUMNS):
        rows.append(
            Row(
                name=record.pop("name", ""),
                description=record.pop("description", ""),
                color=record.pop("color", ""),
                lat=record.pop("lat", ""),
                lon=record.pop("lon", ""),
                extra=record,
            )
        )
    return rows


def parse_shape_rows(csv_string: str) -> list[ShapeRow]:
    """Parse the shapes sheet. Geometry cells are left as raw text."""
    rows: list[ShapeRow] = []
    for record in _records(csv_string, SHAPE_COLUMNS):
        rows.append(
            ShapeRow(
                name=record.pop("name", ""),
                description=record.pop("description", ""),
                color=record.pop("color", ""),
                geometry=record.pop("geometry", ""),
                extra=record,
            )
        )
    return rows


def _records(csv_string: str, expected: tuple[str, ...]):
    """Yield each non-blank CSV record as a plain dict."""
    reader = csv.DictReader(io.StringIO(csv_string))
    if reader.fieldnames is None:
        return

    missing = [col for col in expected if col not in reader.fieldnames]
    if missing:
        logger.warning(f"Sheet is missing columns: {', '.join(missing)}")

    for record in reader:
        # Published sheets often end with empty lines
        if not any((value or "").strip() for value in record.values() if isinstance(value, str)):
            continue
        # Cells beyond the header land under the None key
        record.pop(None, None)
        yield {key: (value if value is not None else "") for key, value in record.items()}
