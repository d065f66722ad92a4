"""Exceptions raised by the sheetmap engine."""

from __future__ import annotations


class SheetMapError(Exception):
    """Base class for all sheetmap errors."""


class InvalidInputError(SheetMapError, ValueError):
    """Geometry input is absent or cannot be interpreted at all."""


class SheetSourceError(SheetMapError):
    """The published sheet could not be downloaded or decoded.

    Attributes:
        url: The source URL that failed.
    """

    def __init__(self, url: str, message: str) -> None:
        super().__init__(f"{url}: {message}")
        self.url = url
