"""sheetmap — publish a spreadsheet of places as an interactive web map.

Rows from a published CSV become Leaflet markers; clicking a marker fills
and opens a side panel with the row's name and description.
"""

__version__ = "0.1.0"
