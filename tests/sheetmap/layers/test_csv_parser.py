"""Tests for the sheet CSV parser — points, shapes, blank lines, extra columns."""

import pytest

from sheetmap.layers.parsers.csv_import import parse_rows, parse_shape_rows


@pytest.mark.unit
class TestParseRows:
    """Parse the points sheet into Row records."""

    def test_parse_basic_sheet(self):
        csv_text = (
            "name,description,color,lat,lon\n"
            "Rocca,Prima torre,red,43.9355,12.4473\n"
            "Piazza,<b>Centro</b>,blue,43.9363,12.4468\n"
        )
        rows = parse_rows(csv_text)
        assert len(rows) == 2
        first = rows[0]
        assert first.name == "Rocca"
        assert first.description == "Prima torre"
        assert first.color == "red"
        # Kept as read
        assert first.lat == "43.9355"
        assert first.location == (pytest.approx(43.9355), pytest.approx(12.4473))
        assert rows[1].description == "<b>Centro</b>"

    def test_quoted_description_with_commas(self):
        csv_text = 'name,description,color,lat,lon\nA,"one, two, three",red,1,2\n'
        rows = parse_rows(csv_text)
        assert rows[0].description == "one, two, three"

    def test_extra_columns_preserved(self):
        csv_text = "name,description,color,lat,lon,website\nA,d,red,1,2,http://x\n"
        rows = parse_rows(csv_text)
        assert rows[0].extra == {"website": "http://x"}

    def test_blank_lines_skipped(self):
        csv_text = "name,description,color,lat,lon\nA,d,red,1,2\n,,,,\n\n"
        rows = parse_rows(csv_text)
        assert len(rows) == 1

    def test_headers_are_case_sensitive(self):
        """'Name' is not 'name': the value lands in extra."""
        csv_text = "Name,description,color,lat,lon\nA,d,red,1,2\n"
        rows = parse_rows(csv_text)
        assert rows[0].name == ""
        assert rows[0].extra == {"Name": "A"}

    def test_missing_columns_read_empty(self):
        csv_text = "name,lat,lon\nA,1,2\n"
        rows = parse_rows(csv_text)
        assert rows[0].description == ""
        assert rows[0].color == ""

    def test_empty_input(self):
        assert parse_rows("") == []

    def test_header_only(self):
        assert parse_rows("name,description,color,lat,lon\n") == []

    def test_short_row(self):
        csv_text = "name,description,color,lat,lon\nA,d\n"
        rows = parse_rows(csv_text)
        assert rows[0].lat == ""
        assert rows[0].lon == ""

    def test_cells_beyond_header_dropped(self):
        csv_text = "name,description,color,lat,lon\nA,d,red,1,2,extra1,extra2\n"
        rows = parse_rows(csv_text)
        assert rows[0].extra == {}


@pytest.mark.unit
class TestParseShapeRows:
    """Parse the shapes sheet; geometry cells stay as raw text."""

    def test_parse_shapes(self):
        csv_text = (
            "name,description,color,geometry\n"
            'Mura,Cinta muraria,green,"[[12.44, 43.93], [12.45, 43.94]]"\n'
        )
        rows = parse_shape_rows(csv_text)
        assert len(rows) == 1
        assert rows[0].name == "Mura"
        assert rows[0].geometry == "[[12.44, 43.93], [12.45, 43.94]]"

    def test_geojson_cell_with_quotes(self):
        csv_text = (
            "name,description,color,geometry\n"
            '"Zona","d","red","{""type"": ""Point"", ""coordinates"": [1, 2]}"\n'
        )
        rows = parse_shape_rows(csv_text)
        assert rows[0].geometry == '{"type": "Point", "coordinates": [1, 2]}'
