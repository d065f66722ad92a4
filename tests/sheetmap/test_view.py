"""Tests for MapView — point/shape layers and click dispatch."""

import json

import pytest

from sheetmap.layers import Row, ShapeRow
from sheetmap.markers import ClickEvent
from sheetmap.options import MapSettings
from sheetmap.panel import PanelStatus
from sheetmap.view import MapView


def _rows():
    return [
        Row(name="A", description="d1", color="red", lat=43.9, lon=12.9),
        Row(name="B", description="d2", color="blue", lat="43.91", lon="12.91"),
    ]


@pytest.mark.unit
class TestPointToPanelScenario:
    """One row, one marker; click opens, background click closes."""

    def test_end_to_end(self):
        view = MapView()
        view.add_points([Row(name="A", description="d1", color="red", lat=43.9, lon=12.9)])

        assert len(view.markers) == 1
        assert view.markers[0].location == (43.9, 12.9)
        assert view.panel.status is PanelStatus.CLOSED

        event = view.click_marker(0)
        assert event.propagation_stopped
        assert view.panel.status is PanelStatus.OPEN
        assert view.panel.label == "A"
        assert view.panel.body == "d1"

        view.click_map()
        assert view.panel.status is PanelStatus.CLOSED


@pytest.mark.unit
class TestClicks:
    """Click dispatch between markers and the map background."""

    def test_marker_to_marker(self):
        view = MapView()
        view.add_points(_rows())
        view.click_marker(0)
        view.click_marker(1)
        assert view.panel.label == "B"
        assert view.panel.title == "B"
        assert view.panel.body == "d2"

    def test_propagated_marker_click_does_not_close(self):
        """The same click reaching the map after the marker handled it is ignored."""
        view = MapView()
        view.add_points(_rows())
        event = view.click_marker(0, ClickEvent())
        view.click_map(event)
        assert view.panel.status is PanelStatus.OPEN

    def test_background_click_when_closed(self):
        view = MapView()
        view.click_map(ClickEvent())
        assert view.panel.status is PanelStatus.CLOSED

    def test_sidebar_disabled(self):
        view = MapView(MapSettings(use_sidebar=False))
        view.add_points(_rows())
        event = view.click_marker(0)
        assert not event.propagation_stopped
        assert view.panel.status is PanelStatus.CLOSED

    def test_panel_uses_configured_id_and_title(self):
        view = MapView(MapSettings(panel_id="info", panel_title="Pick one"))
        assert view.panel.panel_id == "info"
        assert view.panel.title == "Pick one"


@pytest.mark.unit
class TestPointLayer:
    def test_marker_settings_applied(self):
        view = MapView(MapSettings(marker_type="circle", marker_radius=50))
        markers = view.add_points(_rows())
        assert all(m.kind.value == "circle" for m in markers)
        assert all(m.radius == 50 for m in markers)

    def test_add_points_accumulates(self):
        view = MapView()
        view.add_points(_rows())
        view.add_points(_rows()[:1])
        assert len(view.markers) == 3

    def test_to_geojson(self):
        view = MapView()
        view.add_points(_rows())
        fc = view.to_geojson()
        assert fc["type"] == "FeatureCollection"
        assert len(fc["features"]) == 2
        assert fc["features"][1]["geometry"]["coordinates"] == [12.91, 43.91]


@pytest.mark.unit
class TestShapeLayer:
    """Shape rows are normalized and clickable."""

    def test_add_shapes(self):
        view = MapView()
        added = view.add_shapes([
            ShapeRow(name="Mura", description="walls", color="green",
                     geometry="[[12.44, 43.93], [12.45, 43.94]]"),
        ])
        assert len(added) == 1
        assert added[0]["geometry"]["type"] == "LineString"
        assert added[0]["properties"] == {"name": "Mura", "description": "walls", "color": "green"}

    def test_collection_cell_expands(self):
        fc = {
            "type": "FeatureCollection",
            "features": [
                {"type": "Feature", "geometry": {"type": "Point", "coordinates": [1, 2]},
                 "properties": {"height": 3}},
                {"type": "Feature", "geometry": {"type": "Point", "coordinates": [3, 4]}},
            ],
        }
        view = MapView()
        view.add_shapes([ShapeRow(name="S", description="d", color="red", geometry=json.dumps(fc))])
        assert len(view.shapes) == 2
        assert view.shapes[0]["properties"]["height"] == 3
        assert view.shapes[1]["properties"]["name"] == "S"

    def test_source_features_not_mutated(self):
        feature = {"type": "Feature", "geometry": {"type": "Point", "coordinates": [1, 2]},
                   "properties": {"k": "v"}}
        view = MapView()
        view.add_shapes([ShapeRow(name="S", description="d", color="red",
                                  geometry=json.dumps(feature))])
        assert view.shapes[0]["properties"]["k"] == "v"
        assert "name" not in feature["properties"]

    def test_bad_cells_skipped(self):
        view = MapView()
        view.add_shapes([
            ShapeRow(name="bad", description="", color="", geometry="not json"),
            ShapeRow(name="empty", description="", color="", geometry=""),
            ShapeRow(name="ok", description="", color="", geometry="[1, 2]"),
        ])
        assert [s["properties"]["name"] for s in view.shapes] == ["ok"]

    @pytest.mark.parametrize("cell", [
        '{"type": "FeatureCollection"}',
        '{"type": "FeatureCollection", "features": [1]}',
        '{"type": "FeatureCollection", "features": "abc"}',
    ])
    def test_malformed_collection_skipped(self, cell):
        view = MapView()
        view.add_shapes([
            ShapeRow(name="bad", description="", color="", geometry=cell),
            ShapeRow(name="ok", description="", color="", geometry="[1, 2]"),
        ])
        assert [s["properties"]["name"] for s in view.shapes] == ["ok"]

    def test_empty_collection_adds_nothing(self):
        view = MapView()
        added = view.add_shapes([ShapeRow(name="S", description="", color="",
                                          geometry='{"type": "FeatureCollection", "features": []}')])
        assert added == []
        assert view.shapes == []

    def test_non_object_properties_replaced(self):
        feature = {"type": "Feature", "geometry": {"type": "Point", "coordinates": [1, 2]},
                   "properties": ["x"]}
        view = MapView()
        view.add_shapes([ShapeRow(name="S", description="d", color="red",
                                  geometry=json.dumps(feature))])
        assert view.shapes[0]["properties"] == {"name": "S", "description": "d", "color": "red"}

    def test_click_shape(self):
        view = MapView()
        view.add_shapes([ShapeRow(name="Zona", description="area", color="red",
                                  geometry="[[[1, 2], [3, 4], [1, 2]]]")])
        event = view.click_shape(0)
        assert event.propagation_stopped
        assert view.panel.label == "Zona"
        assert view.panel.body == "area"

    def test_shapes_geojson(self):
        view = MapView()
        view.add_shapes([ShapeRow(name="S", description="d", color="red", geometry="[1, 2]")])
        assert view.shapes_geojson()["features"] == view.shapes
