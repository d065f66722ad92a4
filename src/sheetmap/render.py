"""Render a MapView to a standalone Leaflet page with folium.

The page has the Carto Positron basemap, one feature group of point
markers, an optional GeoJSON layer of shapes, and a leaflet-sidebar-v2
panel. Marker and shape clicks fill the panel and open it; clicking the
map background closes it.
"""

from __future__ import annotations

import html
from pathlib import Path

import folium
from branca.element import MacroElement
from folium.elements import JSCSSMixin
from jinja2 import Template
from loguru import logger

from sheetmap.markers import MarkerType, PointMarker
from sheetmap.view import MapView

_SIDEBAR_VERSION = "3.2.3"


class SidebarPanel(JSCSSMixin, MacroElement):
    """leaflet-sidebar-v2 control with one info panel.

    ``bind_marker`` and ``bind_layer`` register map objects whose clicks
    should open the panel with their feature's name and description.
    """

    _template = Template(
        """
        {% macro html(this, kwargs) %}
        <div id="{{ this.panel.container }}" class="leaflet-sidebar collapsed"></div>
        {% endmacro %}

        {% macro script(this, kwargs) %}
        var {{ this.get_name() }} = L.control.sidebar({{ this.options|tojson }})
            .addTo({{ this._parent.get_name() }});
        {{ this.get_name() }}.addPanel({
            id: {{ this.panel.panel_id|tojson }},
            tab: {{ this.tab_html|tojson }},
            pane: "<p id='sidebar-content'>" + {{ this.panel.body|tojson }} + "</p>",
            title: "<h2 id='sidebar-title'>" + {{ this.panel.title|tojson }} + "</h2>"
        });
        {{ this._parent.get_name() }}.on("click", function () {
            {{ this.get_name() }}.close({{ this.panel.panel_id|tojson }});
        });
        function {{ this.get_name() }}_show(e) {
            L.DomEvent.stopPropagation(e);
            var props = e.target.feature.properties;
            document.getElementById("sidebar-title").innerHTML = props.name;
            document.getElementById("sidebar-content").innerHTML = props.description;
            {{ this.get_name() }}.open({{ this.panel.panel_id|tojson }});
        }
        {% for name, properties in this.markers %}
        {{ name }}.feature = {properties: {{ properties|tojson }}};
        {{ name }}.on({click: {{ this.get_name() }}_show});
        {% endfor %}
        {% for name in this.layers %}
        {{ name }}.eachLayer(function (layer) {
            layer.on({click: {{ this.get_name() }}_show});
        });
        {% endfor %}
        {% endmacro %}
        """
    )

    default_js = [
        (
            "leaflet-sidebar-v2",
            f"https://unpkg.com/leaflet-sidebar-v2@{_SIDEBAR_VERSION}/js/leaflet-sidebar.min.js",
        ),
    ]
    default_css = [
        (
            "leaflet-sidebar-v2",
            f"https://unpkg.com/leaflet-sidebar-v2@{_SIDEBAR_VERSION}/css/leaflet-sidebar.min.css",
        ),
    ]

    def __init__(self, panel) -> None:
        super().__init__()
        self._name = "Sidebar"
        self.panel = panel
        self.options = {
            "container": panel.container,
            "closeButton": panel.close_button,
            "position": panel.position,
        }
        self.tab_html = f"<i class='{panel.tab_icon} active'></i>"
        self.markers: list[tuple[str, dict]] = []
        self.layers: list[str] = []

    def bind_marker(self, marker: MacroElement, properties: dict) -> None:
        self.markers.append((marker.get_name(), properties))

    def bind_layer(self, layer: folium.GeoJson) -> None:
        self.layers.append(layer.get_name())


def build_map(view: MapView) -> folium.Map:
    """Build the folium map for ``view``."""
    s = view.settings
    fmap = folium.Map(location=[s.center_lat, s.center_lng], zoom_start=s.zoom, tiles=None)
    folium.TileLayer(
        tiles=s.tiles_url,
        attr=s.tiles_attribution,
        subdomains=s.tiles_subdomains,
        max_zoom=s.tiles_max_zoom,
        name="Carto Positron",
    ).add_to(fmap)

    points = folium.FeatureGroup(name="Points").add_to(fmap)
    drawn = [(_marker_element(m, s.use_popups).add_to(points), m) for m in view.markers]

    shapes = None
    if view.shapes:
        shapes = folium.GeoJson(
            view.shapes_geojson(),
            name="Shapes",
            style_function=_shape_style,
        ).add_to(fmap)

    if s.use_sidebar:
        sidebar = SidebarPanel(view.panel)
        for element, marker in drawn:
            sidebar.bind_marker(element, marker.properties)
        if shapes is not None:
            sidebar.bind_layer(shapes)
        sidebar.add_to(fmap)

    if view.load_error:
        fmap.get_root().html.add_child(folium.Element(_error_banner(view.load_error)))

    return fmap


def render_html(view: MapView) -> str:
    """Render ``view`` to a complete HTML document."""
    return build_map(view).get_root().render()


def save_html(view: MapView, path: str | Path) -> Path:
    path = Path(path)
    path.write_text(render_html(view), encoding="utf-8")
    logger.info(f"Map written to {path} ({len(view.markers)} markers, {len(view.shapes)} shapes)")
    return path


def _marker_element(marker: PointMarker, use_popups: bool) -> MacroElement:
    popup = folium.Popup(marker.popup_html()) if use_popups else None
    if marker.kind is MarkerType.CIRCLE_MARKER:
        return folium.CircleMarker(location=list(marker.location), radius=marker.radius, popup=popup)
    if marker.kind is MarkerType.CIRCLE:
        return folium.Circle(location=list(marker.location), radius=marker.radius, popup=popup)
    icon = marker.icon
    return folium.Marker(
        location=list(marker.location),
        popup=popup,
        icon=folium.Icon(
            color=icon.marker_color,
            icon_color=icon.icon_color,
            icon=icon.icon,
            prefix=icon.prefix,
        ),
    )


def _shape_style(feature: dict) -> dict:
    color = (feature.get("properties") or {}).get("color") or "#3388ff"
    return {"color": color, "fillColor": color, "weight": 2, "fillOpacity": 0.3}


def _error_banner(message: str) -> str:
    return (
        '<div id="sheet-error" style="position:fixed;top:10px;left:50%;'
        "transform:translateX(-50%);z-index:10000;background:#c0392b;color:#fff;"
        'padding:8px 16px;border-radius:4px;font-family:sans-serif;">'
        f"Could not load the sheet: {html.escape(message)}</div>"
    )
