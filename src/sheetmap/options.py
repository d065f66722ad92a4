"""Map options used by the engine, independent of where they were configured."""

from __future__ import annotations

from dataclasses import dataclass

CARTO_POSITRON_URL = (
    "https://cartodb-basemaps-{s}.global.ssl.fastly.net/light_all/{z}/{x}/{y}{r}.png"
)
CARTO_ATTRIBUTION = (
    "&copy; <a href='http://www.openstreetmap.org/copyright'>OpenStreetMap</a> "
    "&copy; <a href='http://cartodb.com/attributions'>CartoDB</a>"
)


@dataclass(frozen=True)
class MapSettings:
    """Everything needed to build and render one map."""

    center_lat: float = 43.91
    center_lng: float = 12.92
    zoom: int = 14
    tiles_url: str = CARTO_POSITRON_URL
    tiles_attribution: str = CARTO_ATTRIBUTION
    tiles_subdomains: str = "abcd"
    tiles_max_zoom: int = 19
    marker_type: str = "marker"
    marker_radius: float = 100
    use_sidebar: bool = True
    use_popups: bool = False
    panel_id: str = "my-info-panel"
    panel_title: str = "Seleziona un marker"

    @classmethod
    def from_settings(cls, settings) -> "MapSettings":
        """Build from an object with the application's settings attributes."""
        return cls(
            center_lat=settings.map_center_lat,
            center_lng=settings.map_center_lng,
            zoom=settings.map_zoom,
            tiles_url=settings.tiles_url,
            tiles_attribution=settings.tiles_attribution,
            tiles_subdomains=settings.tiles_subdomains,
            tiles_max_zoom=settings.tiles_max_zoom,
            marker_type=settings.marker_type,
            marker_radius=settings.marker_radius,
            use_sidebar=settings.use_sidebar,
            use_popups=settings.use_popups,
            panel_id=settings.panel_id,
            panel_title=settings.panel_title,
        )
