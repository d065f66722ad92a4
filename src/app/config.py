"""Configuration management using Pydantic settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from sheetmap.options import CARTO_ATTRIBUTION, CARTO_POSITRON_URL


class Settings(BaseSettings):
    """Application settings loaded from environment variables (SHEETMAP_*)."""

    model_config = SettingsConfigDict(
        env_prefix="SHEETMAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "SHEETMAP"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Published sheets: Google Sheets "publish to web" CSV links
    points_url: str = (
        "https://docs.google.com/spreadsheets/d/e/2PACX-1vRRqlP8nkCcFZYrIh6BWRdUDlCqC0Hka7rcLb0L8BQEbGhqZcoytD5TqZhLwRxCaodoyi0KJ6v2fbe6/pub?output=csv"
    )
    shapes_url: str = ""          # empty disables the shapes layer
    fetch_timeout: float = 30.0   # seconds

    # Initial view
    map_center_lat: float = 43.91
    map_center_lng: float = 12.92
    map_zoom: int = 14

    # Basemap
    tiles_url: str = CARTO_POSITRON_URL
    tiles_attribution: str = CARTO_ATTRIBUTION
    tiles_subdomains: str = "abcd"
    tiles_max_zoom: int = 19

    # Markers: "marker", "circleMarker" (radius in px) or "circle" (radius in m)
    marker_type: str = "marker"
    marker_radius: float = 100

    # Panel
    use_sidebar: bool = True
    use_popups: bool = False
    panel_id: str = "my-info-panel"
    panel_title: str = "Seleziona un marker"


settings = Settings()
