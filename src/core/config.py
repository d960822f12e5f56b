"""Configuration for overlay layers, palettes and application settings."""

from dataclasses import dataclass

Bounds = tuple[tuple[float, float], tuple[float, float]]


@dataclass(frozen=True)
class LayerConfig:
    """Configuration for a pre-rendered image overlay.

    All overlays of this deployment share the same geographic bounds, taken from
    the extent of the administrative boundary GeoJSON.
    """

    id: str
    name: str
    image: str
    bounds: Bounds
    opacity: float
    visible: bool
    emoji: str

    def button_text(self, visible: bool) -> str:
        """Toggle button label reflecting the current state."""
        return f"{self.name} {'(ON)' if visible else '(OFF)'}"


# Bounds extracted from drc_admin_wei.geojson; every overlay image is aligned to them
DRC_REGION_BOUNDS = {
    "min_lon": 12.2136719,
    "max_lon": 31.2740234,
    "min_lat": -13.4538086,
    "max_lat": 5.3121094,
}

GEOJSON_BOUNDS: Bounds = (
    (DRC_REGION_BOUNDS["min_lat"], DRC_REGION_BOUNDS["min_lon"]),  # Southwest [lat, lon]
    (DRC_REGION_BOUNDS["max_lat"], DRC_REGION_BOUNDS["max_lon"]),  # Northeast [lat, lon]
)

# Opacity applied to an overlay when it is switched on
VISIBLE_OPACITY = 0.9
HIDDEN_OPACITY = 0.0

# Overlay painted below every other overlay
BASE_LAYER_ID = "wildfire_index"
BASE_LAYER_Z_INDEX = 1
OVERLAY_Z_INDEX = 2
BOUNDARY_Z_INDEX = 1000

# Image overlays, in manifest (stacking) order
LAYERS: tuple[LayerConfig, ...] = (
    LayerConfig(
        id="wildfire_index",
        name="Wildfire Index",
        image="component_maps/wildfire_intensity_overlay.png",
        bounds=GEOJSON_BOUNDS,
        opacity=HIDDEN_OPACITY,
        visible=False,
        emoji="🔥",
    ),
    LayerConfig(
        id="historical_fires",
        name="Historical Fires",
        image="component_maps/historical_fires_overlay.png",
        bounds=GEOJSON_BOUNDS,
        opacity=HIDDEN_OPACITY,
        visible=False,
        emoji="🔥",
    ),
    LayerConfig(
        id="fire_weather_lst",
        name="Fire Weather (LST)",
        image="component_maps/fire_weather_(lst)_overlay.png",
        bounds=GEOJSON_BOUNDS,
        opacity=HIDDEN_OPACITY,
        visible=False,
        emoji="🌡️",
    ),
    LayerConfig(
        id="vegetation_ndvi",
        name="Vegetation Index (NDVI)",
        image="component_maps/vegetation_index_(ndvi)_overlay.png",
        bounds=GEOJSON_BOUNDS,
        opacity=HIDDEN_OPACITY,
        visible=False,
        emoji="🌿",
    ),
    LayerConfig(
        id="population_urban",
        name="Population/Urban",
        image="component_maps/population_urban_overlay.png",
        bounds=GEOJSON_BOUNDS,
        opacity=HIDDEN_OPACITY,
        visible=False,
        emoji="🏙️",
    ),
    LayerConfig(
        id="terrain_slope",
        name="Terrain Slope (DEM)",
        image="component_maps/terrain_slope_overlay.png",
        bounds=GEOJSON_BOUNDS,
        opacity=VISIBLE_OPACITY,
        visible=True,
        emoji="⛰️",
    ),
)

# Legend colour stops per layer, low -> high
PALETTES: dict[str, tuple[str, ...]] = {
    "wildfire_index": (
        "#ffffcc", "#ffeda0", "#fed976", "#feb24c", "#fd8d3c",
        "#fc4e2a", "#e31a1c", "#bd0026", "#800026",
    ),
    "historical_fires": (
        "#fff7ec", "#fee8c8", "#fdd49e", "#fdbb84", "#fc8d59",
        "#ef6548", "#d7301f", "#b30000", "#7f0000",
    ),
    "fire_weather_lst": (
        "#313695", "#4575b4", "#74add1", "#abd9e9", "#e0f3f8", "#ffffcc",
        "#fee090", "#fdae61", "#f46d43", "#d73027", "#a50026",
    ),
    "vegetation_ndvi": (
        "#8b4513", "#a0522d", "#cd853f", "#daa520", "#9acd32",
        "#7cfc00", "#32cd32", "#228b22", "#006400",
    ),
    "population_urban": (
        "#f7f7f7", "#d9d9d9", "#bdbdbd", "#969696",
        "#737373", "#525252", "#252525", "#000000",
    ),
    "terrain_slope": (
        "#006837", "#238443", "#41ab5d", "#78c679", "#addd8e", "#d9f0a3",
        "#f7fcb9", "#fee08b", "#fdae61", "#f46d43", "#d73027", "#a50026",
    ),
}
DEFAULT_PALETTE_ID = "wildfire_index"

LEGEND_LOW_LABEL = "Low"
LEGEND_HIGH_LABEL = "High"

# Resources fetched by the viewer, relative to the asset base
BOUNDARY_PATH = "drc_admin_wei.geojson"
CITIES_PATH = "drc_cities_filtered.geojson"

# Basemap
TILE_URL_TEMPLATE = "https://{s}.basemaps.cartocdn.com/light_all/{z}/{x}/{y}{r}.png"
TILE_ATTRIBUTION = '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> contributors'
LEAFLET_CSS_URL = "https://unpkg.com/leaflet@1.9.4/dist/leaflet.css"
LEAFLET_JS_URL = "https://unpkg.com/leaflet@1.9.4/dist/leaflet.js"

# Download settings
DOWNLOAD_TIMEOUT = 30  # seconds

# UI settings
MAP_TITLE = "Democratic Republic of the Congo - Wildfire Risk Intensity"
DEFAULT_MAP_ZOOM = 6
FIT_BOUNDS_PADDING = (20, 20)  # pixels
WINDOW_SIZE = (1280, 860)

# Asset staging
DEFAULT_SOURCE_ROOT = "."
DEFAULT_PUBLIC_DIR = "public"
COMPONENT_MAPS_DIR = "component_maps"
METHODOLOGY_REPORT = "methodology.html"

# Dev server
DEFAULT_SERVER_HOST = "0.0.0.0"
DEFAULT_SERVER_PORT = 3000
PORT_SEARCH_ATTEMPTS = 10
