"""Render the Leaflet map page from the HTML template."""

import html
import json
import re
from pathlib import Path
from typing import Mapping
from urllib.parse import urljoin

from src.core.config import (
    BASE_LAYER_ID,
    BASE_LAYER_Z_INDEX,
    BOUNDARY_Z_INDEX,
    DEFAULT_MAP_ZOOM,
    FIT_BOUNDS_PADDING,
    LEAFLET_CSS_URL,
    LEAFLET_JS_URL,
    OVERLAY_Z_INDEX,
    LayerConfig,
)
from src.core.resource_loader import is_http_url
from src.models.layer_state import LayerState
from src.models.viewer_config import ViewerConfig

TEMPLATE_PATH = Path(__file__).parent.parent.parent / "resources" / "map_template.html"


def resolve_asset_url(asset_base: str, path: str) -> str:
    """
    Resolve a resource path against the asset base.

    Args:
        asset_base: HTTP(S) base URL or local directory
        path: Resource path relative to the base (e.g. component_maps/x.png)

    Returns:
        Absolute URL (http(s):// or file://)
    """
    if is_http_url(asset_base):
        base = asset_base if asset_base.endswith('/') else asset_base + '/'
        return urljoin(base, path.lstrip('/'))
    return (Path(asset_base).resolve() / path.lstrip('/')).as_uri()


def overlay_z_index(layer: LayerConfig) -> int:
    """The wildfire index overlay is always painted below the others."""
    return BASE_LAYER_Z_INDEX if layer.id == BASE_LAYER_ID else OVERLAY_Z_INDEX


def build_overlay_specs(config: ViewerConfig, states: Mapping[str, LayerState], asset_base: str) -> list[dict]:
    """
    Describe every image overlay for the page script.

    Args:
        config: Viewer configuration
        states: Current layer states
        asset_base: Base for resolving image paths

    Returns:
        List of overlay dicts in manifest order
    """
    specs = []
    for layer in config.layers:
        state = states[layer.id]
        specs.append({
            'id': layer.id,
            'url': resolve_asset_url(asset_base, layer.image),
            'bounds': [list(corner) for corner in layer.bounds],
            'opacity': state.opacity,
            'zIndex': overlay_z_index(layer),
        })
    return specs


def render_map_page(config: ViewerConfig, states: Mapping[str, LayerState], asset_base: str) -> str:
    """
    Fill the map template with the current configuration and state.

    Args:
        config: Viewer configuration
        states: Current layer states
        asset_base: Base for resolving image paths

    Returns:
        Complete HTML document
    """
    with open(TEMPLATE_PATH, 'r', encoding='utf-8') as f:
        template = f.read()

    lat, lon = config.extent.center
    bounds = [list(corner) for corner in config.extent.to_leaflet_bounds()]
    replacements = {
        'LEAFLET_CSS_URL': LEAFLET_CSS_URL,
        'LEAFLET_JS_URL': LEAFLET_JS_URL,
        'MAP_TITLE': html.escape(config.title),
        'MAP_LAT': str(lat),
        'MAP_LON': str(lon),
        'MAP_ZOOM': str(DEFAULT_MAP_ZOOM),
        'TILE_URL_JSON': json.dumps(config.tile_url_template),
        'TILE_ATTRIBUTION_JSON': json.dumps(config.tile_attribution),
        'OVERLAYS_JSON': json.dumps(build_overlay_specs(config, states, asset_base)),
        'BOUNDS_JSON': json.dumps(bounds),
        'FIT_PADDING_JSON': json.dumps(list(FIT_BOUNDS_PADDING)),
        'BOUNDARY_Z_INDEX': str(BOUNDARY_Z_INDEX),
    }

    # Single pass so substituted values are never rescanned for placeholders
    pattern = re.compile("|".join(re.escape(key) for key in sorted(replacements, key=len, reverse=True)))
    return pattern.sub(lambda match: replacements[match.group(0)], template)
