"""Tests for map page rendering."""

import json
import re

from src.core.config import TILE_URL_TEMPLATE
from src.core.map_page import build_overlay_specs, render_map_page, resolve_asset_url
from src.models.viewer_config import build_viewer_config


def _overlays_from_page(html):
    match = re.search(r"var OVERLAYS = (.*);", html)
    assert match, "overlay list not found in page"
    return json.loads(match.group(1))


def test_resolve_asset_url_http():
    assert (
        resolve_asset_url("http://localhost:3000", "component_maps/terrain_slope_overlay.png")
        == "http://localhost:3000/component_maps/terrain_slope_overlay.png"
    )
    assert (
        resolve_asset_url("https://example.org/site/", "/drc_admin_wei.geojson")
        == "https://example.org/site/drc_admin_wei.geojson"
    )


def test_resolve_asset_url_local(tmp_path):
    url = resolve_asset_url(str(tmp_path), "component_maps/terrain_slope_overlay.png")
    assert url.startswith("file://")
    assert url.endswith("/component_maps/terrain_slope_overlay.png")


def test_overlay_specs_follow_manifest(viewer_config, layer_states):
    specs = build_overlay_specs(viewer_config, layer_states, "http://localhost:3000/")

    assert [spec["id"] for spec in specs] == list(viewer_config.layer_ids)
    by_id = {spec["id"]: spec for spec in specs}

    # Wildfire index paints below every other overlay
    assert by_id["wildfire_index"]["zIndex"] == 1
    assert all(spec["zIndex"] == 2 for spec in specs if spec["id"] != "wildfire_index")

    assert by_id["terrain_slope"]["opacity"] == 0.9
    assert by_id["historical_fires"]["opacity"] == 0.0
    assert by_id["vegetation_ndvi"]["url"] == (
        "http://localhost:3000/component_maps/vegetation_index_(ndvi)_overlay.png"
    )


def test_render_page_contains_every_overlay(viewer_config, layer_states):
    html = render_map_page(viewer_config, layer_states, "http://localhost:3000/")

    overlays = _overlays_from_page(html)
    assert len(overlays) == 6
    for layer in viewer_config.layers:
        assert f"http://localhost:3000/{layer.image}" in [overlay["url"] for overlay in overlays]

    assert json.dumps(TILE_URL_TEMPLATE) in html
    assert "fitDrcBounds();" in html
    assert "function setBoundary(geojson)" in html
    assert "LEAFLET_JS_URL" not in html
    assert "OVERLAYS_JSON" not in html
    assert "<title>Democratic Republic of the Congo - Wildfire Risk Intensity</title>" in html


def test_render_reflects_current_state(viewer_config, layer_states):
    layer_states.toggle("terrain_slope")
    layer_states.toggle("population_urban")

    overlays = {o["id"]: o for o in _overlays_from_page(render_map_page(viewer_config, layer_states, "/tmp/public"))}

    assert overlays["terrain_slope"]["opacity"] == 0.0
    assert overlays["population_urban"]["opacity"] == 0.9


def test_page_does_not_depend_on_boundary(viewer_config, layer_states):
    """Map, tiles and overlays are rendered without any GeoJSON; the boundary is added later."""
    html = render_map_page(viewer_config, layer_states, "http://localhost:3000/")

    assert "L.tileLayer(" in html
    assert "drc_admin_wei.geojson" not in html
    assert len(_overlays_from_page(html)) == len(viewer_config.layers)


def test_title_text_is_not_treated_as_placeholder(layer_states):
    config = build_viewer_config(title="Risk at MAP_ZOOM & OVERLAYS_JSON")
    html = render_map_page(config, layer_states, "http://localhost:3000/")

    assert "<title>Risk at MAP_ZOOM &amp; OVERLAYS_JSON</title>" in html
    assert len(_overlays_from_page(html)) == len(config.layers)
