"""Tests for core configuration and models."""

import pytest

from src.core.config import (
    GEOJSON_BOUNDS,
    LAYERS,
    PALETTES,
    VISIBLE_OPACITY,
    LayerConfig,
)
from src.models.extent import DRC_EXTENT, Extent
from src.models.viewer_config import ViewerConfig


def test_layer_manifest():
    """Test the static overlay manifest."""
    ids = [layer.id for layer in LAYERS]
    assert ids == [
        "wildfire_index",
        "historical_fires",
        "fire_weather_lst",
        "vegetation_ndvi",
        "population_urban",
        "terrain_slope",
    ]
    assert len(set(ids)) == len(ids)

    # Every overlay shares the boundary bounds
    assert all(layer.bounds == GEOJSON_BOUNDS for layer in LAYERS)

    # Only terrain slope starts visible
    visible = [layer for layer in LAYERS if layer.visible]
    assert [layer.id for layer in visible] == ["terrain_slope"]
    assert visible[0].opacity == VISIBLE_OPACITY


def test_every_layer_has_palette():
    """Test palette coverage for the legend."""
    for layer in LAYERS:
        assert layer.id in PALETTES
        assert len(PALETTES[layer.id]) >= 2
        assert all(color.startswith("#") for color in PALETTES[layer.id])


def test_button_text():
    """Test ON/OFF button labels."""
    layer = LAYERS[0]
    assert layer.button_text(True) == "Wildfire Index (ON)"
    assert layer.button_text(False) == "Wildfire Index (OFF)"


def test_extent_validation():
    """Test extent validation."""
    assert DRC_EXTENT.is_valid()

    invalid_extent = Extent(min_lon=31.0, min_lat=5.0, max_lon=12.0, max_lat=-13.0)
    assert not invalid_extent.is_valid()


def test_extent_leaflet_round_trip():
    """Test conversion to and from Leaflet corner pairs."""
    assert DRC_EXTENT.to_leaflet_bounds() == GEOJSON_BOUNDS
    assert Extent.from_leaflet_bounds(GEOJSON_BOUNDS) == DRC_EXTENT


def test_extent_center():
    """Test the map center lies inside the extent."""
    lat, lon = DRC_EXTENT.center
    assert lat == pytest.approx((-13.4538086 + 5.3121094) / 2)
    assert lon == pytest.approx((12.2136719 + 31.2740234) / 2)


def test_viewer_config_lookup(viewer_config):
    """Test layer lookup and palette fallback."""
    assert viewer_config.layer_ids[0] == "wildfire_index"
    assert viewer_config.get_layer("terrain_slope").name == "Terrain Slope (DEM)"
    assert viewer_config.palette_for("terrain_slope") == PALETTES["terrain_slope"]
    assert viewer_config.palette_for("unknown_layer") == PALETTES["wildfire_index"]
    assert viewer_config.palette_for(None) == PALETTES["wildfire_index"]

    with pytest.raises(KeyError):
        viewer_config.get_layer("unknown_layer")


def test_viewer_config_is_read_only(viewer_config):
    """Test the injected configuration cannot be mutated."""
    with pytest.raises(TypeError):
        viewer_config.palettes["terrain_slope"] = ("#000000",)

    with pytest.raises(AttributeError):
        viewer_config.title = "Changed"


def test_viewer_config_rejects_duplicate_ids():
    """Test manifest validation."""
    duplicate = LayerConfig(
        id="terrain_slope",
        name="Copy",
        image="component_maps/copy.png",
        bounds=GEOJSON_BOUNDS,
        opacity=0.0,
        visible=False,
        emoji="",
    )
    with pytest.raises(ValueError, match="Duplicate layer id"):
        ViewerConfig(layers=LAYERS + (duplicate,), palettes=PALETTES, extent=DRC_EXTENT)


def test_viewer_config_requires_layers():
    """Test an empty manifest is rejected."""
    with pytest.raises(ValueError):
        ViewerConfig(layers=(), palettes=PALETTES, extent=DRC_EXTENT)
