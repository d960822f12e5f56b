"""Immutable viewer configuration injected into the map window."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from src.core.config import (
    BOUNDARY_PATH,
    CITIES_PATH,
    DEFAULT_PALETTE_ID,
    LAYERS,
    MAP_TITLE,
    PALETTES,
    TILE_ATTRIBUTION,
    TILE_URL_TEMPLATE,
    LayerConfig,
)
from src.models.extent import DRC_EXTENT, Extent


@dataclass(frozen=True)
class ViewerConfig:
    """Everything the viewer needs to know about what it displays."""

    layers: tuple[LayerConfig, ...]
    palettes: Mapping[str, tuple[str, ...]]
    extent: Extent
    title: str = MAP_TITLE
    boundary_path: str = BOUNDARY_PATH
    cities_path: str = CITIES_PATH
    tile_url_template: str = TILE_URL_TEMPLATE
    tile_attribution: str = TILE_ATTRIBUTION
    default_palette_id: str = DEFAULT_PALETTE_ID
    _by_id: Mapping[str, LayerConfig] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        """Validate the manifest and freeze the palette table."""
        if not self.layers:
            raise ValueError("Viewer configuration requires at least one layer")

        by_id = {}
        for layer in self.layers:
            if layer.id in by_id:
                raise ValueError(f"Duplicate layer id: {layer.id}")
            by_id[layer.id] = layer

        if self.default_palette_id not in self.palettes:
            raise ValueError(f"Default palette '{self.default_palette_id}' is not defined")

        if not self.extent.is_valid():
            raise ValueError(f"Invalid viewer extent: {self.extent}")

        # Frozen dataclass: bypass __setattr__ for the derived fields
        object.__setattr__(self, "layers", tuple(self.layers))
        object.__setattr__(
            self, "palettes", MappingProxyType({key: tuple(value) for key, value in self.palettes.items()})
        )
        object.__setattr__(self, "_by_id", MappingProxyType(by_id))

    @property
    def layer_ids(self) -> tuple[str, ...]:
        """Layer ids in manifest order."""
        return tuple(layer.id for layer in self.layers)

    def get_layer(self, layer_id: str) -> LayerConfig:
        """
        Look up a layer by id.

        Raises:
            KeyError: If no layer has this id
        """
        return self._by_id[layer_id]

    def palette_for(self, layer_id: Optional[str]) -> tuple[str, ...]:
        """Colour stops for a layer, falling back to the default palette."""
        if layer_id is not None and layer_id in self.palettes:
            return self.palettes[layer_id]
        return self.palettes[self.default_palette_id]


def build_viewer_config(title: Optional[str] = None) -> ViewerConfig:
    """
    Build the viewer configuration from the static manifest.

    Args:
        title: Optional title override (from the YAML settings file)

    Returns:
        ViewerConfig instance
    """
    return ViewerConfig(
        layers=LAYERS,
        palettes=PALETTES,
        extent=DRC_EXTENT,
        title=title or MAP_TITLE,
    )
