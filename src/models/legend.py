"""Legend model for the active overlay."""

from dataclasses import dataclass
from typing import Mapping, Optional

from src.core.config import LEGEND_HIGH_LABEL, LEGEND_LOW_LABEL
from src.models.layer_state import LayerState, select_active_layer
from src.models.viewer_config import ViewerConfig


@dataclass(frozen=True)
class Legend:
    """Gradient legend for one layer."""

    layer_id: str
    title: str
    colors: tuple[str, ...]
    low_label: str = LEGEND_LOW_LABEL
    high_label: str = LEGEND_HIGH_LABEL

    @property
    def css_gradient(self) -> str:
        """CSS background for a vertical bar, low at the bottom."""
        return f"linear-gradient(to top, {', '.join(self.colors)})"

    def gradient_stops(self) -> list[tuple[float, str]]:
        """
        Evenly spaced (position, colour) stops from low (0.0) to high (1.0).

        Returns:
            List of stops suitable for a QLinearGradient
        """
        if len(self.colors) == 1:
            return [(0.0, self.colors[0]), (1.0, self.colors[0])]
        last = len(self.colors) - 1
        return [(index / last, color) for index, color in enumerate(self.colors)]


def build_legend(config: ViewerConfig, states: Mapping[str, LayerState]) -> Optional[Legend]:
    """
    Build the legend for the currently active layer.

    Args:
        config: Viewer configuration
        states: Current layer states

    Returns:
        Legend, or None when no layer is visible
    """
    active_id = select_active_layer(config.layer_ids, states)
    if active_id is None:
        return None

    layer = config.get_layer(active_id)
    return Legend(
        layer_id=layer.id,
        title=layer.name,
        colors=config.palette_for(layer.id),
    )
