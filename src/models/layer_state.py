"""Per-session visibility/opacity state of the image overlays."""

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Mapping, Optional

from src.core.config import HIDDEN_OPACITY, VISIBLE_OPACITY, LayerConfig


@dataclass(frozen=True)
class LayerState:
    """Visibility and opacity of a single overlay."""

    visible: bool
    opacity: float

    def __post_init__(self):
        """Validate that opacity follows visibility."""
        expected = VISIBLE_OPACITY if self.visible else HIDDEN_OPACITY
        if self.opacity != expected:
            raise ValueError(
                f"Opacity must be {expected} when visible={self.visible}, got {self.opacity}"
            )

    @classmethod
    def shown(cls) -> 'LayerState':
        return cls(visible=True, opacity=VISIBLE_OPACITY)

    @classmethod
    def hidden(cls) -> 'LayerState':
        return cls(visible=False, opacity=HIDDEN_OPACITY)

    def toggled(self) -> 'LayerState':
        """Return the opposite state."""
        return LayerState.hidden() if self.visible else LayerState.shown()


class LayerStates(Mapping[str, LayerState]):
    """
    Mutable mapping from layer id to LayerState.

    Only toggle() changes an entry, which keeps every layer's opacity in step
    with its visibility.
    """

    def __init__(self, layers: Iterable[LayerConfig]):
        """
        Initialize from manifest defaults.

        Args:
            layers: Layer configurations in manifest order

        Raises:
            ValueError: If a manifest entry has an opacity that does not match its visibility
        """
        self._states: Dict[str, LayerState] = {}
        for layer in layers:
            try:
                self._states[layer.id] = LayerState(visible=layer.visible, opacity=layer.opacity)
            except ValueError as e:
                raise ValueError(f"Invalid initial state for layer '{layer.id}': {e}") from e

    def __getitem__(self, layer_id: str) -> LayerState:
        return self._states[layer_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._states)

    def __len__(self) -> int:
        return len(self._states)

    def toggle(self, layer_id: str) -> LayerState:
        """
        Flip a layer between visible and hidden.

        Args:
            layer_id: Layer to toggle

        Returns:
            The layer's new state

        Raises:
            KeyError: If the layer id is unknown
        """
        new_state = self._states[layer_id].toggled()
        self._states[layer_id] = new_state
        return new_state

    def visible_ids(self) -> list[str]:
        """Ids of visible layers, in manifest order."""
        return [layer_id for layer_id, state in self._states.items() if state.visible]

    def snapshot(self) -> Dict[str, LayerState]:
        """Copy of the current states."""
        return dict(self._states)


def select_active_layer(manifest_order: Iterable[str], states: Mapping[str, LayerState]) -> Optional[str]:
    """
    Pick the layer the legend describes: the last visible one in manifest order.

    Args:
        manifest_order: Layer ids in manifest order
        states: Current state per layer id

    Returns:
        Layer id, or None if no layer is visible
    """
    active = None
    for layer_id in manifest_order:
        state = states.get(layer_id)
        if state is not None and state.visible:
            active = layer_id
    return active
