"""Floating control panel with one toggle button per overlay."""

from typing import Dict, Mapping

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QFrame, QLabel, QPushButton, QVBoxLayout

from src.models.layer_state import LayerState
from src.models.viewer_config import ViewerConfig

PANEL_STYLE = """
QFrame#layerControlPanel {
    background-color: rgba(255, 255, 255, 235);
    border-radius: 6px;
}
QPushButton {
    text-align: left;
    padding: 4px 8px;
}
QPushButton[active="true"] {
    background-color: #d73027;
    color: white;
    font-weight: bold;
}
"""


class LayerControlPanel(QFrame):
    """Lists every configured layer as an ON/OFF button."""

    toggle_requested = pyqtSignal(str)  # layer id

    def __init__(self, config: ViewerConfig, parent=None):
        """
        Initialize control panel.

        Args:
            config: Viewer configuration
            parent: Parent widget
        """
        super().__init__(parent)
        self.config = config
        self.buttons: Dict[str, QPushButton] = {}
        self.init_ui()

    def init_ui(self):
        """Initialize the UI."""
        self.setObjectName("layerControlPanel")
        self.setStyleSheet(PANEL_STYLE)

        layout = QVBoxLayout()
        layout.setContentsMargins(10, 10, 10, 10)

        header = QLabel("Map Layers")
        header.setStyleSheet("font-weight: bold;")
        layout.addWidget(header)

        for layer in self.config.layers:
            button = QPushButton()
            button.setToolTip(f"{layer.emoji} {layer.name}")
            # Bind layer id at definition time
            button.clicked.connect(lambda checked, layer_id=layer.id: self.toggle_requested.emit(layer_id))
            layout.addWidget(button)
            self.buttons[layer.id] = button

        self.setLayout(layout)
        self.adjustSize()

    def update_states(self, states: Mapping[str, LayerState]):
        """
        Refresh button labels and styling.

        Args:
            states: Current layer states
        """
        for layer in self.config.layers:
            self.update_layer(layer.id, states[layer.id])

    def update_layer(self, layer_id: str, state: LayerState):
        """Refresh a single button."""
        button = self.buttons[layer_id]
        button.setText(self.config.get_layer(layer_id).button_text(state.visible))
        button.setProperty("active", "true" if state.visible else "false")
        # Re-polish so the dynamic property selector applies
        button.style().unpolish(button)
        button.style().polish(button)
