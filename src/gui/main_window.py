"""Main application window."""

import logging
from typing import Any, Optional

from PyQt6 import QtGui
from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QLabel, QMainWindow, QWidget

from src.core.config import WINDOW_SIZE
from src.core.map_page import resolve_asset_url
from src.core.resource_loader import build_resource_slots
from src.gui.layer_panel import LayerControlPanel
from src.gui.legend_widget import LegendWidget
from src.gui.map_widget import MapWidget
from src.gui.resource_worker import ResourceLoadWorker
from src.models.layer_state import LayerStates
from src.models.legend import build_legend
from src.models.viewer_config import ViewerConfig

logger = logging.getLogger(__name__)

PANEL_MARGIN = 10


class MapContainer(QWidget):
    """Map filling the window with floating panels on top."""

    def __init__(self, map_widget: MapWidget, parent=None):
        super().__init__(parent)
        self.map_widget = map_widget
        self.map_widget.setParent(self)
        self.control_panel: Optional[QWidget] = None
        self.legend: Optional[QWidget] = None
        self.title_label: Optional[QWidget] = None

    def set_overlays(self, control_panel: QWidget, legend: QWidget, title_label: QWidget):
        self.control_panel = control_panel
        self.legend = legend
        self.title_label = title_label
        for widget in (control_panel, legend, title_label):
            widget.setParent(self)
            widget.raise_()
        self.reposition()

    def reposition(self):
        """Place the floating panels over the map."""
        width = self.width()
        height = self.height()
        self.map_widget.setGeometry(0, 0, width, height)

        if self.control_panel is not None:
            self.control_panel.adjustSize()
            self.control_panel.move(width - self.control_panel.width() - PANEL_MARGIN, PANEL_MARGIN)
        if self.legend is not None:
            self.legend.adjustSize()
            self.legend.move(
                width - self.legend.width() - PANEL_MARGIN,
                height - self.legend.height() - 3 * PANEL_MARGIN,
            )
        if self.title_label is not None:
            self.title_label.adjustSize()
            self.title_label.move((width - self.title_label.width()) // 2, PANEL_MARGIN)

    def resizeEvent(self, a0: Optional[QtGui.QResizeEvent]) -> None:
        super().resizeEvent(a0)
        self.reposition()


class MainWindow(QMainWindow):
    """Main application window."""

    def __init__(self, config: ViewerConfig, asset_base: str):
        """
        Initialize main window.

        Args:
            config: Viewer configuration
            asset_base: Directory or URL holding overlay images and GeoJSON
        """
        super().__init__()
        self.config = config
        self.asset_base = asset_base
        self.layer_states = LayerStates(config.layers)
        self.resource_worker: Optional[ResourceLoadWorker] = None

        self.init_ui()
        self.start_resource_loading()

    def init_ui(self):
        """Initialize the UI."""
        self.setWindowTitle(self.config.title)
        self.resize(*WINDOW_SIZE)

        self.map_widget = MapWidget(self.config, self.asset_base)
        self.control_panel = LayerControlPanel(self.config)
        self.legend_widget = LegendWidget()

        self.title_label = QLabel(self.config.title)
        self.title_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.title_label.setStyleSheet(
            "background-color: rgba(255, 255, 255, 235); border-radius: 6px; "
            "padding: 6px 12px; font-weight: bold; font-size: 14px;"
        )

        self.container = MapContainer(self.map_widget)
        self.container.set_overlays(self.control_panel, self.legend_widget, self.title_label)
        self.setCentralWidget(self.container)

        # Connect signals
        self.control_panel.toggle_requested.connect(self.on_toggle_requested)

        self.control_panel.update_states(self.layer_states)
        self._update_legend()
        self.map_widget.create_map(self.layer_states)

    def on_toggle_requested(self, layer_id: str):
        """
        Handle a layer button click.

        Args:
            layer_id: Layer to toggle
        """
        state = self.layer_states.toggle(layer_id)
        logger.debug(f"Layer {layer_id} -> visible={state.visible}, opacity={state.opacity}")

        self.map_widget.set_layer_opacity(layer_id, state.opacity)
        self.control_panel.update_layer(layer_id, state)
        self._update_legend()

    def _update_legend(self):
        self.legend_widget.set_legend(build_legend(self.config, self.layer_states))
        self.container.reposition()

    def start_resource_loading(self):
        """Fetch the boundary and cities GeoJSON in the background."""
        slots = build_resource_slots(
            resolve_asset_url(self.asset_base, self.config.boundary_path),
            resolve_asset_url(self.asset_base, self.config.cities_path),
        )
        self.resource_worker = ResourceLoadWorker(slots, self)
        self.resource_worker.resource_loaded.connect(self.on_resource_loaded)
        self.resource_worker.resource_failed.connect(self.on_resource_failed)
        self.resource_worker.start()

    def on_resource_loaded(self, name: str, data: Any):
        """
        Apply a loaded GeoJSON resource to the map.

        Args:
            name: Slot name ('boundary' or 'cities')
            data: GeoJSON dict
        """
        if name == "boundary":
            self.map_widget.set_boundary(data)
        elif name == "cities":
            self.map_widget.set_cities(data)

    def on_resource_failed(self, name: str, error_message: str):
        """Failures only reach the log; the map stays usable without the resource."""
        logger.warning(f"Continuing without {name}: {error_message}")

    def closeEvent(self, a0: Optional[QtGui.QCloseEvent]) -> None:
        """
        Handle window close event.

        Args:
            a0: Close event
        """
        if self.resource_worker is not None and self.resource_worker.isRunning():
            self.resource_worker.cancel()
            self.resource_worker.wait(2000)
        super().closeEvent(a0)
