"""Map widget hosting the Leaflet overlay page."""

import json
import logging
import tempfile
from typing import Any, Dict, Mapping, Optional

from PyQt6.QtCore import QUrl
from PyQt6.QtWebEngineCore import QWebEngineSettings
from PyQt6.QtWebEngineWidgets import QWebEngineView
from PyQt6.QtWidgets import QVBoxLayout, QWidget

from src.core.map_page import render_map_page
from src.models.layer_state import LayerState
from src.models.viewer_config import ViewerConfig

logger = logging.getLogger(__name__)


class MapWidget(QWidget):
    """Widget displaying the overlay map."""

    def __init__(self, config: ViewerConfig, asset_base: str, parent=None):
        """
        Initialize map widget.

        Args:
            config: Viewer configuration
            asset_base: Directory or URL overlay images are resolved against
            parent: Parent widget
        """
        super().__init__(parent)
        self.config = config
        self.asset_base = asset_base
        self.is_page_ready = False
        self._page_path: Optional[str] = None

        # GeoJSON that arrived before the page finished loading
        self._pending_boundary: Optional[Dict[str, Any]] = None
        self._pending_cities: Optional[Dict[str, Any]] = None

        self.init_ui()

    def init_ui(self):
        """Initialize the UI."""
        layout = QVBoxLayout()
        layout.setContentsMargins(0, 0, 0, 0)

        self.web_view = QWebEngineView()

        settings = self.web_view.page().settings()
        settings.setAttribute(QWebEngineSettings.WebAttribute.JavascriptEnabled, True)
        settings.setAttribute(QWebEngineSettings.WebAttribute.LocalContentCanAccessFileUrls, True)
        # Allow local HTML to fetch remote tiles and overlays
        settings.setAttribute(QWebEngineSettings.WebAttribute.LocalContentCanAccessRemoteUrls, True)

        self.web_view.loadFinished.connect(self._on_load_finished)

        layout.addWidget(self.web_view)
        self.setLayout(layout)

    def create_map(self, states: Mapping[str, LayerState]):
        """
        Render the map page and load it in the web view.

        Args:
            states: Current layer states (initial overlay opacities)
        """
        self.is_page_ready = False
        html = render_map_page(self.config, states, self.asset_base)

        # Save to temp file so file:// overlays are reachable from the page
        with tempfile.NamedTemporaryFile(mode='w', suffix='.html', delete=False, encoding='utf-8') as f:
            f.write(html)
            self._page_path = f.name

        self.web_view.setUrl(QUrl.fromLocalFile(self._page_path))

    def set_layer_opacity(self, layer_id: str, opacity: float):
        """
        Apply an overlay's opacity on the map.

        Args:
            layer_id: Overlay id
            opacity: New opacity (0.0-1.0)
        """
        self._run_js(f"setLayerOpacity({json.dumps(layer_id)}, {opacity});")

    def set_boundary(self, geojson: Dict[str, Any]):
        """
        Draw the administrative boundary outline.

        Args:
            geojson: Boundary GeoJSON
        """
        if not self.is_page_ready:
            self._pending_boundary = geojson
            return
        self._run_js(f"setBoundary({json.dumps(geojson)});")

    def set_cities(self, geojson: Dict[str, Any]):
        """
        Draw city markers.

        Args:
            geojson: Cities GeoJSON (points)
        """
        if not self.is_page_ready:
            self._pending_cities = geojson
            return
        self._run_js(f"setCities({json.dumps(geojson)});")

    def _run_js(self, code: str):
        self.web_view.page().runJavaScript(f"if (typeof map !== 'undefined') {{ {code} }}")

    def _on_load_finished(self, ok: bool):
        """Handle page load completion and flush pending GeoJSON."""
        if not ok:
            logger.error(f"Failed to load map page: {self._page_path}")
            return

        self.is_page_ready = True
        if self._pending_boundary is not None:
            self.set_boundary(self._pending_boundary)
            self._pending_boundary = None
        if self._pending_cities is not None:
            self.set_cities(self._pending_cities)
            self._pending_cities = None
