"""Pytest configuration and fixtures."""

import http.server
import json
import socketserver
import threading

import pytest

from src.core.config import LAYERS, METHODOLOGY_REPORT
from src.models.layer_state import LayerStates
from src.models.viewer_config import build_viewer_config


@pytest.fixture
def viewer_config():
    """Viewer configuration built from the static manifest."""
    return build_viewer_config()


@pytest.fixture
def layer_states(viewer_config):
    """Fresh layer states at their manifest defaults."""
    return LayerStates(viewer_config.layers)


@pytest.fixture
def source_tree(tmp_path):
    """
    Fixture for a source tree laid out like the raster export.

    Creates every file of the default manifest except the two named in
    ``missing`` and returns (source_root, public_dir, missing).
    """
    source_root = tmp_path / "outputs"
    public_dir = tmp_path / "site" / "public"
    (source_root / "component_maps").mkdir(parents=True)

    missing = {"population_urban_overlay.png", METHODOLOGY_REPORT}

    for layer in LAYERS:
        filename = layer.image.rsplit("/", 1)[-1]
        if filename in missing:
            continue
        if filename == "wildfire_intensity_overlay.png":
            path = source_root / filename
        else:
            path = source_root / "component_maps" / filename
        path.write_bytes(b"\x89PNG\r\n\x1a\n" + filename.encode("utf-8"))

    return source_root, public_dir, missing


@pytest.fixture
def geojson_server(tmp_path):
    """
    Fixture for a local HTTP server serving GeoJSON documents.

    Automatically starts an HTTP server serving files from a temporary directory
    and cleans up when the test completes.

    Usage:
        def test_boundary(geojson_server):
            geojson_server.write("drc_admin_wei.geojson", {...})
            url = geojson_server.url_for("drc_admin_wei.geojson")

    Attributes:
        port (int): The port the server is listening on
        fixtures_dir (Path): Directory served by the server
        base_url (str): Base URL ending in a slash
    """

    class GeoJSONServer:
        def __init__(self, port, fixtures_dir):
            self.port = port
            self.fixtures_dir = fixtures_dir

        @property
        def base_url(self):
            return f"http://127.0.0.1:{self.port}/"

        def url_for(self, name):
            return f"{self.base_url}{name}"

        def write(self, name, data):
            path = self.fixtures_dir / name
            path.write_text(json.dumps(data), encoding="utf-8")
            return path

    fixtures_dir = tmp_path / "geojson_fixtures"
    fixtures_dir.mkdir()

    class GeoJSONRequestHandler(http.server.SimpleHTTPRequestHandler):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, directory=str(fixtures_dir), **kwargs)

        def log_message(self, format, *args):
            pass  # Suppress logging during tests

    # Start server on auto-assigned port
    server = socketserver.TCPServer(("127.0.0.1", 0), GeoJSONRequestHandler)
    port = server.server_address[1]

    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()

    yield GeoJSONServer(port, fixtures_dir)

    # Cleanup: shutdown server
    server.shutdown()
    server.server_close()
    thread.join(timeout=1.0)
