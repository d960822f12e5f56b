"""Main application entry point."""

import argparse
import logging
import sys


def setup_logging(verbose: bool = False):
    """
    Set up logging configuration.

    Args:
        verbose: Enable verbose logging
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(),
        ],
    )


def launch_gui(config_file: str | None = None, asset_base: str | None = None):
    """
    Launch the map viewer.

    Args:
        config_file: Optional path to settings file
        asset_base: Optional directory or URL override for viewer assets
    """
    import signal

    from PyQt6.QtCore import QTimer
    from PyQt6.QtWidgets import QApplication

    from src.cli import load_app_config
    from src.gui.main_window import MainWindow
    from src.models.viewer_config import build_viewer_config

    try:
        app_config = load_app_config(config_file)
    except (FileNotFoundError, ValueError) as e:
        logging.error(f"Configuration error: {e}")
        sys.exit(1)

    viewer_config = build_viewer_config(title=app_config.title)

    app = QApplication(sys.argv)
    _set_app_metadata(app)

    # Set up Ctrl+C handling
    signal.signal(signal.SIGINT, signal.SIG_DFL)

    # Create a timer to allow Python to process signals
    # This is necessary for Ctrl+C to work with Qt
    timer = QTimer()
    timer.timeout.connect(lambda: None)  # No-op, just lets Python process signals
    timer.start(500)  # Check every 500ms

    window = MainWindow(viewer_config, asset_base or app_config.effective_asset_base)
    window.show()

    sys.exit(app.exec())


def port_number(value: str) -> int:
    """Argparse type for a TCP port (1-65535)."""
    port = int(value)
    if not 1 <= port <= 65535:
        raise argparse.ArgumentTypeError(f"port must be between 1 and 65535, got {port}")
    return port


def cmd_view(args):
    """Handle view subcommand - launch the map viewer."""
    setup_logging(args.verbose)
    launch_gui(config_file=args.config, asset_base=args.assets)


def cmd_stage(args):
    """Handle stage subcommand - copy images and reports into the public directory."""
    setup_logging(args.verbose)
    from src.cli import run_stage

    return run_stage(args.config, strict=args.strict)


def cmd_serve(args):
    """Handle serve subcommand - serve the public directory."""
    setup_logging(args.verbose)
    from src.cli import run_serve

    return run_serve(args.config, port=args.port, host=args.host, open_browser=args.open)


def cmd_list_layers(args):
    """Handle list-layers subcommand."""
    from src.core.config import PALETTES
    from src.models.viewer_config import build_viewer_config

    config = build_viewer_config()

    print("Available overlay layers:")
    print()

    for layer in config.layers:
        state = "ON" if layer.visible else "OFF"
        print(f"  {layer.id:18} - {layer.emoji} {layer.name}")
        print(f"           Image: {layer.image}")
        print(f"           Initial: {state}, Palette stops: {len(PALETTES.get(layer.id, ()))}")
        print()

    return 0


def _set_app_metadata(app):
    """
    Set organization and application metadata.

    Args:
        app: QApplication instance
    """
    app.setOrganizationName("drc-wildfire-map")
    app.setApplicationName("drc-wildfire-map")


def main():
    """Main application entry point."""
    parser = argparse.ArgumentParser(
        description="DRC Wildfire Map - view wildfire-risk overlays for the Democratic Republic of the Congo",
        epilog="Run without arguments to launch the viewer.",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # View subcommand
    view_parser = subparsers.add_parser("view", help="Open the map viewer")
    view_parser.add_argument("--config", help="YAML settings file")
    view_parser.add_argument("--assets", help="Directory or URL holding overlay images and GeoJSON")
    view_parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    view_parser.set_defaults(func=cmd_view)

    # Stage subcommand
    stage_parser = subparsers.add_parser("stage", help="Copy overlay images and reports into the public directory")
    stage_parser.add_argument("--config", help="YAML settings file")
    stage_parser.add_argument(
        "--strict", action="store_true", help="Exit with an error code if any file was skipped"
    )
    stage_parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    stage_parser.set_defaults(func=cmd_stage)

    # Serve subcommand
    serve_parser = subparsers.add_parser("serve", help="Serve the public directory over HTTP")
    serve_parser.add_argument("--config", help="YAML settings file")
    serve_parser.add_argument("--port", type=port_number, help="Port to listen on")
    serve_parser.add_argument("--host", help="Interface to bind")
    serve_parser.add_argument(
        "--open", action=argparse.BooleanOptionalAction, default=None, help="Open the browser after starting"
    )
    serve_parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    serve_parser.set_defaults(func=cmd_serve)

    # List layers subcommand
    list_parser = subparsers.add_parser("list-layers", help="List configured overlay layers")
    list_parser.set_defaults(func=cmd_list_layers)

    args = parser.parse_args()

    # If no subcommand provided, launch the viewer
    if args.command is None:
        setup_logging()
        launch_gui()
    else:
        return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
