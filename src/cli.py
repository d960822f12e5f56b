"""CLI mode: settings loading, asset staging and the dev server."""

import logging
import webbrowser
from pathlib import Path

import yaml

from src.core.asset_stager import build_default_manifest, stage_assets
from src.core.dev_server import bind_server, server_url
from src.models.app_config import AppConfig

logger = logging.getLogger(__name__)


def load_config(config_path: str) -> tuple[dict, Path]:
    """
    Load YAML configuration file.

    Args:
        config_path: Path to YAML config file

    Returns:
        Tuple of (configuration dictionary, config directory path)

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is invalid
    """
    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_file, encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    # Return config and its directory for relative path resolution
    config_dir = config_file.parent.resolve()

    return config, config_dir


def validate_config(config: dict) -> AppConfig:
    """
    Validate configuration using Pydantic schema validation.

    Args:
        config: Configuration dictionary

    Returns:
        Validated AppConfig

    Raises:
        ValueError: If configuration is invalid
    """
    from pydantic import ValidationError

    if not isinstance(config, dict):
        raise ValueError("Configuration validation failed: top level must be a mapping")

    try:
        return AppConfig.model_validate(config)
    except ValidationError as e:
        # Convert Pydantic errors to ValueError for consistency
        raise ValueError(f"Configuration validation failed:\n{e}") from e


def load_app_config(config_path: str | None = None) -> AppConfig:
    """
    Load settings from a YAML file, or defaults relative to the working directory.

    Args:
        config_path: Optional path to YAML settings file

    Returns:
        AppConfig with absolute paths
    """
    if config_path is None:
        return AppConfig().resolve_paths(Path.cwd())

    logger.info(f"Loading configuration from: {config_path}")
    config, config_dir = load_config(config_path)
    return validate_config(config).resolve_paths(config_dir)


def run_stage(config_path: str | None = None, strict: bool = False) -> int:
    """
    Copy overlay images and the methodology report into the public directory.

    Args:
        config_path: Optional path to YAML settings file
        strict: Return a failure exit code when any file was skipped

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        app_config = load_app_config(config_path)
        logger.info(f"Staging assets from {app_config.source_root} into {app_config.public_dir}")

        manifest = build_default_manifest(app_config.source_root, app_config.public_dir)
        result = stage_assets(manifest)

        if strict and result.has_skips:
            logger.error(f"{result.skipped} file(s) skipped in strict mode")
            return 1
        return 0

    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        return 1
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        return 1


def run_serve(
    config_path: str | None = None,
    port: int | None = None,
    host: str | None = None,
    open_browser: bool | None = None,
) -> int:
    """
    Serve the public directory over HTTP until interrupted.

    Args:
        config_path: Optional path to YAML settings file
        port: Port override
        host: Host override
        open_browser: Override for opening the browser

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        app_config = load_app_config(config_path)
        server_config = app_config.server

        server = bind_server(
            app_config.public_dir,
            host if host is not None else server_config.host,
            port if port is not None else server_config.port,
            strict_port=server_config.strict_port,
        )
    except FileNotFoundError as e:
        logger.error(f"File not found: {e} (run 'stage' first)")
        return 1
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    except (OSError, OverflowError) as e:
        logger.error(f"Could not start server: {e}")
        return 1

    url = server_url(server)
    logger.info(f"Serving {app_config.public_dir} at {url}")

    should_open = open_browser if open_browser is not None else server_config.open
    if should_open:
        webbrowser.open(url)

    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Server stopped")
    finally:
        server.server_close()
    return 0
