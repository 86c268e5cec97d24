"""Navigation service configuration and logging setup.

Configuration is read from YAML and merged over built-in defaults, so a
config file only needs the keys it changes.

Typical usage:
    from wayfinder.service.config import load_config, setup_logging

    config = load_config(Path("config/navigation_service.yaml"))
    setup_logging(config)
"""

import copy
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "server": {
        "host": "127.0.0.1",
        "port": 51180,
    },
    "layout": {
        "path": "data/airport_layout.json",
    },
    "pathfinding": {
        "heuristic": "auto",
        "max_expansions": None,
    },
    "logging": {
        "level": "INFO",
        "file": "wayfinder.log",
        "max_size_mb": 10,
        "backup_count": 3,
    },
}

DEFAULT_CONFIG_PATHS = [
    Path("config/navigation_service.yaml"),
    Path(__file__).parent.parent.parent.parent / "config" / "navigation_service.yaml",
]

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _merge(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file.

    Args:
        config_path: Explicit config file. When omitted, the default
            locations are searched.

    Returns:
        Configuration dictionary with defaults filled in.

    Raises:
        FileNotFoundError: If an explicit config file does not exist.
    """
    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        paths = [config_path]
    else:
        paths = DEFAULT_CONFIG_PATHS

    for path in paths:
        if path.exists():
            with open(path, encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}
            logger.info("Loaded config from: %s", path)
            return _merge(DEFAULT_CONFIG, config)

    logger.warning("No config file found, using defaults")
    return copy.deepcopy(DEFAULT_CONFIG)


def setup_logging(config: dict[str, Any], log_to_file: bool = True) -> None:
    """Configure the root logger from config.

    Args:
        config: Configuration dictionary.
        log_to_file: Also write to the rotating log file.
    """
    log_config = config.get("logging", {})
    log_level = log_config.get("level", "INFO")
    formatter = logging.Formatter(LOG_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, str(log_level).upper(), logging.INFO))

    if log_to_file and log_config.get("file"):
        file_handler = RotatingFileHandler(
            log_config["file"],
            maxBytes=log_config.get("max_size_mb", 10) * 1024 * 1024,
            backupCount=log_config.get("backup_count", 3),
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)
