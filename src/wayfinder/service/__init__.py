"""Navigation service answering route and location queries over WebSocket."""

from wayfinder.service.config import DEFAULT_CONFIG, load_config, setup_logging
from wayfinder.service.service import NavigationService

__all__ = [
    "DEFAULT_CONFIG",
    "NavigationService",
    "load_config",
    "setup_logging",
]
