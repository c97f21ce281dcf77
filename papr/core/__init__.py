"""
Configuration, logging and the exception types shared by every other
package. Imports nothing else from papr.
"""

from .config_loader import get_config, reload_config, Config, SearchConfig, LibraryConfig
from .logger import get_logger, setup_logging
from .exceptions import (
    PaprError,
    ConfigurationError,
    ExtractionError,
    StoreError,
    SearchError
)

__all__ = [
    "get_config",
    "reload_config",
    "Config",
    "SearchConfig",
    "LibraryConfig",
    "get_logger",
    "setup_logging",
    "PaprError",
    "ConfigurationError",
    "ExtractionError",
    "StoreError",
    "SearchError"
]
