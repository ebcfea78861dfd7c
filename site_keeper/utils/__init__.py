"""
Utility modules for the site keeper.

Contains logging, path handling, error types, and constants.
"""

from .log import setup_logger, get_logger
from .paths import asset_file_name, get_relative_path, resolve_reference, ensure_dir
from .errors import SiteKeeperError, InvalidURL, FetchFailure, WriteFailure
from .constants import (
    DEFAULT_IMAGE_HOST_PREFIX,
    DEFAULT_ASSETS_DIR,
    DEFAULT_USER_AGENT,
    DEFAULT_TIMEOUT,
    EXIT_OK,
    EXIT_FAILURE,
    EXIT_FINDINGS,
)

__all__ = [
    "setup_logger",
    "get_logger",
    "asset_file_name",
    "get_relative_path",
    "resolve_reference",
    "ensure_dir",
    "SiteKeeperError",
    "InvalidURL",
    "FetchFailure",
    "WriteFailure",
    "DEFAULT_IMAGE_HOST_PREFIX",
    "DEFAULT_ASSETS_DIR",
    "DEFAULT_USER_AGENT",
    "DEFAULT_TIMEOUT",
    "EXIT_OK",
    "EXIT_FAILURE",
    "EXIT_FINDINGS",
]
