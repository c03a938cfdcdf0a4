"""
Utility modules for Lyrics-Resolver
"""

from .exceptions import (
    LyricsResolverError,
    ConfigError,
    SearchError,
    PageFetchError,
)
from .logger import setup_logging, get_logger, configure_from_settings, parse_size
from .helpers import normalize_for_matching, retry_on_failure, truncate_string

__all__ = [
    # Exception exports
    'LyricsResolverError',
    'ConfigError',
    'SearchError',
    'PageFetchError',

    # Logger exports
    'setup_logging',
    'get_logger',
    'configure_from_settings',
    'parse_size',

    # Helper exports
    'normalize_for_matching',
    'retry_on_failure',
    'truncate_string',
]
