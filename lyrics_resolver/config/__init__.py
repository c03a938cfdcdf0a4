"""
Configuration management package for Lyrics-Resolver

Settings are loaded once per process from YAML and environment variables
and accessed through get_settings(). reload_settings() rebuilds them, for
example after the CLI receives a --config option.

    from lyrics_resolver.config import get_settings

    settings = get_settings()
    floor = settings.matching.confidence_floor
"""

from .settings import (
    get_settings,
    reload_settings,
    Settings,
    GeniusConfig,
    MatchingConfig,
    NetworkConfig,
    LoggingConfig,
)

__all__ = [
    'get_settings',
    'reload_settings',
    'Settings',
    'GeniusConfig',
    'MatchingConfig',
    'NetworkConfig',
    'LoggingConfig',
]
