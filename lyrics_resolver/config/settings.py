"""
Configuration management for Lyrics-Resolver

This module handles loading, validation, and management of application settings
from YAML files and environment variables.

The configuration is organized into logical sections using dataclasses:
- Genius API settings (access token, endpoint)
- Matching settings (score weights, confidence floor, language marker tables)
- Network settings (timeouts, retries, rate limiting, user agent)
- Logging settings (level, file output, console formatting)

The access token should be supplied through the GENIUS_ACCESS_TOKEN environment
variable (or a .env file), while non-sensitive settings can be stored in YAML.
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional, List
from dataclasses import dataclass, field
from dotenv import load_dotenv

from ..utils.exceptions import ConfigError

# Load environment variables from .env file if present
load_dotenv()


@dataclass
class GeniusConfig:
    """
    Genius API configuration

    The access token is sent as a bearer token on every search request.
    Song pages themselves are public and fetched without authentication.
    """
    access_token: str = ""
    api_base: str = "https://api.genius.com"
    search_path: str = "/search"

    @property
    def search_url(self) -> str:
        """Full URL of the search endpoint"""
        return f"{self.api_base.rstrip('/')}{self.search_path}"


@dataclass
class MatchingConfig:
    """
    Candidate scoring configuration

    Weights for the additive match heuristic and the tables of markers used
    to prefer English pages. The marker lists are matched as plain substrings
    of the lowercased full title of each search hit.
    """
    confidence_floor: int = 50
    exact_match: int = 100
    partial_match: int = 50
    album_match: int = 30
    year_match: int = 30
    language_bonus: int = 20
    language_penalty: int = 60
    default_language: str = "en"
    bonus_markers: List[str] = field(default_factory=lambda: ["english", "translation"])
    penalty_markers: List[str] = field(
        default_factory=lambda: ["traduction", "traduccion", "versão", "deutsche"]
    )


@dataclass
class NetworkConfig:
    """
    Network and HTTP configuration settings

    request_timeout bounds every single request (search, translation probe,
    page fetch). rate_limit is the number of search requests allowed per second.
    max_retries applies to the page fetch only; the default of 0 means one attempt.
    """
    user_agent: str = "Lyrics-Resolver/1.0"
    request_timeout: int = 30
    max_retries: int = 0
    retry_delay: float = 1.0
    rate_limit: int = 4


@dataclass
class LoggingConfig:
    """
    Logging configuration and output settings
    """
    level: str = "INFO"
    file: str = ""
    max_size: str = "10MB"
    backup_count: int = 3
    console_output: bool = True
    colored_output: bool = True


class Settings:
    """
    Main settings class that manages all configuration

    Loads settings from a YAML file (first one found) and then applies
    environment variable overrides. Sections are exposed as attributes:
    genius, matching, network, logging.
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize settings from config file and environment variables

        Args:
            config_path: Path to custom config file, if None uses default locations

        Raises:
            ConfigError: If config_path is given but cannot be read or parsed
        """
        self.config_path = config_path
        self.config_dir = Path.home() / ".lyrics-resolver"

        # Initialize all configuration objects with default values
        self.genius = GeniusConfig()
        self.matching = MatchingConfig()
        self.network = NetworkConfig()
        self.logging = LoggingConfig()

        # Load configuration from various sources in order of precedence
        self._load_config()
        self._load_environment_variables()

    def _load_config(self) -> None:
        """
        Load configuration from YAML file

        An explicit config path must exist and parse. Default locations are
        searched in order and silently skipped when absent or unreadable.
        """
        if self.config_path:
            config_data = self._read_yaml(Path(self.config_path))
            self._apply_config(config_data)
            return

        config_paths = [
            self.config_dir / "config.yaml",
            Path("config/config.yaml"),
            Path("config.yaml")
        ]

        config_data = {}
        for path in config_paths:
            if path.exists():
                try:
                    config_data = self._read_yaml(path)
                    break
                except ConfigError as e:
                    print(f"Warning: {e.message}")

        self._apply_config(config_data)

    @staticmethod
    def _read_yaml(path: Path) -> Dict[str, Any]:
        """Read a YAML mapping from path, raising ConfigError on any problem"""
        if not path.exists():
            raise ConfigError(
                f"Configuration file not found: {path}",
                details={"file_path": str(path)}
            )

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(
                f"Failed to load config from {path}: {e}",
                details={"file_path": str(path), "original_error": str(e)}
            ) from e

        if not isinstance(data, dict):
            raise ConfigError(
                "Configuration file must contain a YAML dictionary",
                details={"file_path": str(path)}
            )
        return data

    def _sections(self) -> Dict[str, Any]:
        return {
            'genius': self.genius,
            'matching': self.matching,
            'network': self.network,
            'logging': self.logging,
        }

    def _apply_config(self, config_data: Dict[str, Any]) -> None:
        """
        Apply configuration data to dataclass instances

        Only keys that exist on the target dataclass are applied; unknown
        sections and keys are ignored.

        Args:
            config_data: Dictionary containing configuration sections
        """
        config_mapping = self._sections()

        for section_name, section_data in config_data.items():
            if section_name in config_mapping and isinstance(section_data, dict):
                config_obj = config_mapping[section_name]
                for key, value in section_data.items():
                    if hasattr(config_obj, key):
                        setattr(config_obj, key, value)

    def _load_environment_variables(self) -> None:
        """
        Load sensitive configuration from environment variables

        Environment variables take precedence over file-based configuration.
        """
        env_mappings = {
            'GENIUS_ACCESS_TOKEN': lambda v: setattr(self.genius, 'access_token', v),
            'LYRICS_RESOLVER_LOG_LEVEL': lambda v: setattr(self.logging, 'level', v),
            'LYRICS_RESOLVER_TIMEOUT': lambda v: setattr(self.network, 'request_timeout', int(v)),
        }

        for env_var, setter in env_mappings.items():
            value = os.getenv(env_var)
            if value:
                try:
                    setter(value)
                except ValueError:
                    print(f"Warning: Ignoring invalid value for {env_var}: {value!r}")

    def get_config_directory(self) -> Path:
        """
        Get the expanded config directory path

        Returns:
            Path object for the configuration directory
        """
        return self.config_dir.expanduser()

    def save_config(self, path: Optional[str] = None) -> Path:
        """
        Save current configuration to file

        The access token is never written to disk.

        Args:
            path: Custom path to save config, defaults to user config directory

        Returns:
            Path the configuration was written to

        Raises:
            ConfigError: If the configuration cannot be saved
        """
        target = Path(path) if path else self.get_config_directory() / "config.yaml"

        config_data = self.to_dict()

        # Remove sensitive data from saved config
        config_data['genius']['access_token'] = ""

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with open(target, 'w', encoding='utf-8') as f:
                yaml.dump(config_data, f, default_flow_style=False, indent=2, allow_unicode=True)
        except OSError as e:
            raise ConfigError(
                f"Failed to save config to {target}: {e}",
                details={"file_path": str(target)}
            ) from e
        return target

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        """Serialize all sections to plain dictionaries"""
        return {
            name: dict(section.__dict__)
            for name, section in self._sections().items()
        }

    def validate(self, strict: bool = False) -> bool:
        """
        Validate current configuration

        Args:
            strict: Raise ConfigError instead of returning False

        Returns:
            True if configuration is valid, False otherwise
        """
        errors = []

        if not self.genius.access_token:
            errors.append("Genius access token is required (set GENIUS_ACCESS_TOKEN)")

        if self.network.request_timeout <= 0:
            errors.append(f"Invalid request timeout: {self.network.request_timeout}")

        if self.network.max_retries < 0:
            errors.append(f"Invalid max_retries: {self.network.max_retries}")

        if self.network.rate_limit <= 0:
            errors.append(f"Invalid rate limit: {self.network.rate_limit}")

        if self.matching.confidence_floor < 0:
            errors.append(f"Invalid confidence floor: {self.matching.confidence_floor}")

        if errors:
            if strict:
                raise ConfigError(
                    "Configuration validation failed: " + "; ".join(errors),
                    details={"errors": errors}
                )
            print("Configuration validation errors:")
            for error in errors:
                print(f"  - {error}")
            return False

        return True

    def __str__(self) -> str:
        sections = [
            f"Token: {'set' if self.genius.access_token else 'missing'}",
            f"Floor: {self.matching.confidence_floor}",
            f"Timeout: {self.network.request_timeout}s",
            f"Log level: {self.logging.level}",
        ]
        return f"Settings({', '.join(sections)})"


# Global settings instance for singleton pattern
settings = Settings()


def get_settings() -> Settings:
    """
    Get the global settings instance

    Returns:
        The global Settings instance
    """
    return settings


def reload_settings(config_path: Optional[str] = None) -> Settings:
    """
    Reload settings from configuration files

    Creates a new settings instance with updated configuration from files
    and environment variables.

    Args:
        config_path: Optional path to specific config file

    Returns:
        New Settings instance with reloaded configuration
    """
    global settings
    settings = Settings(config_path)
    return settings
