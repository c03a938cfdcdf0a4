"""
Exception classes for Lyrics-Resolver.

Exception Hierarchy:
    LyricsResolverError (base)
        ConfigError - Configuration file issues
        SearchError - A single search query failed
        PageFetchError - The song page could not be retrieved

Only ConfigError ever reaches callers of the public API. SearchError and
PageFetchError are raised and handled inside the lyrics pipeline, where they
are turned into "no result" outcomes with their message kept for logging.
"""


class LyricsResolverError(Exception):
    """
    Base exception for all Lyrics-Resolver errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context (e.g., query, URL, status).

    Example:
        try:
            settings.validate(strict=True)
        except LyricsResolverError as e:
            logger.error(f"Operation failed: {e.message}")
            if e.details:
                logger.debug(f"Details: {e.details}")
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional context about the error.
                     Common keys include:
                     - 'query': Search query string involved in the error
                     - 'url': URL that caused the error
                     - 'status': HTTP status code returned by the remote service
                     - 'original_error': The underlying exception if wrapping another error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return the error message for display."""
        return self.message


class ConfigError(LyricsResolverError):
    """
    Raised when there's an issue with the configuration.

    Common causes:
        - An explicitly requested config file is missing or has invalid YAML
        - Genius access token not configured (strict validation only)
        - Invalid field values (e.g., negative timeout)

    Example:
        raise ConfigError(
            "Genius access token is not configured",
            details={'env_var': 'GENIUS_ACCESS_TOKEN'}
        )
    """
    pass


class SearchError(LyricsResolverError):
    """
    Raised when a single search query against the Genius API fails.

    Never fatal: the search aggregator catches it and treats the query
    as having returned zero hits.

    Attributes:
        is_auth_error: True if the service rejected the access token.
    """

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        is_auth_error: bool = False
    ) -> None:
        """
        Initialize search error with additional flags.

        Args:
            message: Error description.
            details: Optional additional context.
            is_auth_error: True for 401/403 responses.
        """
        super().__init__(message, details)
        self.is_auth_error = is_auth_error


class PageFetchError(LyricsResolverError):
    """
    Raised when the selected song page cannot be retrieved.

    Fatal for the current pipeline invocation: there is no other source
    for the page markup once a candidate has been chosen.
    """
    pass
