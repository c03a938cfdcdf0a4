"""
Utility functions and helpers for Lyrics-Resolver
Common functions for string matching, retries and text display
"""

import asyncio
import functools
import re
from typing import Any, Optional


_NON_ALNUM = re.compile(r'[^a-z0-9]')


def normalize_for_matching(value: Optional[Any]) -> str:
    """
    Fold a string for fuzzy comparison

    Lowercases the input and removes every character outside [a-z0-9].
    Accented and non-latin letters are removed as well.

    Args:
        value: String to fold (None and empty values are allowed)

    Returns:
        Folded string, empty string for empty input
    """
    if value is None:
        return ""
    return _NON_ALNUM.sub('', str(value).lower()).strip()


def retry_on_failure(max_attempts: int = 3, delay: float = 1.0, backoff: float = 2.0,
                     exceptions: tuple = (Exception,)):
    """
    Decorator for retrying coroutine functions on failure

    Args:
        max_attempts: Maximum number of attempts (values below 1 mean one attempt)
        delay: Initial delay between attempts in seconds
        backoff: Delay multiplier for exponential backoff
        exceptions: Exception types that trigger a retry
    """
    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            attempts = max(1, max_attempts)
            current_delay = delay

            for attempt in range(1, attempts + 1):
                try:
                    return await func(*args, **kwargs)
                except exceptions:
                    if attempt == attempts:
                        raise
                    await asyncio.sleep(current_delay)
                    current_delay *= backoff
        return wrapper
    return decorator


def truncate_string(text: str, max_length: int, suffix: str = "...") -> str:
    """
    Truncate string to maximum length

    Args:
        text: Text to truncate
        max_length: Maximum length including suffix
        suffix: Suffix to add if truncated

    Returns:
        Truncated string
    """
    if len(text) <= max_length:
        return text
    return text[:max_length - len(suffix)] + suffix
