"""
Song page retrieval

Two steps run one after the other once a candidate has been selected:

- Translation resolution: for non-English requests the page's
  /translations/<language> variant is probed and used when it exists.
  A missing translation is normal and falls back to the original page.
- Page fetch: the resolved URL is downloaded. Unlike search failures, a
  failure here ends the pipeline, since there is no other source for the
  page markup.
"""

import asyncio
from typing import Optional

import aiohttp

from ..config.settings import Settings, get_settings
from ..utils.exceptions import PageFetchError
from ..utils.helpers import retry_on_failure
from ..utils.logger import get_logger
from .models import StageResult

logger = get_logger(__name__)


def translation_url(url: str, language: str) -> str:
    """Build the translated variant URL of a song page"""
    return f"{url}/translations/{language}"


def _request_options(settings: Settings) -> dict:
    return {
        'headers': {'User-Agent': settings.network.user_agent},
        'timeout': aiohttp.ClientTimeout(total=settings.network.request_timeout),
    }


async def resolve_translation_url(
    session: aiohttp.ClientSession,
    url: str,
    language: Optional[str],
    settings: Optional[Settings] = None
) -> str:
    """
    Pick the translated page for non-English requests when it exists

    Args:
        session: Open aiohttp session
        url: Original song page URL
        language: Requested language code
        settings: Application settings

    Returns:
        The translated page URL on a successful probe, otherwise url unchanged
    """
    settings = settings or get_settings()

    if not language or language == settings.matching.default_language:
        return url

    candidate = translation_url(url, language)
    try:
        async with session.get(candidate, **_request_options(settings)) as resp:
            if 200 <= resp.status < 300:
                logger.debug(f"Using {language} translation: {candidate}")
                return candidate
            logger.debug(f"No {language} translation (HTTP {resp.status}), using original")
    except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
        logger.debug(f"No {language} translation found ({e!r}), using original")

    return url


async def _download(session: aiohttp.ClientSession, url: str, settings: Settings) -> str:
    async with session.get(url, **_request_options(settings)) as resp:
        if not 200 <= resp.status < 300:
            raise PageFetchError(
                f"HTTP {resp.status} fetching {url}",
                details={'url': url, 'status': resp.status}
            )
        # Invalid bytes are dropped instead of failing the whole page
        return await resp.text(errors='ignore')


async def fetch_page(
    session: aiohttp.ClientSession,
    url: str,
    settings: Optional[Settings] = None
) -> StageResult[str]:
    """
    Download the markup of a song page

    Args:
        session: Open aiohttp session
        url: Page URL
        settings: Application settings (timeout, retries, user agent)

    Returns:
        StageResult with the HTML, or a "no result" carrying the failure reason
    """
    settings = settings or get_settings()

    download = retry_on_failure(
        max_attempts=settings.network.max_retries + 1,
        delay=settings.network.retry_delay,
        exceptions=(PageFetchError, aiohttp.ClientError, asyncio.TimeoutError)
    )(_download)

    try:
        html = await download(session, url, settings)
    except PageFetchError as e:
        return StageResult.no_result(f"page fetch failed: {e.message}")
    except asyncio.TimeoutError:
        return StageResult.no_result(f"page fetch timed out: {url}")
    except (aiohttp.ClientError, OSError) as e:
        return StageResult.no_result(f"page fetch failed: {e!r}")

    return StageResult.success(html)
