"""
Lyrics resolution pipeline

Runs the whole resolution for one track:

    synthesize queries -> concurrent search -> select best match
    -> translation lookup -> page fetch -> container extraction -> text cleanup

Each stage may end the run with "no result". Stages report that through
StageResult with a reason; this module logs the reason and hands the caller
a plain None. Nothing raised inside the pipeline reaches the caller.

Usage:
    result = await resolve_lyrics("Shape of You", "Ed Sheeran")
    if result is None:
        # unavailable; optionally retry later with excluded_ids={previous.source_id}
        ...
"""

import asyncio
from typing import Any, Iterable, Optional

import aiohttp

from ..config.settings import Settings, get_settings
from ..utils.logger import get_logger
from .extractor import extract_containers
from .models import LyricsResult, SearchHit, StageResult, TrackQuery
from .page import fetch_page, resolve_translation_url
from .queries import synthesize_queries
from .scoring import best_candidate
from .search import GeniusSearchClient
from .text import normalize_lyrics_text


class LyricsResolver:
    """
    Resolves lyrics for tracks using the Genius search API and song pages

    A resolver holds configuration only. Each call to resolve() uses either
    the session passed in or a session created for that call and closed
    before returning, so concurrent calls share no state.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Args:
            settings: Application settings, defaults to the global settings
        """
        self.settings = settings or get_settings()
        self.logger = get_logger(__name__)

    def _new_session(self) -> aiohttp.ClientSession:
        return aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.settings.network.request_timeout),
            headers={'User-Agent': self.settings.network.user_agent},
        )

    async def resolve(self, query: TrackQuery,
                      session: Optional[aiohttp.ClientSession] = None) -> Optional[LyricsResult]:
        """
        Resolve lyrics for a track

        Args:
            query: Target track metadata
            session: Optional open aiohttp session to reuse

        Returns:
            LyricsResult on success, None when lyrics are unavailable
        """
        self.logger.info(f"Resolving lyrics for: {query.artist} - {query.title}")

        try:
            if session is not None:
                outcome = await self._run(query, session)
            else:
                async with self._new_session() as own_session:
                    outcome = await self._run(query, own_session)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self.logger.error(f"Lyrics resolution failed unexpectedly: {e!r}")
            return None

        if not outcome.ok:
            self.logger.info(f"No lyrics for {query.artist} - {query.title}: {outcome.reason}")
            return None

        return outcome.value

    async def _run(self, query: TrackQuery, session: aiohttp.ClientSession) -> StageResult[LyricsResult]:
        """Run every stage, stopping at the first stage without a result"""
        matched = await self._find_match(query, session)
        if not matched.ok:
            return StageResult.no_result(matched.reason)
        hit = matched.value

        url = await resolve_translation_url(session, hit.url, query.language, self.settings)

        page = await fetch_page(session, url, self.settings)
        if not page.ok:
            return StageResult.no_result(page.reason)

        raw = extract_containers(page.value)
        if not raw:
            return StageResult.no_result(f"no lyrics container found at {url}")

        text = normalize_lyrics_text(raw)

        self.logger.info(f"Lyrics found: {hit.artist} - {hit.title} (id {hit.id})")
        return StageResult.success(LyricsResult(text=text, source_id=hit.id))

    async def _find_match(self, query: TrackQuery, session: aiohttp.ClientSession) -> StageResult[SearchHit]:
        """Search all query variants and select the best scoring hit"""
        queries = synthesize_queries(query.title, query.artist, query.album, query.year)
        if not any(queries):
            return StageResult.no_result("no searchable metadata")

        client = GeniusSearchClient(session, self.settings)
        hits = await client.search(queries, query.excluded_ids)
        if not hits:
            return StageResult.no_result("search returned no candidates")

        candidate = best_candidate(hits, query, query.language, self.settings.matching)
        floor = self.settings.matching.confidence_floor
        if candidate is None or candidate.score < floor:
            best = candidate.score if candidate else None
            return StageResult.no_result(f"best score {best} below confidence floor {floor}")

        self.logger.debug(
            f"Selected '{candidate.hit.full_title or candidate.hit.title}' "
            f"(id {candidate.hit.id}, score {candidate.score})"
        )
        return StageResult.success(candidate.hit)


async def resolve_lyrics(
    title: str,
    artist: str,
    album: Optional[str] = None,
    year: Optional[int] = None,
    language: str = "en",
    excluded_ids: Optional[Iterable[Any]] = None,
    session: Optional[aiohttp.ClientSession] = None,
    settings: Optional[Settings] = None
) -> Optional[LyricsResult]:
    """
    Resolve lyrics for a track from loose metadata

    Args:
        title: Track title
        artist: Artist name
        album: Album name (optional)
        year: Release year (optional)
        language: Requested lyrics language
        excluded_ids: Hit ids rejected by earlier attempts
        session: Optional open aiohttp session to reuse
        settings: Optional settings, defaults to the global settings

    Returns:
        LyricsResult with text and source id, or None when unavailable
    """
    query = TrackQuery.from_metadata(title, artist, album, year, language, excluded_ids)
    resolver = LyricsResolver(settings) if settings is not None else get_lyrics_resolver()
    return await resolver.resolve(query, session)


def resolve_lyrics_sync(*args, **kwargs) -> Optional[LyricsResult]:
    """Blocking wrapper around resolve_lyrics for synchronous callers"""
    return asyncio.run(resolve_lyrics(*args, **kwargs))


# Global resolver instance management
_lyrics_resolver: Optional[LyricsResolver] = None


def get_lyrics_resolver() -> LyricsResolver:
    """
    Get the global lyrics resolver instance (singleton pattern)

    Returns:
        Global LyricsResolver instance bound to the current global settings
    """
    global _lyrics_resolver
    if not _lyrics_resolver:
        _lyrics_resolver = LyricsResolver()
    return _lyrics_resolver


def reset_lyrics_resolver() -> None:
    """
    Reset the global lyrics resolver instance

    The next get_lyrics_resolver() call picks up the current settings,
    e.g. after reload_settings().
    """
    global _lyrics_resolver
    _lyrics_resolver = None
