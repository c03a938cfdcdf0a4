"""
Lyrics resolution package

Resolves the Genius page for a track from partial metadata and extracts
clean lyrics text from it.

Key components:
- queries: Search query synthesis from track metadata
- search: Concurrent Genius search with per-query failure containment
- scoring: Weighted candidate scoring and best-match selection
- page: Translation lookup and song page download
- extractor: Balanced extraction of nested lyrics containers
- text: Markup to plain text conversion and boilerplate removal
- resolver: Pipeline orchestration and the public entry points

Usage:
    from lyrics_resolver.lyrics import resolve_lyrics

    result = await resolve_lyrics("Shape of You", "Ed Sheeran")
    if result:
        print(result.text)
"""

from .models import TrackQuery, SearchHit, ScoredCandidate, LyricsResult, StageResult
from .queries import synthesize_queries
from .search import GeniusSearchClient, merge_hits
from .scoring import score_hit, best_candidate, select_best_hit
from .page import resolve_translation_url, fetch_page, translation_url
from .extractor import extract_containers, find_container_blocks
from .text import normalize_lyrics_text, markup_to_text, strip_boilerplate
from .resolver import (
    LyricsResolver,
    resolve_lyrics,
    resolve_lyrics_sync,
    get_lyrics_resolver,
    reset_lyrics_resolver,
)

__all__ = [
    # Data models
    'TrackQuery',
    'SearchHit',
    'ScoredCandidate',
    'LyricsResult',
    'StageResult',

    # Pipeline stages
    'synthesize_queries',
    'GeniusSearchClient',
    'merge_hits',
    'score_hit',
    'best_candidate',
    'select_best_hit',
    'resolve_translation_url',
    'fetch_page',
    'translation_url',
    'extract_containers',
    'find_container_blocks',
    'normalize_lyrics_text',
    'markup_to_text',
    'strip_boilerplate',

    # Orchestration
    'LyricsResolver',
    'resolve_lyrics',
    'resolve_lyrics_sync',
    'get_lyrics_resolver',
    'reset_lyrics_resolver',
]
