"""
Lyrics-Resolver: find the right Genius page for a track and extract its lyrics

The package takes sparse track metadata (title, artist, optionally album and
year), searches Genius with several query phrasings at once, scores every
candidate against the metadata, and extracts display-ready lyrics from the
winning song page. Every failure along the way yields None rather than an
exception, so callers only ever need to handle "found" and "unavailable".

Packages:
- config: YAML and environment based settings
- lyrics: the resolution pipeline
- utils: logging, exceptions and small helpers

Quick start:
    from lyrics_resolver import resolve_lyrics_sync

    result = resolve_lyrics_sync("Shape of You", "Ed Sheeran")
    print(result.text if result else "No lyrics found")
"""

__version__ = "1.0.0"

from .lyrics import (
    LyricsResult,
    TrackQuery,
    LyricsResolver,
    resolve_lyrics,
    resolve_lyrics_sync,
)

__all__ = [
    '__version__',
    'LyricsResult',
    'TrackQuery',
    'LyricsResolver',
    'resolve_lyrics',
    'resolve_lyrics_sync',
]
