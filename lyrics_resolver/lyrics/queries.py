"""
Search query synthesis

Builds up to four query strings from sparse track metadata, most specific
first, so that a search service which ranks badly on one phrasing still
gets a chance with another.
"""

from typing import List, Optional


def _join(*parts: Optional[object]) -> str:
    """Join the present parts with single spaces"""
    cleaned = [str(part).strip() for part in parts if part is not None]
    return " ".join(part for part in cleaned if part)


def synthesize_queries(
    title: str,
    artist: str,
    album: Optional[str] = None,
    year: Optional[int] = None
) -> List[str]:
    """
    Generate ordered, deduplicated search queries for a track

    Query order:
    1. artist title album year
    2. artist title year
    3. artist title
    4. title artist

    Absent fields are omitted, so with no album and no year the first three
    collapse into one query.

    Args:
        title: Track title
        artist: Artist name
        album: Album name (optional)
        year: Release year (optional)

    Returns:
        Between 1 and 4 unique query strings. With every field empty the
        result is a single empty query.
    """
    candidates = [
        _join(artist, title, album, year),
        _join(artist, title, year),
        _join(artist, title),
        _join(title, artist),
    ]

    # dict keeps first-insertion order
    queries = [query for query in dict.fromkeys(candidates) if query]
    return queries or [""]
