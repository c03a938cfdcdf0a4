"""
Data models for the lyrics resolution pipeline

All models are immutable and live for a single pipeline invocation only.
The one value that crosses invocations is TrackQuery.excluded_ids, which
callers grow themselves after a resolved page turned out to be the wrong song.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Generic, Iterable, Optional, TypeVar

T = TypeVar('T')


@dataclass(frozen=True)
class TrackQuery:
    """
    Target track metadata used to search and score candidates

    Attributes:
        title: Track title
        artist: Primary artist name
        album: Album name if known
        year: Release year if known
        language: Requested lyrics language; "en" disables translation lookup
        excluded_ids: Search hit ids rejected by earlier attempts
    """
    title: str
    artist: str
    album: Optional[str] = None
    year: Optional[int] = None
    language: str = "en"
    excluded_ids: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def from_metadata(
        cls,
        title: str,
        artist: str,
        album: Optional[str] = None,
        year: Optional[int] = None,
        language: str = "en",
        excluded_ids: Optional[Iterable[Any]] = None
    ) -> 'TrackQuery':
        """Build a query, coercing excluded ids to strings"""
        return cls(
            title=title or "",
            artist=artist or "",
            album=album or None,
            year=year,
            language=language or "en",
            excluded_ids=frozenset(str(i) for i in (excluded_ids or ())),
        )


@dataclass(frozen=True)
class SearchHit:
    """
    One song record returned by the search service

    Identity is the id: two hits with the same id are the same song
    even when they came back for different queries.
    """
    id: str
    title: str
    artist: str
    url: str
    full_title: str = ""
    album: Optional[str] = None
    release_year: Optional[int] = None

    @classmethod
    def from_genius_result(cls, result: Dict[str, Any]) -> 'SearchHit':
        """
        Create a hit from the 'result' object of a Genius search hit

        Args:
            result: Raw song dictionary from the Genius search response

        Returns:
            Parsed SearchHit

        Raises:
            ValueError: If the record is not a dictionary or has no id
        """
        if not isinstance(result, dict) or result.get('id') is None:
            raise ValueError("Search result has no song id")

        primary_artist = result.get('primary_artist') or {}
        album = result.get('album') or {}
        date_components = result.get('release_date_components') or {}

        return cls(
            id=str(result['id']),
            title=result.get('title') or "",
            artist=primary_artist.get('name') or "",
            url=result.get('url') or "",
            full_title=result.get('full_title') or "",
            album=album.get('name') or None,
            release_year=_parse_year(date_components.get('year')),
        )


def _parse_year(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class ScoredCandidate:
    """A search hit paired with its match score"""
    hit: SearchHit
    score: int


@dataclass(frozen=True)
class LyricsResult:
    """
    Successful pipeline output

    Attributes:
        text: Clean lyrics text ready for display
        source_id: Id of the search hit the lyrics were taken from; callers
                   add it to excluded_ids to retry with another candidate
    """
    text: str
    source_id: str


@dataclass(frozen=True)
class StageResult(Generic[T]):
    """
    Outcome of one pipeline stage

    Either carries a value or marks "no result" together with the reason,
    which is only used for logging. The orchestrator is the single place
    where a "no result" turns into None for the caller.
    """
    value: Optional[T] = None
    reason: Optional[str] = None

    @classmethod
    def success(cls, value: T) -> 'StageResult[T]':
        return cls(value=value)

    @classmethod
    def no_result(cls, reason: str) -> 'StageResult[T]':
        return cls(reason=reason)

    @property
    def ok(self) -> bool:
        return self.reason is None
