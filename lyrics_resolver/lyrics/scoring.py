"""
Candidate scoring and best-match selection

Scoring is a weighted additive heuristic over normalized strings:

- Artist: exact match +100, substring match either way +50
- Title: exact match +100, substring match either way +50
- Album: exact match +30, only when both sides know the album
- Year: exact match +30, only when both sides know the year
- Language (English requests only): +20 when the full title mentions an
  English/translation marker, -60 when it carries a foreign-version marker.
  Both checks are applied independently.

Selection keeps the first candidate with the strictly highest score and
rejects it when that score is below the confidence floor.
"""

from functools import reduce
from typing import Iterable, Optional, Tuple

from ..config.settings import MatchingConfig
from ..utils.helpers import normalize_for_matching
from .models import ScoredCandidate, SearchHit, TrackQuery


def _text_match_score(candidate: str, target: str, weights: MatchingConfig) -> int:
    """Score two normalized strings: exact, containment or nothing"""
    if candidate == target:
        return weights.exact_match
    if target in candidate or candidate in target:
        return weights.partial_match
    return 0


def score_hit(hit: SearchHit, target: TrackQuery, language: Optional[str] = None,
              weights: Optional[MatchingConfig] = None) -> int:
    """
    Compute the match score of one search hit against the target track

    Args:
        hit: Candidate search hit
        target: Track being resolved
        language: Requested language, defaults to target.language
        weights: Score weights and marker tables (defaults if omitted)

    Returns:
        Integer score, may be negative
    """
    weights = weights or MatchingConfig()
    language = target.language if language is None else language

    score = _text_match_score(
        normalize_for_matching(hit.artist), normalize_for_matching(target.artist), weights
    )
    score += _text_match_score(
        normalize_for_matching(hit.title), normalize_for_matching(target.title), weights
    )

    if hit.album and target.album:
        if normalize_for_matching(hit.album) == normalize_for_matching(target.album):
            score += weights.album_match

    if target.year is not None and hit.release_year is not None:
        if int(hit.release_year) == int(target.year):
            score += weights.year_match

    if language == weights.default_language:
        full_title = (hit.full_title or "").lower()
        if any(marker in full_title for marker in weights.bonus_markers):
            score += weights.language_bonus
        if any(marker in full_title for marker in weights.penalty_markers):
            score -= weights.language_penalty

    return score


def best_candidate(hits: Iterable[SearchHit], target: TrackQuery,
                   language: Optional[str] = None,
                   weights: Optional[MatchingConfig] = None) -> Optional[ScoredCandidate]:
    """
    Fold the hits into the highest scoring one

    Uses strict greater-than, so among equal scores the earliest hit wins.

    Returns:
        Best scored candidate, or None when there are no hits
    """
    def keep_better(best: Tuple[Optional[SearchHit], float], hit: SearchHit) -> Tuple[Optional[SearchHit], float]:
        score = score_hit(hit, target, language, weights)
        return (hit, score) if score > best[1] else best

    best_hit, best_score = reduce(keep_better, hits, (None, float('-inf')))
    if best_hit is None:
        return None
    return ScoredCandidate(hit=best_hit, score=best_score)


def select_best_hit(hits: Iterable[SearchHit], target: TrackQuery,
                    language: Optional[str] = None,
                    floor: Optional[int] = None,
                    weights: Optional[MatchingConfig] = None) -> Optional[SearchHit]:
    """
    Select the winning hit, applying the confidence floor

    Args:
        hits: Candidates in aggregator order
        target: Track being resolved
        language: Requested language, defaults to target.language
        floor: Minimum accepted score, defaults to weights.confidence_floor
        weights: Score weights and marker tables

    Returns:
        Winning hit, or None when nothing reaches the floor
    """
    weights = weights or MatchingConfig()
    floor = weights.confidence_floor if floor is None else floor

    candidate = best_candidate(hits, target, language, weights)
    if candidate is None or candidate.score < floor:
        return None
    return candidate.hit
