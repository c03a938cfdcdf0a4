"""
Genius search integration with concurrent multi-query aggregation

Every synthesized query is sent to the Genius search endpoint at the same
time. A query that fails for any reason (network error, rejected token,
timeout, unexpected payload) simply contributes no hits; it never aborts
the other queries or the aggregate result.

Results are merged only after all requests have settled, strictly in query
priority order and then in the order the service returned them. Completion
order of the requests therefore never influences which duplicate is kept or
how ties are broken later during selection.
"""

import asyncio
from typing import Any, Dict, Iterable, List, Optional

import aiohttp
from asyncio_throttle import Throttler

from ..config.settings import Settings, get_settings
from ..utils.exceptions import SearchError
from ..utils.logger import get_logger
from .models import SearchHit


def merge_hits(results_per_query: Iterable[List[SearchHit]],
               excluded_ids: Iterable[str] = ()) -> List[SearchHit]:
    """
    Flatten per-query hit lists and deduplicate them by id

    Args:
        results_per_query: Hit lists in query priority order
        excluded_ids: Ids that must never be returned

    Returns:
        First occurrence of every non-excluded hit, in flattened order
    """
    excluded = {str(i) for i in excluded_ids}
    merged: Dict[str, SearchHit] = {}

    for hits in results_per_query:
        for hit in hits:
            if hit.id in excluded or hit.id in merged:
                continue
            merged[hit.id] = hit

    return list(merged.values())


class GeniusSearchClient:
    """
    Client for the Genius search endpoint

    The client does not own the aiohttp session; it is handed one by the
    resolver so that a whole pipeline invocation shares one connection pool.

    Attributes:
        session: Open aiohttp session used for all requests
        settings: Application settings (token, endpoint, timeouts, rate limit)
        throttler: Request rate limiter shared by all queries of this client
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        settings: Optional[Settings] = None,
        throttler: Optional[Throttler] = None
    ):
        self.session = session
        self.settings = settings or get_settings()
        self.logger = get_logger(__name__)
        self.throttler = throttler or Throttler(
            rate_limit=max(1, int(self.settings.network.rate_limit)),
            period=1.0
        )

    async def search(self, queries: List[str], excluded_ids: Iterable[str] = ()) -> List[SearchHit]:
        """
        Run all queries concurrently and merge their hits

        Args:
            queries: Query strings in priority order
            excluded_ids: Hit ids to drop from the merged result

        Returns:
            Deduplicated hits, possibly empty
        """
        if not queries:
            return []

        if not self.settings.genius.access_token:
            self.logger.error("Genius access token not configured (GENIUS_ACCESS_TOKEN)")
            return []

        # One slot per query; each coroutine contains its own failures
        results = await asyncio.gather(
            *(self._safe_search(query) for query in queries),
            return_exceptions=True
        )

        per_query: List[List[SearchHit]] = []
        for query, result in zip(queries, results):
            if isinstance(result, BaseException):
                self.logger.debug(f"Genius search query '{query}' aborted: {result!r}")
                per_query.append([])
            else:
                per_query.append(result)

        hits = merge_hits(per_query, excluded_ids)
        self.logger.debug(
            f"Genius search: {len(queries)} queries, "
            f"{sum(len(r) for r in per_query)} raw hits, {len(hits)} unique candidates"
        )
        return hits

    async def _safe_search(self, query: str) -> List[SearchHit]:
        """Search a single query, turning every failure into an empty list"""
        try:
            return await self.search_query(query)
        except SearchError as e:
            if e.is_auth_error:
                self.logger.error(f"Genius rejected the access token: {e.message}")
            else:
                self.logger.debug(f"Genius search query '{query}' failed: {e.message}")
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            self.logger.debug(f"Genius search query '{query}' failed: {e!r}")
        return []

    async def search_query(self, query: str) -> List[SearchHit]:
        """
        Execute one search request

        Args:
            query: Free-text search string

        Returns:
            Parsed hits in service order

        Raises:
            SearchError: On non-success status or malformed response body
            aiohttp.ClientError, asyncio.TimeoutError: On transport failures
        """
        self.logger.debug(f"Genius search query: '{query}'")

        headers = {
            'Authorization': f"Bearer {self.settings.genius.access_token}",
            'Accept': 'application/json',
        }
        timeout = aiohttp.ClientTimeout(total=self.settings.network.request_timeout)

        async with self.throttler:
            async with self.session.get(
                self.settings.genius.search_url,
                params={'q': query},
                headers=headers,
                timeout=timeout
            ) as resp:
                if resp.status in (401, 403):
                    raise SearchError(
                        f"HTTP {resp.status} for query '{query}'",
                        details={'query': query, 'status': resp.status},
                        is_auth_error=True
                    )
                if not 200 <= resp.status < 300:
                    raise SearchError(
                        f"HTTP {resp.status} for query '{query}'",
                        details={'query': query, 'status': resp.status}
                    )
                try:
                    payload = await resp.json(content_type=None)
                except ValueError as e:
                    raise SearchError(
                        f"Invalid JSON for query '{query}'",
                        details={'query': query, 'original_error': str(e)}
                    ) from e

        return self._parse_hits(payload, query)

    def _parse_hits(self, payload: Any, query: str) -> List[SearchHit]:
        """
        Extract hits from a Genius search payload

        Expected shape: {"response": {"hits": [{"result": {...}}, ...]}}
        Individual records without an id are skipped.
        """
        try:
            raw_hits = payload['response']['hits']
        except (KeyError, TypeError) as e:
            raise SearchError(
                f"Unexpected response shape for query '{query}'",
                details={'query': query, 'original_error': repr(e)}
            ) from e

        if not isinstance(raw_hits, list):
            raise SearchError(
                f"Unexpected hits type for query '{query}'",
                details={'query': query}
            )

        hits = []
        for raw in raw_hits:
            try:
                hits.append(SearchHit.from_genius_result((raw or {}).get('result')))
            except (ValueError, AttributeError) as e:
                self.logger.debug(f"Skipping malformed hit for '{query}': {e}")
        return hits
