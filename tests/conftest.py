"""Test configuration and fixtures"""

import asyncio

import pytest

from lyrics_resolver.config.settings import Settings

SEARCH_URL = "https://api.genius.com/search"


class FakeResponse:
    """Stand-in for an aiohttp response used as an async context manager"""

    def __init__(self, status=200, json_data=None, text="", delay=0.0):
        self.status = status
        self._json = json_data
        self._text = text
        self.delay = delay

    async def json(self, content_type="application/json"):
        if isinstance(self._json, Exception):
            raise self._json
        return self._json

    async def text(self, errors="strict"):
        if isinstance(self._text, bytes):
            return self._text.decode("utf-8", errors)
        return self._text

    async def __aenter__(self):
        if self.delay:
            await asyncio.sleep(self.delay)
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class RaisingContext:
    """Context manager that fails on entry, like a refused connection"""

    def __init__(self, error):
        self.error = error

    async def __aenter__(self):
        raise self.error

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """
    Minimal aiohttp.ClientSession replacement

    search maps query strings to responses for the search endpoint; pages
    maps URLs to responses. A value may be a FakeResponse, an exception
    instance, or a list of those consumed one per request.
    Unknown queries get an empty hit list, unknown pages a 404.
    """

    def __init__(self, search=None, pages=None):
        self.search = dict(search or {})
        self.pages = dict(pages or {})
        self.calls = []
        self.closed = False

    def _next(self, table, key, default):
        entry = table.get(key, default)
        if isinstance(entry, list):
            entry = entry.pop(0) if len(entry) > 1 else entry[0]
        return entry

    def get(self, url, params=None, headers=None, timeout=None, **kwargs):
        self.calls.append({'url': url, 'params': params, 'headers': headers})
        if url == SEARCH_URL:
            entry = self._next(self.search, (params or {}).get('q'), search_response([]))
        else:
            entry = self._next(self.pages, url, FakeResponse(status=404))
        if isinstance(entry, BaseException):
            return RaisingContext(entry)
        return entry

    def urls(self):
        return [call['url'] for call in self.calls]

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.closed = True
        return False


def genius_result(song_id, title, artist, album=None, year=None, full_title=None,
                  url=None):
    """Build a raw Genius search 'result' record"""
    return {
        'id': song_id,
        'title': title,
        'full_title': full_title if full_title is not None else f"{title} by {artist}",
        'url': url or f"https://genius.com/songs/{song_id}",
        'primary_artist': {'name': artist},
        'album': {'name': album} if album else None,
        'release_date_components': {'year': year, 'month': 1, 'day': 1} if year else None,
    }


def search_response(results, status=200, delay=0.0):
    """Wrap raw results in a Genius search payload"""
    payload = {'meta': {'status': status}, 'response': {'hits': [
        {'type': 'song', 'result': result} for result in results
    ]}}
    return FakeResponse(status=status, json_data=payload, delay=delay)


def lyrics_page(*blocks):
    """Build a song page with one lyrics container per block"""
    containers = ''.join(
        f'<div data-lyrics-container="true" class="Lyrics__Container">{block}</div>'
        for block in blocks
    )
    return (
        '<html><head><title>Song</title></head><body>'
        '<div class="Header"><h1>Song</h1></div>'
        f'<div id="lyrics-root">{containers}</div>'
        '<div class="Footer">About</div></body></html>'
    )


@pytest.fixture
def settings():
    """Settings with a token and no throttling or retry delays"""
    test_settings = Settings()
    test_settings.genius.access_token = "test-token"
    test_settings.genius.api_base = "https://api.genius.com"
    test_settings.genius.search_path = "/search"
    test_settings.network.rate_limit = 1000
    test_settings.network.max_retries = 0
    test_settings.network.retry_delay = 0
    test_settings.network.request_timeout = 5
    return test_settings


@pytest.fixture
def fake_session():
    """Factory for FakeSession instances"""
    return FakeSession
