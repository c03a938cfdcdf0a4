"""Test utilities and helpers"""

import pytest

from lyrics_resolver.utils.exceptions import LyricsResolverError, SearchError
from lyrics_resolver.utils.helpers import normalize_for_matching, retry_on_failure, truncate_string
from lyrics_resolver.utils.logger import parse_size


class TestNormalizeForMatching:
    """Test string folding used for fuzzy comparison"""

    def test_spelling_variants_fold_together(self):
        assert normalize_for_matching("Ed Sheeran") == "edsheeran"
        assert normalize_for_matching("ed-sheeran!") == "edsheeran"
        assert normalize_for_matching("ED SHEERAN") == "edsheeran"

    def test_empty_and_missing_values(self):
        assert normalize_for_matching("") == ""
        assert normalize_for_matching(None) == ""
        assert normalize_for_matching("  !!  ") == ""

    def test_digits_are_kept(self):
        assert normalize_for_matching("Blink-182") == "blink182"

    def test_non_ascii_letters_are_dropped(self):
        assert normalize_for_matching("Beyoncé") == "beyonc"


class TestRetryOnFailure:
    """Test the async retry decorator"""

    @pytest.mark.asyncio
    async def test_retries_until_success(self):
        attempts = []

        @retry_on_failure(max_attempts=3, delay=0)
        async def flaky():
            attempts.append(1)
            if len(attempts) < 3:
                raise ConnectionError("boom")
            return "ok"

        assert await flaky() == "ok"
        assert len(attempts) == 3

    @pytest.mark.asyncio
    async def test_reraises_after_last_attempt(self):
        @retry_on_failure(max_attempts=2, delay=0)
        async def broken():
            raise ConnectionError("still down")

        with pytest.raises(ConnectionError):
            await broken()

    @pytest.mark.asyncio
    async def test_other_exceptions_are_not_retried(self):
        attempts = []

        @retry_on_failure(max_attempts=5, delay=0, exceptions=(ConnectionError,))
        async def wrong_type():
            attempts.append(1)
            raise KeyError("nope")

        with pytest.raises(KeyError):
            await wrong_type()
        assert len(attempts) == 1

    @pytest.mark.asyncio
    async def test_zero_attempts_still_runs_once(self):
        @retry_on_failure(max_attempts=0, delay=0)
        async def once():
            return 42

        assert await once() == 42


class TestMisc:
    """Test small formatting helpers"""

    def test_truncate_string(self):
        assert truncate_string("short", 10) == "short"
        assert truncate_string("a long line of text", 10) == "a long ..."

    def test_parse_size(self):
        assert parse_size("10MB") == 10 * 1024 ** 2
        assert parse_size("512 KB") == 512 * 1024
        with pytest.raises(ValueError):
            parse_size("lots")

    def test_exception_details(self):
        error = SearchError("HTTP 500", details={'status': 500})
        assert isinstance(error, LyricsResolverError)
        assert str(error) == "HTTP 500"
        assert error.details['status'] == 500
        assert error.is_auth_error is False
