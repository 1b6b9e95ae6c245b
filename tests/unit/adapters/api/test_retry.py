"""
Tests unitaires pour le retry du client catalogue.

Ces tests verifient:
- RateLimitError conserve le code HTTP et le header Retry-After
- with_retry ne relance que sur RateLimitError
- request_with_retry relance sur 429 et 503, pas sur les autres erreurs
"""

import httpx
import pytest
import respx

from src.adapters.api.retry import (
    RETRYABLE_STATUS_CODES,
    RateLimitError,
    _parse_retry_after,
    request_with_retry,
    with_retry,
)

CATALOG_URL = "https://swapi.test/api/films/"


class TestRateLimitError:
    """Tests pour l'exception RateLimitError."""

    def test_stores_status_and_retry_after(self) -> None:
        error = RateLimitError(503, retry_after=60)
        assert error.status_code == 503
        assert error.retry_after == 60
        assert "60" in str(error)

    def test_defaults_to_429(self) -> None:
        error = RateLimitError()
        assert error.status_code == 429
        assert error.retry_after is None

    def test_retryable_codes(self) -> None:
        assert RETRYABLE_STATUS_CODES == {429, 503}


class TestParseRetryAfter:
    """Lecture du header Retry-After."""

    @pytest.mark.parametrize(
        "value,expected",
        [("30", 30), (None, None), ("Wed, 21 Oct 2015 07:28:00 GMT", None)],
    )
    def test_parse(self, value, expected) -> None:
        assert _parse_retry_after(value) == expected


class TestWithRetryDecorator:
    """Tests pour le decorateur with_retry."""

    @pytest.mark.asyncio
    async def test_retries_then_succeeds(self) -> None:
        call_count = 0

        @with_retry(max_attempts=3, max_wait=1)
        async def flaky() -> str:
            nonlocal call_count
            call_count += 1
            if call_count < 2:
                raise RateLimitError(retry_after=1)
            return "success"

        assert await flaky() == "success"
        assert call_count == 2

    @pytest.mark.asyncio
    async def test_reraises_after_max_attempts(self) -> None:
        call_count = 0

        @with_retry(max_attempts=2, max_wait=1)
        async def always_busy() -> str:
            nonlocal call_count
            call_count += 1
            raise RateLimitError(503)

        with pytest.raises(RateLimitError):
            await always_busy()
        assert call_count == 2

    @pytest.mark.asyncio
    async def test_does_not_retry_other_exceptions(self) -> None:
        call_count = 0

        @with_retry(max_attempts=3, max_wait=1)
        async def broken() -> str:
            nonlocal call_count
            call_count += 1
            raise ValueError("not a rate limit")

        with pytest.raises(ValueError):
            await broken()
        assert call_count == 1  # Pas de retry


class TestRequestWithRetry:
    """Tests pour request_with_retry avec httpx."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_passes_on_success(self, respx_mock: respx.Router) -> None:
        route = respx_mock.get(CATALOG_URL).mock(
            return_value=httpx.Response(200, json={"results": []})
        )

        async with httpx.AsyncClient() as client:
            response = await request_with_retry(client, "GET", CATALOG_URL)

        assert response.json() == {"results": []}
        assert route.call_count == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_retries_on_503_then_succeeds(self, respx_mock: respx.Router) -> None:
        route = respx_mock.get(CATALOG_URL).mock(
            side_effect=[
                httpx.Response(503),
                httpx.Response(200, json={"status": "ok"}),
            ]
        )

        async with httpx.AsyncClient() as client:
            response = await request_with_retry(
                client, "GET", CATALOG_URL, max_attempts=3, max_wait=1
            )

        assert response.status_code == 200
        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_raises_rate_limit_when_exhausted(self, respx_mock: respx.Router) -> None:
        route = respx_mock.get(CATALOG_URL).mock(
            return_value=httpx.Response(429, headers={"Retry-After": "30"})
        )

        async with httpx.AsyncClient() as client:
            with pytest.raises(RateLimitError) as exc_info:
                await request_with_retry(
                    client, "GET", CATALOG_URL, max_attempts=2, max_wait=1
                )

        assert exc_info.value.status_code == 429
        assert exc_info.value.retry_after == 30
        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_other_errors_are_not_retried(self, respx_mock: respx.Router) -> None:
        route = respx_mock.get(CATALOG_URL).mock(
            return_value=httpx.Response(500, text="Internal Server Error")
        )

        async with httpx.AsyncClient() as client:
            with pytest.raises(httpx.HTTPStatusError) as exc_info:
                await request_with_retry(client, "GET", CATALOG_URL)

        assert exc_info.value.response.status_code == 500
        assert route.call_count == 1  # Pas de retry sur 500
