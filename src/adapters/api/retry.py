"""
Mecanisme de retry avec backoff exponentiel pour le catalogue externe.

Relance automatiquement les requetes quand le catalogue signale une
surcharge passagere (429 Too Many Requests, 503 Service Unavailable),
avec un delai croissant et du jitter aleatoire. Les autres erreurs HTTP
remontent immediatement.

Usage:
    response = await request_with_retry(client, "GET", "/films/")
"""

from typing import Optional

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)

# Codes HTTP consideres comme une surcharge temporaire du catalogue
RETRYABLE_STATUS_CODES = frozenset({429, 503})


class RateLimitError(Exception):
    """
    Exception levee quand le catalogue repond 429 ou 503.

    Attributes:
        status_code: Code HTTP recu
        retry_after: Secondes a attendre (header Retry-After), ou None.
    """

    def __init__(self, status_code: int = 429, retry_after: Optional[int] = None) -> None:
        self.status_code = status_code
        self.retry_after = retry_after
        super().__init__(f"Upstream busy ({status_code}). Retry after: {retry_after}s")


def with_retry(max_attempts: int = 5, max_wait: int = 30):
    """
    Decorateur pour relancer sur RateLimitError avec backoff exponentiel.

    Args:
        max_attempts: Nombre maximum de tentatives (defaut: 5)
        max_wait: Delai maximum entre les tentatives en secondes (defaut: 30)

    Returns:
        Decorateur a appliquer sur une fonction async
    """
    return retry(
        retry=retry_if_exception_type(RateLimitError),
        wait=wait_random_exponential(multiplier=1, min=1, max=max_wait),
        stop=stop_after_attempt(max_attempts),
        reraise=True,
    )


def _parse_retry_after(value: Optional[str]) -> Optional[int]:
    """Lit le header Retry-After (les dates HTTP ne sont pas gerees)."""
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


async def request_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    max_attempts: int = 5,
    max_wait: int = 30,
    **kwargs,
) -> httpx.Response:
    """
    Execute une requete HTTP avec retry automatique sur 429/503.

    Args:
        client: Client httpx async a utiliser
        method: Methode HTTP (GET, POST, etc.)
        url: URL relative ou absolue
        max_attempts: Nombre maximum de tentatives (defaut: 5)
        max_wait: Delai maximum entre deux tentatives
        **kwargs: Arguments supplementaires passes a client.request()

    Returns:
        httpx.Response en cas de succes

    Raises:
        RateLimitError: Si le catalogue reste surcharge apres epuisement des tentatives
        httpx.HTTPStatusError: Pour les autres erreurs HTTP
        httpx.TransportError: Pour les erreurs reseau (non relancees)
    """

    @with_retry(max_attempts=max_attempts, max_wait=max_wait)
    async def _do_request() -> httpx.Response:
        response = await client.request(method, url, **kwargs)
        if response.status_code in RETRYABLE_STATUS_CODES:
            raise RateLimitError(
                response.status_code,
                _parse_retry_after(response.headers.get("Retry-After")),
            )
        response.raise_for_status()
        return response

    return await _do_request()
