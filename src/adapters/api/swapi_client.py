"""
Client SWAPI pour la recuperation du catalogue de films et personnages.

Implemente l'interface ICatalogClient pour SWAPI (The Star Wars API).
Les reponses paginees sont parcourues via le lien "next" et retournees
sous forme de liste unique.

Usage:
    client = SwapiClient(base_url="https://swapi.dev/api")
    movies = await client.fetch_movies()
    characters = await client.fetch_characters()
    await client.close()
"""

from typing import Any, Optional

import httpx
from loguru import logger

from src.adapters.api.retry import RateLimitError, request_with_retry
from src.core.errors import UpstreamError
from src.core.ports.api_clients import ICatalogClient, UpstreamCharacter, UpstreamMovie

# Valeurs SWAPI signifiant "donnee absente"
_MISSING_VALUES = frozenset({"", "unknown", "n/a", "none"})

# Garde-fou contre une boucle de pagination (lien "next" qui se repete)
_MAX_PAGES = 100


def _clean_str(value: Any) -> Optional[str]:
    """Retourne la chaine nettoyee, ou None pour les valeurs absentes."""
    if value is None:
        return None
    text = str(value).strip()
    if text.lower() in _MISSING_VALUES:
        return None
    return text


def _parse_int(value: Any) -> Optional[int]:
    """
    Convertit une mesure SWAPI en entier.

    Gere les separateurs de milliers ("1,358") et les decimales ("78.2").
    Retourne None pour "unknown" ou toute valeur non numerique.
    """
    text = _clean_str(value)
    if text is None:
        return None
    try:
        return int(float(text.replace(",", "")))
    except ValueError:
        return None


class SwapiClient(ICatalogClient):
    """
    Client API SWAPI pour le catalogue Star Wars.

    Implemente ICatalogClient avec:
    - Parcours complet de la pagination (/films, /people)
    - Retry automatique sur surcharge (429, 503)
    - Conversion de toutes les erreurs HTTP/reseau en UpstreamError

    Attributes:
        SWAPI_BASE_URL: URL de base par defaut
    """

    SWAPI_BASE_URL = "https://swapi.dev/api"

    def __init__(
        self,
        base_url: str = SWAPI_BASE_URL,
        verify_ssl: bool = True,
        timeout: float = 30.0,
        max_attempts: int = 5,
    ) -> None:
        """
        Initialise le client SWAPI.

        Args:
            base_url: URL de base de l'API (sans slash final)
            verify_ssl: Verification des certificats TLS
            timeout: Timeout HTTP en secondes
            max_attempts: Tentatives maximum en cas de surcharge
        """
        self._base_url = base_url.rstrip("/")
        self._verify_ssl = verify_ssl
        self._timeout = timeout
        self._max_attempts = max_attempts
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le cree si necessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers={"Accept": "application/json"},
                timeout=self._timeout,
                verify=self._verify_ssl,
                follow_redirects=True,
            )
        return self._client

    @property
    def source(self) -> str:
        """Retourne l'identifiant du catalogue."""
        return "swapi"

    async def _fetch_all(self, resource: str) -> list[dict[str, Any]]:
        """
        Recupere toutes les pages d'une ressource SWAPI.

        Args:
            resource: Nom de la ressource ("films" ou "people")

        Returns:
            Concatenation des listes "results" de chaque page

        Raises:
            UpstreamError: Si une page echoue ou si la reponse est invalide
        """
        client = self._get_client()
        url: Optional[str] = f"/{resource}/"
        items: list[dict[str, Any]] = []
        pages = 0

        while url and pages < _MAX_PAGES:
            try:
                response = await request_with_retry(
                    client, "GET", url, max_attempts=self._max_attempts
                )
                data = response.json()
            except RateLimitError as e:
                raise UpstreamError(
                    f"SWAPI surcharge sur /{resource}", status_code=e.status_code
                ) from e
            except httpx.HTTPStatusError as e:
                raise UpstreamError(
                    f"SWAPI a repondu {e.response.status_code} sur /{resource}",
                    status_code=e.response.status_code,
                ) from e
            except httpx.HTTPError as e:
                raise UpstreamError(f"SWAPI injoignable sur /{resource}: {e}") from e
            except ValueError as e:
                raise UpstreamError(f"Reponse SWAPI invalide sur /{resource}") from e

            if not isinstance(data, dict) or not isinstance(data.get("results"), list):
                raise UpstreamError(f"Reponse SWAPI inattendue sur /{resource}")

            items.extend(data["results"])
            url = data.get("next")
            pages += 1

        if url:
            # Une liste tronquee ne doit jamais remplacer le catalogue local
            logger.warning(f"SWAPI /{resource}: pagination interrompue apres {pages} page(s)")
            raise UpstreamError(f"Pagination SWAPI trop longue sur /{resource}")

        logger.debug(f"SWAPI /{resource}: {len(items)} element(s) sur {pages} page(s)")
        return items

    async def fetch_movies(self) -> list[UpstreamMovie]:
        """
        Recupere tous les films SWAPI.

        Les champs sont transmis bruts (titre et date non valides) :
        le filtrage est la responsabilite de la politique d'admission.
        """
        items = await self._fetch_all("films")
        return [
            UpstreamMovie(
                title=(item.get("title") or "").strip(),
                release_date=item.get("release_date") or "",
                external_ref=item.get("url") or "",
                episode_number=_parse_int(item.get("episode_id")),
                opening_text=item.get("opening_crawl"),
                director=_clean_str(item.get("director")),
                producer=_clean_str(item.get("producer")),
                character_refs=list(item.get("characters") or []),
            )
            for item in items
        ]

    async def fetch_characters(self) -> list[UpstreamCharacter]:
        """Recupere tous les personnages SWAPI."""
        items = await self._fetch_all("people")
        return [
            UpstreamCharacter(
                name=(item.get("name") or "").strip(),
                external_ref=item.get("url") or "",
                height=_parse_int(item.get("height")),
                mass=_parse_int(item.get("mass")),
                hair_color=_clean_str(item.get("hair_color")),
                skin_color=_clean_str(item.get("skin_color")),
                eye_color=_clean_str(item.get("eye_color")),
                birth_year=_clean_str(item.get("birth_year")),
                gender=_clean_str(item.get("gender")),
            )
            for item in items
        ]

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
