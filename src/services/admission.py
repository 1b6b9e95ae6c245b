"""
Politique d'admission des films du catalogue externe.

Les donnees amont ne sont pas garanties propres : un film sans titre ou
avec une date de sortie illisible est ecarte, sans interrompre la
synchronisation.
"""

from datetime import date, datetime
from typing import Optional

from loguru import logger

from src.core.entities.catalog import Movie, Provenance
from src.core.ports.api_clients import UpstreamMovie


def parse_release_date(value: Optional[str]) -> Optional[date]:
    """
    Convertit une date de sortie amont en date calendaire.

    Accepte "YYYY-MM-DD" et les horodatages ISO 8601 complets.
    Retourne None si la valeur est absente ou invalide (ex: "1977-02-30").
    """
    if not value:
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def admit_movie(upstream: UpstreamMovie) -> Optional[Movie]:
    """
    Applique la politique d'admission a un film amont.

    Args:
        upstream: Film tel que recu du catalogue

    Returns:
        Le film a inserer (provenance externe), ou None s'il est ecarte.
    """
    title = (upstream.title or "").strip()
    if not title:
        logger.debug(f"Film ecarte (titre absent): {upstream.external_ref}")
        return None

    release_date = parse_release_date(upstream.release_date)
    if release_date is None:
        logger.debug(
            f"Film ecarte (date invalide {upstream.release_date!r}): {title}"
        )
        return None

    return Movie(
        title=title,
        episode_number=upstream.episode_number,
        opening_text=upstream.opening_text,
        director=upstream.director,
        producer=upstream.producer,
        release_date=release_date,
        provenance=Provenance.EXTERNAL,
        external_ref=upstream.external_ref or None,
    )
