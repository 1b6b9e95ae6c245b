"""
Interfaces ports pour les clients API.

Interface abstraite (port) définissant le contrat du catalogue externe.
L'implémentation (adaptateur) fournit le client concret (SWAPI).
Les listes retournées sont déjà aplaties : la pagination amont est
gérée entièrement par l'adaptateur.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class UpstreamMovie:
    """
    Film tel que publié par le catalogue externe.

    Attributs :
        title : Titre (peut être vide si la donnée amont est incomplète)
        release_date : Date de sortie brute, non validée
        external_ref : Identifiant opaque du film dans le catalogue
        character_refs : Identifiants opaques des personnages du film
    """

    title: str
    release_date: str
    external_ref: str
    episode_number: Optional[int] = None
    opening_text: Optional[str] = None
    director: Optional[str] = None
    producer: Optional[str] = None
    character_refs: list[str] = field(default_factory=list)


@dataclass
class UpstreamCharacter:
    """Personnage tel que publié par le catalogue externe."""

    name: str
    external_ref: str
    height: Optional[int] = None
    mass: Optional[int] = None
    hair_color: Optional[str] = None
    skin_color: Optional[str] = None
    eye_color: Optional[str] = None
    birth_year: Optional[str] = None
    gender: Optional[str] = None


class ICatalogClient(ABC):
    """
    Interface du catalogue externe de films et personnages.

    Les deux méthodes lèvent UpstreamError en cas d'échec réseau ou HTTP.
    """

    @abstractmethod
    async def fetch_movies(self) -> list[UpstreamMovie]:
        """Récupère la liste complète des films du catalogue."""
        ...

    @abstractmethod
    async def fetch_characters(self) -> list[UpstreamCharacter]:
        """Récupère la liste complète des personnages du catalogue."""
        ...

    @property
    @abstractmethod
    def source(self) -> str:
        """Retourne l'identifiant du catalogue (ex: 'swapi')."""
        ...
