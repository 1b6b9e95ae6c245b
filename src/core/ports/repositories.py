"""
Interfaces ports pour les repositories.

Interfaces abstraites (ports) définissant les contrats pour la persistance des données.
Les implémentations (adaptateurs) fournissent les mécanismes de stockage concrets
(SQLite via SQLModel).

Les opérations d'écriture en masse sont atomiques : soit tout est écrit,
soit rien, et l'échec est signalé par PersistenceError.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from typing import Optional

from src.core.entities.catalog import Character, Movie, Provenance


class ICharacterRepository(ABC):
    """
    Interface de stockage des personnages.

    Définit les opérations pour persister et récupérer les entités Character.
    """

    @abstractmethod
    def get_by_id(self, character_id: int) -> Optional[Character]:
        """Récupère un personnage par son ID interne, avec ses films."""
        ...

    @abstractmethod
    def list_all(
        self,
        provenance: Optional[Provenance] = None,
        offset: int = 0,
        limit: int = 100,
    ) -> list[Character]:
        """Liste les personnages, avec filtrage optionnel par provenance."""
        ...

    @abstractmethod
    def count(self, provenance: Optional[Provenance] = None) -> int:
        """Compte les personnages, avec filtrage optionnel par provenance."""
        ...

    @abstractmethod
    def bulk_insert(self, characters: Sequence[Character]) -> list[Character]:
        """Insère tous les personnages en une transaction et les retourne avec leur ID."""
        ...

    @abstractmethod
    def delete_by_provenance(self, provenance: Provenance) -> int:
        """Supprime les personnages d'une provenance et leurs liens. Retourne le nombre supprimé."""
        ...


class IMovieRepository(ABC):
    """
    Interface de stockage des films et de la table d'association films/personnages.
    """

    @abstractmethod
    def get_by_id(self, movie_id: int) -> Optional[Movie]:
        """Récupère un film par son ID interne, avec ses personnages."""
        ...

    @abstractmethod
    def list_all(
        self,
        provenance: Optional[Provenance] = None,
        offset: int = 0,
        limit: int = 100,
    ) -> list[Movie]:
        """Liste les films, avec filtrage optionnel par provenance."""
        ...

    @abstractmethod
    def count(self, provenance: Optional[Provenance] = None) -> int:
        """Compte les films, avec filtrage optionnel par provenance."""
        ...

    @abstractmethod
    def count_links(self, provenance: Optional[Provenance] = None) -> int:
        """Compte les associations, avec filtrage optionnel par provenance du film."""
        ...

    @abstractmethod
    def bulk_insert(self, movies: Sequence[Movie]) -> list[Movie]:
        """Insère tous les films en une transaction et les retourne avec leur ID."""
        ...

    @abstractmethod
    def delete_by_provenance(self, provenance: Provenance) -> int:
        """Supprime les films d'une provenance et leurs liens. Retourne le nombre supprimé."""
        ...

    @abstractmethod
    def replace_associations(self, movie_id: int, character_ids: Iterable[int]) -> None:
        """
        Remplace l'ensemble des personnages associés à un film.

        Les liens existants sont supprimés puis l'ensemble fourni est inséré,
        dans une seule transaction. Appeler deux fois avec le même ensemble
        donne le même état final.
        """
        ...

    @abstractmethod
    def list_character_ids(self, movie_id: int) -> list[int]:
        """Liste les IDs des personnages associés à un film."""
        ...
