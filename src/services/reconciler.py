"""
Reconciliation des associations films/personnages.

Transforme les listes de references personnages publiees par le catalogue
en IDs locaux, a partir des lignes fraichement inserees. Aucune I/O :
le resultat est ensuite applique par le coordinateur via
IMovieRepository.replace_associations.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from src.core.entities.catalog import Character, Movie
from src.core.ports.api_clients import UpstreamMovie


@dataclass(frozen=True)
class MovieAssociations:
    """
    Ensemble resolu des personnages d'un film.

    Attributs :
        movie_id : ID local du film
        character_ids : IDs locaux resolus, sans doublon, dans l'ordre amont
        unresolved : Nombre de references sans personnage local
    """

    movie_id: int
    character_ids: tuple[int, ...]
    unresolved: int = 0


def reconcile(
    characters: Iterable[Character],
    movies: Iterable[Movie],
    upstream_movies: Iterable[UpstreamMovie],
) -> list[MovieAssociations]:
    """
    Calcule les associations de chaque film insere.

    Les references sans correspondance sont ignorees (le catalogue peut
    citer des personnages hors du lot recupere). Les references en double
    ne produisent qu'une association.

    Args:
        characters: Personnages inseres (ID local + external_ref)
        movies: Films inseres (ID local + external_ref)
        upstream_movies: Films amont bruts, porteurs des listes de references

    Returns:
        Une entree par film insere ayant au moins une reference amont,
        eventuellement avec un ensemble vide.
    """
    character_ids_by_ref = {
        character.external_ref: character.id
        for character in characters
        if character.external_ref and character.id is not None
    }
    upstream_by_ref = {movie.external_ref: movie for movie in upstream_movies}

    associations: list[MovieAssociations] = []
    for movie in movies:
        upstream = upstream_by_ref.get(movie.external_ref)
        if movie.id is None or upstream is None or not upstream.character_refs:
            continue

        resolved: dict[int, None] = {}
        unresolved = 0
        for ref in upstream.character_refs:
            character_id = character_ids_by_ref.get(ref)
            if character_id is None:
                unresolved += 1
            else:
                resolved[character_id] = None

        associations.append(
            MovieAssociations(
                movie_id=movie.id,
                character_ids=tuple(resolved),
                unresolved=unresolved,
            )
        )

    return associations
