"""
Implementation SQLModel du repository Movie.

Implemente l'interface IMovieRepository pour la persistance des films
et de la table d'association films/personnages dans la base de donnees
SQLite via SQLModel.
"""

from collections.abc import Iterable, Sequence
from typing import Optional

from loguru import logger
from sqlalchemy import delete, func, insert
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from src.core.entities.catalog import Movie, Provenance
from src.core.errors import PersistenceError
from src.core.ports.repositories import IMovieRepository
from src.infrastructure.persistence.models import MovieCharacterLinkModel, MovieModel


class SQLModelMovieRepository(IMovieRepository):
    """
    Repository SQLModel pour les films.

    Implemente IMovieRepository avec conversion bidirectionnelle
    entre l'entite Movie (domaine) et MovieModel (persistance).
    Les liens sont manipules via des requetes directes sur la table
    d'association, jamais charges comme objets ORM.
    """

    def __init__(self, session: Session) -> None:
        """
        Initialise le repository avec une session SQLModel.

        Args :
            session : Session SQLModel active pour les operations DB
        """
        self._session = session

    def _to_entity(self, model: MovieModel, character_ids: Sequence[int] = ()) -> Movie:
        """
        Convertit un modele DB en entite domaine.

        Args :
            model : Le modele MovieModel depuis la DB
            character_ids : IDs des personnages associes (si charges)

        Retourne :
            L'entite Movie correspondante
        """
        return Movie(
            id=model.id,
            title=model.title,
            episode_number=model.episode_number,
            opening_text=model.opening_text,
            story_line=model.story_line,
            director=model.director,
            producer=model.producer,
            release_date=model.release_date,
            provenance=Provenance(model.provenance),
            external_ref=model.external_ref,
            character_ids=tuple(character_ids),
        )

    def _to_model(self, entity: Movie) -> MovieModel:
        """Convertit une entite domaine en modele DB (sans ID : toujours une insertion)."""
        return MovieModel(
            title=entity.title,
            episode_number=entity.episode_number,
            opening_text=entity.opening_text,
            story_line=entity.story_line,
            director=entity.director,
            producer=entity.producer,
            release_date=entity.release_date,
            provenance=entity.provenance.value,
            external_ref=entity.external_ref,
        )

    def get_by_id(self, movie_id: int) -> Optional[Movie]:
        """Recupere un film par son ID interne, avec ses personnages."""
        model = self._session.get(MovieModel, movie_id)
        if model is None:
            return None
        return self._to_entity(model, self.list_character_ids(movie_id))

    def list_all(
        self,
        provenance: Optional[Provenance] = None,
        offset: int = 0,
        limit: int = 100,
    ) -> list[Movie]:
        """Liste les films par ID croissant."""
        statement = select(MovieModel)
        if provenance is not None:
            statement = statement.where(MovieModel.provenance == provenance.value)
        statement = statement.order_by(MovieModel.id).offset(offset).limit(limit)
        return [self._to_entity(model) for model in self._session.exec(statement).all()]

    def count(self, provenance: Optional[Provenance] = None) -> int:
        """Compte les films."""
        statement = select(func.count()).select_from(MovieModel)
        if provenance is not None:
            statement = statement.where(MovieModel.provenance == provenance.value)
        return self._session.exec(statement).one()

    def count_links(self, provenance: Optional[Provenance] = None) -> int:
        """Compte les associations, filtrees par provenance du film."""
        statement = select(func.count()).select_from(MovieCharacterLinkModel)
        if provenance is not None:
            statement = statement.join(
                MovieModel, MovieModel.id == MovieCharacterLinkModel.movie_id
            ).where(MovieModel.provenance == provenance.value)
        return self._session.exec(statement).one()

    def list_character_ids(self, movie_id: int) -> list[int]:
        """Liste les IDs des personnages associes a un film (ordre croissant)."""
        statement = (
            select(MovieCharacterLinkModel.character_id)
            .where(MovieCharacterLinkModel.movie_id == movie_id)
            .order_by(MovieCharacterLinkModel.character_id)
        )
        return list(self._session.exec(statement).all())

    def bulk_insert(self, movies: Sequence[Movie]) -> list[Movie]:
        """
        Insere tous les films en une seule transaction.

        Raises:
            PersistenceError: Si une ligne echoue ; rien n'est conserve.
        """
        if not movies:
            return []

        models = [self._to_model(movie) for movie in movies]
        try:
            self._session.add_all(models)
            self._session.flush()
            created = [self._to_entity(model) for model in models]
            self._session.commit()
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.error(f"Echec de l'insertion de {len(models)} film(s): {e}")
            raise PersistenceError("Error creating movies") from e

        return created

    def delete_by_provenance(self, provenance: Provenance) -> int:
        """
        Supprime les films d'une provenance, liens compris.

        Raises:
            PersistenceError: Si la suppression echoue (transaction annulee).
        """
        try:
            movie_ids = list(
                self._session.exec(
                    select(MovieModel.id).where(MovieModel.provenance == provenance.value)
                ).all()
            )
            if not movie_ids:
                return 0
            self._session.exec(
                delete(MovieCharacterLinkModel)
                .where(MovieCharacterLinkModel.movie_id.in_(movie_ids))
                .execution_options(synchronize_session=False)
            )
            self._session.exec(
                delete(MovieModel)
                .where(MovieModel.id.in_(movie_ids))
                .execution_options(synchronize_session="fetch")
            )
            self._session.commit()
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.error(f"Echec de la suppression des films {provenance.value}: {e}")
            raise PersistenceError("Error deleting movies") from e

        logger.debug(f"{len(movie_ids)} film(s) {provenance.value} supprime(s)")
        return len(movie_ids)

    def replace_associations(self, movie_id: int, character_ids: Iterable[int]) -> None:
        """
        Remplace les personnages associes a un film (ecrasement, pas fusion).

        Les doublons sont ignores. Une liste vide supprime tous les liens.

        Raises:
            PersistenceError: Si le remplacement echoue (etat precedent conserve).
        """
        unique_ids = list(dict.fromkeys(character_ids))
        try:
            self._session.exec(
                delete(MovieCharacterLinkModel)
                .where(MovieCharacterLinkModel.movie_id == movie_id)
                .execution_options(synchronize_session=False)
            )
            if unique_ids:
                self._session.exec(
                    insert(MovieCharacterLinkModel).values(
                        [
                            {"movie_id": movie_id, "character_id": character_id}
                            for character_id in unique_ids
                        ]
                    )
                )
            self._session.commit()
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.error(f"Echec du remplacement des liens du film {movie_id}: {e}")
            raise PersistenceError("Error updating movie characters") from e
