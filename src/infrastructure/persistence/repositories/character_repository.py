"""
Implementation SQLModel du repository Character.

Implemente l'interface ICharacterRepository pour la persistance des personnages
dans la base de donnees SQLite via SQLModel.
"""

from collections.abc import Sequence
from typing import Optional

from loguru import logger
from sqlalchemy import delete, func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from src.core.entities.catalog import Character, Provenance
from src.core.errors import PersistenceError
from src.core.ports.repositories import ICharacterRepository
from src.infrastructure.persistence.models import CharacterModel, MovieCharacterLinkModel


class SQLModelCharacterRepository(ICharacterRepository):
    """
    Repository SQLModel pour les personnages.

    Implemente ICharacterRepository avec conversion bidirectionnelle
    entre l'entite Character (domaine) et CharacterModel (persistance).
    """

    def __init__(self, session: Session) -> None:
        """
        Initialise le repository avec une session SQLModel.

        Args :
            session : Session SQLModel active pour les operations DB
        """
        self._session = session

    def _to_entity(self, model: CharacterModel, movie_ids: Sequence[int] = ()) -> Character:
        """Convertit un modele DB en entite domaine."""
        return Character(
            id=model.id,
            name=model.name,
            height=model.height,
            mass=model.mass,
            hair_color=model.hair_color,
            skin_color=model.skin_color,
            eye_color=model.eye_color,
            birth_year=model.birth_year,
            gender=model.gender,
            provenance=Provenance(model.provenance),
            external_ref=model.external_ref,
            movie_ids=tuple(movie_ids),
        )

    def _to_model(self, entity: Character) -> CharacterModel:
        """Convertit une entite domaine en modele DB (sans ID : toujours une insertion)."""
        return CharacterModel(
            name=entity.name,
            height=entity.height,
            mass=entity.mass,
            hair_color=entity.hair_color,
            skin_color=entity.skin_color,
            eye_color=entity.eye_color,
            birth_year=entity.birth_year,
            gender=entity.gender,
            provenance=entity.provenance.value,
            external_ref=entity.external_ref,
        )

    def get_by_id(self, character_id: int) -> Optional[Character]:
        """Recupere un personnage par son ID interne, avec ses films."""
        model = self._session.get(CharacterModel, character_id)
        if model is None:
            return None
        statement = (
            select(MovieCharacterLinkModel.movie_id)
            .where(MovieCharacterLinkModel.character_id == character_id)
            .order_by(MovieCharacterLinkModel.movie_id)
        )
        movie_ids = self._session.exec(statement).all()
        return self._to_entity(model, movie_ids)

    def list_all(
        self,
        provenance: Optional[Provenance] = None,
        offset: int = 0,
        limit: int = 100,
    ) -> list[Character]:
        """Liste les personnages par ID croissant."""
        statement = select(CharacterModel)
        if provenance is not None:
            statement = statement.where(CharacterModel.provenance == provenance.value)
        statement = statement.order_by(CharacterModel.id).offset(offset).limit(limit)
        return [self._to_entity(model) for model in self._session.exec(statement).all()]

    def count(self, provenance: Optional[Provenance] = None) -> int:
        """Compte les personnages."""
        statement = select(func.count()).select_from(CharacterModel)
        if provenance is not None:
            statement = statement.where(CharacterModel.provenance == provenance.value)
        return self._session.exec(statement).one()

    def bulk_insert(self, characters: Sequence[Character]) -> list[Character]:
        """
        Insere tous les personnages en une seule transaction.

        Raises:
            PersistenceError: Si une ligne echoue ; rien n'est conserve.
        """
        if not characters:
            return []

        models = [self._to_model(character) for character in characters]
        try:
            self._session.add_all(models)
            # flush pour obtenir les IDs avant le commit (qui expire les instances)
            self._session.flush()
            created = [self._to_entity(model) for model in models]
            self._session.commit()
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.error(f"Echec de l'insertion de {len(models)} personnage(s): {e}")
            raise PersistenceError("Error creating characters") from e

        return created

    def delete_by_provenance(self, provenance: Provenance) -> int:
        """
        Supprime les personnages d'une provenance, liens compris.

        Les liens referencant ces personnages sont supprimes dans la meme
        transaction. Aucune ligne correspondante n'est pas une erreur.

        Raises:
            PersistenceError: Si la suppression echoue (transaction annulee).
        """
        try:
            character_ids = list(
                self._session.exec(
                    select(CharacterModel.id).where(
                        CharacterModel.provenance == provenance.value
                    )
                ).all()
            )
            if not character_ids:
                return 0
            self._session.exec(
                delete(MovieCharacterLinkModel)
                .where(MovieCharacterLinkModel.character_id.in_(character_ids))
                .execution_options(synchronize_session=False)
            )
            self._session.exec(
                delete(CharacterModel)
                .where(CharacterModel.id.in_(character_ids))
                .execution_options(synchronize_session="fetch")
            )
            self._session.commit()
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.error(f"Echec de la suppression des personnages {provenance.value}: {e}")
            raise PersistenceError("Error deleting characters") from e

        logger.debug(f"{len(character_ids)} personnage(s) {provenance.value} supprime(s)")
        return len(character_ids)
