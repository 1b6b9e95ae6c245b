"""
Service de synchronisation du catalogue externe.

Remplace integralement les films et personnages de provenance externe
par les donnees fraiches du catalogue, puis reconstruit leurs associations.

Deroulement d'une synchronisation (strictement sequentiel) :
1. Purge : personnages externes, puis films externes (liens compris)
2. Personnages : recuperation, conversion, insertion en masse
3. Films : recuperation, politique d'admission, insertion en masse
4. Associations : reconciliation puis remplacement des liens par film

Une seule synchronisation a la fois par processus (RunGuard). Tout echec
d'etape interrompt la synchronisation, est journalise puis remonte sous
forme de SyncInternalError ; le verrou est toujours relache.
"""

import asyncio
import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum

from loguru import logger

from src.core.entities.catalog import Character, Provenance
from src.core.errors import SyncInternalError
from src.core.ports.api_clients import ICatalogClient, UpstreamCharacter
from src.core.ports.repositories import ICharacterRepository, IMovieRepository
from src.services.admission import admit_movie
from src.services.reconciler import reconcile
from src.services.run_guard import RunGuard


class SyncStage(str, Enum):
    """Etapes d'une synchronisation, dans l'ordre d'execution."""

    PURGE = "purge"
    CHARACTERS = "characters"
    MOVIES = "movies"
    ASSOCIATIONS = "associations"


@dataclass
class SyncReport:
    """Bilan d'une synchronisation reussie."""

    purged_characters: int = 0
    purged_movies: int = 0
    characters_created: int = 0
    movies_created: int = 0
    movies_skipped: int = 0
    links_created: int = 0
    unresolved_refs: int = 0
    duration_seconds: float = 0.0


def to_character(upstream: UpstreamCharacter) -> Character:
    """Convertit un personnage amont en personnage local de provenance externe."""
    return Character(
        name=upstream.name,
        height=upstream.height,
        mass=upstream.mass,
        hair_color=upstream.hair_color,
        skin_color=upstream.skin_color,
        eye_color=upstream.eye_color,
        birth_year=upstream.birth_year,
        gender=upstream.gender,
        provenance=Provenance.EXTERNAL,
        external_ref=upstream.external_ref or None,
    )


class SyncCoordinator:
    """
    Orchestrateur d'une synchronisation complete du catalogue.

    Le RunGuard doit etre partage entre toutes les instances (singleton
    du container) pour que l'exclusion couvre tous les declencheurs.

    Example:
        coordinator = container.sync_coordinator()
        report = await coordinator.run()
    """

    def __init__(
        self,
        movie_repo: IMovieRepository,
        character_repo: ICharacterRepository,
        catalog_client: ICatalogClient,
        run_guard: RunGuard,
    ) -> None:
        self._movie_repo = movie_repo
        self._character_repo = character_repo
        self._catalog = catalog_client
        self._guard = run_guard

    @property
    def running(self) -> bool:
        """True si une synchronisation est en cours dans ce processus."""
        return self._guard.running

    async def run(self) -> SyncReport:
        """
        Execute une synchronisation et attend son issue.

        Returns:
            Le bilan de la synchronisation

        Raises:
            SyncConflictError: Si une synchronisation est deja en cours (aucun effet)
            SyncInternalError: Si une etape echoue (cause chainee)
        """
        with self._guard.hold():
            return await self._execute()

    def launch(self) -> "asyncio.Task[SyncReport]":
        """
        Demarre une synchronisation en tache de fond.

        Le verrou est pris immediatement, avant de rendre la main : un
        conflit est donc signale a l'appelant et non a la tache. Le verrou
        est relache a la fin de la tache, quelle que soit son issue.

        Returns:
            La tache asyncio portant le SyncReport (ou l'exception)

        Raises:
            SyncConflictError: Si une synchronisation est deja en cours
        """
        self._guard.acquire()
        try:
            return asyncio.get_running_loop().create_task(self._execute_then_release())
        except BaseException:
            self._guard.release()
            raise

    async def _execute_then_release(self) -> SyncReport:
        try:
            return await self._execute()
        finally:
            self._guard.release()

    @contextmanager
    def _stage(self, stage: SyncStage) -> Iterator[None]:
        """Journalise l'etape et convertit tout echec en SyncInternalError."""
        logger.debug(f"Synchronisation: etape {stage.value}")
        try:
            yield
        except Exception as e:
            logger.opt(exception=e).error(
                f"Synchronisation interrompue a l'etape {stage.value}: {e}"
            )
            raise SyncInternalError(stage.value) from e

    async def _execute(self) -> SyncReport:
        """Enchaine les quatre etapes. Le verrou doit etre detenu par l'appelant."""
        report = SyncReport()
        started = time.monotonic()
        logger.info(f"Synchronisation du catalogue {self._catalog.source} demarree")

        with self._stage(SyncStage.PURGE):
            report.purged_characters = self._character_repo.delete_by_provenance(
                Provenance.EXTERNAL
            )
            report.purged_movies = self._movie_repo.delete_by_provenance(
                Provenance.EXTERNAL
            )

        with self._stage(SyncStage.CHARACTERS):
            upstream_characters = await self._catalog.fetch_characters()
            characters = self._character_repo.bulk_insert(
                [to_character(upstream) for upstream in upstream_characters]
            )
            report.characters_created = len(characters)
            logger.info(f"{len(characters)} personnage(s) synchronise(s)")

        with self._stage(SyncStage.MOVIES):
            upstream_movies = await self._catalog.fetch_movies()
            admitted = []
            for upstream in upstream_movies:
                movie = admit_movie(upstream)
                if movie is None:
                    report.movies_skipped += 1
                else:
                    admitted.append(movie)
            movies = self._movie_repo.bulk_insert(admitted)
            report.movies_created = len(movies)
            logger.info(
                f"{len(movies)} film(s) synchronise(s), {report.movies_skipped} ecarte(s)"
            )

        with self._stage(SyncStage.ASSOCIATIONS):
            for associations in reconcile(characters, movies, upstream_movies):
                self._movie_repo.replace_associations(
                    associations.movie_id, associations.character_ids
                )
                report.links_created += len(associations.character_ids)
                report.unresolved_refs += associations.unresolved

        report.duration_seconds = round(time.monotonic() - started, 3)
        logger.info(
            f"Synchronisation terminee: {report.movies_created} film(s), "
            f"{report.characters_created} personnage(s), {report.links_created} lien(s) "
            f"en {report.duration_seconds}s"
        )
        return report
