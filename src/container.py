"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour les interfaces CLI, Web
et la synchronisation planifiee.
"""

from dependency_injector import containers, providers

from .adapters.api.swapi_client import SwapiClient
from .config import Settings
from .infrastructure.persistence.database import get_session, init_db
from .infrastructure.persistence.repositories import (
    SQLModelCharacterRepository,
    SQLModelMovieRepository,
)
from .services.run_guard import RunGuard
from .services.sync import SyncCoordinator


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Initialise la DB une fois
        coordinator = container.sync_coordinator()
        report = await coordinator.run()
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Database - Resource pour initialisation unique
    database = providers.Resource(init_db)

    # Session factory - nouvelle session a chaque appel
    session = providers.Factory(lambda: next(get_session()))

    # Repositories - Factory pour nouvelle instance avec session fraiche
    movie_repository = providers.Factory(
        SQLModelMovieRepository,
        session=session,
    )
    character_repository = providers.Factory(
        SQLModelCharacterRepository,
        session=session,
    )

    # Client du catalogue - Singleton (un seul pool de connexions HTTP)
    catalog_client = providers.Singleton(
        SwapiClient,
        base_url=config.provided.swapi_base_url,
        verify_ssl=config.provided.swapi_verify_ssl,
        timeout=config.provided.swapi_timeout_seconds,
        max_attempts=config.provided.swapi_max_attempts,
    )

    # Verrou mono-execution - Singleton : partage par tous les declencheurs
    run_guard = providers.Singleton(RunGuard)

    # Coordinateur - Factory car depend de repositories (sessions fraiches)
    sync_coordinator = providers.Factory(
        SyncCoordinator,
        movie_repo=movie_repository,
        character_repo=character_repository,
        catalog_client=catalog_client,
        run_guard=run_guard,
    )
