"""
Fixtures pytest partagees pour les tests Holocron.

Ce module contient les fixtures communes utilisees dans les tests:
- Base SQLite en memoire et session SQLModel
- Repositories branches sur cette session
- Faux catalogue externe (AsyncMock de ICatalogClient)
- Settings de test avec chemins temporaires
"""

from pathlib import Path
from typing import Iterator
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from src.config import Settings
from src.core.ports.api_clients import ICatalogClient
from src.infrastructure.persistence import models  # noqa: F401
from src.infrastructure.persistence.database import enable_sqlite_foreign_keys
from src.infrastructure.persistence.repositories import (
    SQLModelCharacterRepository,
    SQLModelMovieRepository,
)
from src.services.run_guard import RunGuard
from src.services.sync import SyncCoordinator


@pytest.fixture
def engine():
    """Engine SQLite en memoire, partage entre connexions (StaticPool)."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine) -> Iterator[Session]:
    """Session SQLModel sur la base en memoire."""
    with Session(engine) as session:
        yield session


@pytest.fixture
def movie_repo(session: Session) -> SQLModelMovieRepository:
    """Repository des films sur la base en memoire."""
    return SQLModelMovieRepository(session)


@pytest.fixture
def character_repo(session: Session) -> SQLModelCharacterRepository:
    """Repository des personnages sur la base en memoire."""
    return SQLModelCharacterRepository(session)


@pytest.fixture
def catalog_client() -> AsyncMock:
    """
    Faux catalogue externe.

    Retourne des listes vides par defaut ; configurer fetch_movies et
    fetch_characters dans chaque test.
    """
    client = AsyncMock(spec=ICatalogClient)
    client.fetch_movies.return_value = []
    client.fetch_characters.return_value = []
    client.source = "fake"
    return client


@pytest.fixture
def run_guard() -> RunGuard:
    """Verrou de synchronisation neuf."""
    return RunGuard()


@pytest.fixture
def coordinator(movie_repo, character_repo, catalog_client, run_guard) -> SyncCoordinator:
    """Coordinateur branche sur la base en memoire et le faux catalogue."""
    return SyncCoordinator(
        movie_repo=movie_repo,
        character_repo=character_repo,
        catalog_client=catalog_client,
        run_guard=run_guard,
    )


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings de test avec base et logs dans un repertoire temporaire."""
    return Settings(
        database_url=f"sqlite:///{tmp_path}/test.db",
        swapi_base_url="https://swapi.test/api",
        sync_schedule_enabled=False,
        log_file=tmp_path / "test.log",
    )
