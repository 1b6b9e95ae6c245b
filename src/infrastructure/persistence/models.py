"""
Modeles SQLModel pour la base de donnees Holocron.

Ces modeles representent les tables de la base de donnees SQLite.
Ils sont distincts des entites de domaine (dataclass dans core/entities/)
selon l'architecture hexagonale.

Tables:
- movies: Films (internes ou synchronises depuis le catalogue)
- characters: Personnages (internes ou synchronises depuis le catalogue)
- movie_character_links: Table d'association films/personnages

La colonne provenance vaut "internal" ou "external" (voir Provenance).
external_ref est unique parmi les lignes externes (index unique partiel) ;
une ligne interne peut la laisser a NULL ou reprendre une URL amont.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

from sqlalchemy import Index, text
from sqlmodel import Field, SQLModel


def _utcnow() -> datetime:
    """Horodatage UTC avec fuseau (les colonnes datetime exigent un tzinfo)."""
    return datetime.now(timezone.utc)


def _unique_external_ref(table: str) -> Index:
    """Index unique sur external_ref, restreint aux lignes externes."""
    return Index(
        f"uq_{table}_external_ref",
        "external_ref",
        unique=True,
        sqlite_where=text("provenance = 'external'"),
        postgresql_where=text("provenance = 'external'"),
    )


class MovieCharacterLinkModel(SQLModel, table=True):
    """
    Association entre un film et un personnage.

    La paire (movie_id, character_id) est la cle primaire : un lien
    n'existe qu'une fois et n'a pas de cycle de vie propre.
    """

    __tablename__ = "movie_character_links"

    movie_id: int = Field(foreign_key="movies.id", primary_key=True)
    character_id: int = Field(foreign_key="characters.id", primary_key=True, index=True)


class MovieModel(SQLModel, table=True):
    """
    Modele representant un film dans la base de donnees.
    """

    __tablename__ = "movies"
    __table_args__ = (_unique_external_ref("movies"),)

    id: int | None = Field(default=None, primary_key=True)
    title: str = Field(index=True)
    episode_number: int | None = None
    opening_text: str | None = None  # Texte deroulant d'introduction
    story_line: str | None = None
    director: str | None = None
    producer: str | None = None
    release_date: date | None = None
    provenance: str = Field(default="internal", index=True)
    external_ref: str | None = Field(default=None, index=True)  # URL amont
    created_at: datetime | None = Field(default_factory=_utcnow)
    updated_at: datetime | None = Field(default_factory=_utcnow)


class CharacterModel(SQLModel, table=True):
    """
    Modele representant un personnage dans la base de donnees.

    Les attributs physiques sont optionnels (souvent "unknown" en amont).
    """

    __tablename__ = "characters"
    __table_args__ = (_unique_external_ref("characters"),)

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    height: int | None = None  # cm
    mass: int | None = None  # kg
    hair_color: str | None = None
    skin_color: str | None = None
    eye_color: str | None = None
    birth_year: str | None = None  # ex: "19BBY"
    gender: str | None = None
    provenance: str = Field(default="internal", index=True)
    external_ref: str | None = Field(default=None, index=True)
    created_at: datetime | None = Field(default_factory=_utcnow)
    updated_at: datetime | None = Field(default_factory=_utcnow)
