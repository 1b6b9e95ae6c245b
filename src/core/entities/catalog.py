"""
Catalog entities.

Entities representing movies and characters, either authored locally
or copied from the upstream Star Wars catalog.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional


class Provenance(str, Enum):
    """Origin of a catalog row."""

    INTERNAL = "internal"
    EXTERNAL = "external"


@dataclass
class Movie:
    """
    Movie record.

    Attributes:
        id: Internal database ID
        title: Movie title
        episode_number: Saga episode number
        opening_text: Opening crawl text
        story_line: Free synopsis (internal movies only)
        director: Director name(s)
        producer: Producer name(s)
        release_date: Theatrical release date
        provenance: Internal (user-authored) or external (synchronized)
        external_ref: Upstream identifier, unique when present
        character_ids: IDs of associated characters
    """

    id: Optional[int] = None
    title: str = ""
    episode_number: Optional[int] = None
    opening_text: Optional[str] = None
    story_line: Optional[str] = None
    director: Optional[str] = None
    producer: Optional[str] = None
    release_date: Optional[date] = None
    provenance: Provenance = Provenance.INTERNAL
    external_ref: Optional[str] = None
    character_ids: tuple[int, ...] = field(default_factory=tuple)


@dataclass
class Character:
    """
    Character record.

    Physical attributes are optional: the upstream catalog reports
    "unknown" for many of them.
    """

    id: Optional[int] = None
    name: str = ""
    height: Optional[int] = None
    mass: Optional[int] = None
    hair_color: Optional[str] = None
    skin_color: Optional[str] = None
    eye_color: Optional[str] = None
    birth_year: Optional[str] = None
    gender: Optional[str] = None
    provenance: Provenance = Provenance.INTERNAL
    external_ref: Optional[str] = None
    movie_ids: tuple[int, ...] = field(default_factory=tuple)
