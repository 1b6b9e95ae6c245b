"""
Routes de consultation du catalogue (lecture seule).

Expose les films et personnages, toutes provenances confondues,
avec pagination simple offset/limit et filtre optionnel par provenance.
"""

from dataclasses import asdict
from datetime import date
from typing import Annotated, Optional

from fastapi import APIRouter, HTTPException, Query, Request, status
from pydantic import BaseModel

from ...core.entities.catalog import Provenance

router = APIRouter(tags=["catalog"])


class MovieOut(BaseModel):
    """Film expose par l'API."""

    id: int
    title: str
    episode_number: Optional[int] = None
    opening_text: Optional[str] = None
    story_line: Optional[str] = None
    director: Optional[str] = None
    producer: Optional[str] = None
    release_date: Optional[date] = None
    provenance: Provenance
    external_ref: Optional[str] = None
    character_ids: list[int] = []


class CharacterOut(BaseModel):
    """Personnage expose par l'API."""

    id: int
    name: str
    height: Optional[int] = None
    mass: Optional[int] = None
    hair_color: Optional[str] = None
    skin_color: Optional[str] = None
    eye_color: Optional[str] = None
    birth_year: Optional[str] = None
    gender: Optional[str] = None
    provenance: Provenance
    external_ref: Optional[str] = None
    movie_ids: list[int] = []


class Page(BaseModel):
    """Enveloppe de pagination."""

    offset: int
    limit: int
    total: int


class MoviePage(Page):
    data: list[MovieOut]


class CharacterPage(Page):
    data: list[CharacterOut]


Offset = Annotated[int, Query(ge=0)]
Limit = Annotated[int, Query(ge=1, le=500)]


@router.get("/movies", response_model=MoviePage)
async def list_movies(
    request: Request,
    offset: Offset = 0,
    limit: Limit = 50,
    source: Optional[Provenance] = None,
) -> MoviePage:
    """Liste les films."""
    repo = request.app.state.container.movie_repository()
    movies = repo.list_all(provenance=source, offset=offset, limit=limit)
    return MoviePage(
        offset=offset,
        limit=limit,
        total=repo.count(provenance=source),
        data=[MovieOut(**asdict(movie)) for movie in movies],
    )


@router.get("/movies/{movie_id}", response_model=MovieOut)
async def get_movie(request: Request, movie_id: int) -> MovieOut:
    """Detail d'un film, avec les IDs de ses personnages."""
    movie = request.app.state.container.movie_repository().get_by_id(movie_id)
    if movie is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Movie not found")
    return MovieOut(**asdict(movie))


@router.get("/characters", response_model=CharacterPage)
async def list_characters(
    request: Request,
    offset: Offset = 0,
    limit: Limit = 50,
    source: Optional[Provenance] = None,
) -> CharacterPage:
    """Liste les personnages."""
    repo = request.app.state.container.character_repository()
    characters = repo.list_all(provenance=source, offset=offset, limit=limit)
    return CharacterPage(
        offset=offset,
        limit=limit,
        total=repo.count(provenance=source),
        data=[CharacterOut(**asdict(character)) for character in characters],
    )


@router.get("/characters/{character_id}", response_model=CharacterOut)
async def get_character(request: Request, character_id: int) -> CharacterOut:
    """Detail d'un personnage, avec les IDs de ses films."""
    character = request.app.state.container.character_repository().get_by_id(character_id)
    if character is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Character not found")
    return CharacterOut(**asdict(character))
