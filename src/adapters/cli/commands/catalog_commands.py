"""
Commandes CLI de consultation du catalogue (films, personnages).
"""

import asyncio
from typing import Annotated, Optional

import typer
from rich.table import Table

from src.adapters.cli.helpers import console, with_container
from src.core.entities.catalog import Provenance


def movies(
    source: Annotated[
        Optional[Provenance],
        typer.Option("--source", "-s", help="Filtrer par provenance"),
    ] = None,
    limit: Annotated[
        int,
        typer.Option("--limit", "-l", help="Nombre maximum de films affiches"),
    ] = 50,
) -> None:
    """Liste les films du catalogue."""
    asyncio.run(_movies_async(source, limit))


@with_container()
async def _movies_async(container, source: Optional[Provenance], limit: int) -> None:
    repo = container.movie_repository()
    rows = repo.list_all(provenance=source, limit=limit)
    if not rows:
        console.print("[yellow]Aucun film.[/yellow]")
        return

    table = Table(title=f"Films ({repo.count(provenance=source)})")
    table.add_column("ID", justify="right")
    table.add_column("Ep.", justify="right")
    table.add_column("Titre")
    table.add_column("Sortie")
    table.add_column("Provenance")
    for movie in rows:
        table.add_row(
            str(movie.id),
            str(movie.episode_number) if movie.episode_number is not None else "-",
            movie.title,
            movie.release_date.isoformat() if movie.release_date else "-",
            movie.provenance.value,
        )
    console.print(table)


def characters(
    source: Annotated[
        Optional[Provenance],
        typer.Option("--source", "-s", help="Filtrer par provenance"),
    ] = None,
    limit: Annotated[
        int,
        typer.Option("--limit", "-l", help="Nombre maximum de personnages affiches"),
    ] = 50,
) -> None:
    """Liste les personnages du catalogue."""
    asyncio.run(_characters_async(source, limit))


@with_container()
async def _characters_async(container, source: Optional[Provenance], limit: int) -> None:
    repo = container.character_repository()
    rows = repo.list_all(provenance=source, limit=limit)
    if not rows:
        console.print("[yellow]Aucun personnage.[/yellow]")
        return

    table = Table(title=f"Personnages ({repo.count(provenance=source)})")
    table.add_column("ID", justify="right")
    table.add_column("Nom")
    table.add_column("Naissance")
    table.add_column("Genre")
    table.add_column("Provenance")
    for character in rows:
        table.add_row(
            str(character.id),
            character.name,
            character.birth_year or "-",
            character.gender or "-",
            character.provenance.value,
        )
    console.print(table)
