"""
Commande CLI de synchronisation du catalogue.

Contrairement au declenchement HTTP, la commande attend l'issue de la
synchronisation et la traduit en code de sortie :
0 succes, 1 echec, 2 synchronisation deja en cours.
"""

import asyncio

import typer

from src.adapters.cli.helpers import console, with_container
from src.core.errors import SyncConflictError, SyncInternalError

EXIT_FAILURE = 1
EXIT_CONFLICT = 2


def sync() -> None:
    """Synchronise les films et personnages depuis le catalogue SWAPI."""
    exit_code = asyncio.run(_sync_async())
    if exit_code:
        raise typer.Exit(code=exit_code)


@with_container()
async def _sync_async(container) -> int:
    """Implementation async de la commande sync."""
    coordinator = container.sync_coordinator()
    try:
        with console.status("[cyan]Synchronisation du catalogue...[/cyan]"):
            report = await coordinator.run()
    except SyncConflictError:
        console.print("[yellow]Une synchronisation est deja en cours.[/yellow]")
        return EXIT_CONFLICT
    except SyncInternalError as e:
        console.print(f"[red]Echec de la synchronisation[/red] (etape {e.stage})")
        console.print("[dim]Details dans le fichier de log.[/dim]")
        return EXIT_FAILURE
    finally:
        await container.catalog_client().close()

    console.print("\n[bold]Resume:[/bold]")
    console.print(
        f"  [dim]{report.purged_movies} film(s) et "
        f"{report.purged_characters} personnage(s) purge(s)[/dim]"
    )
    console.print(f"  [green]{report.characters_created}[/green] personnage(s)")
    console.print(f"  [green]{report.movies_created}[/green] film(s)")
    if report.movies_skipped > 0:
        console.print(f"  [yellow]{report.movies_skipped}[/yellow] film(s) ecarte(s)")
    console.print(f"  [green]{report.links_created}[/green] lien(s)")
    if report.unresolved_refs > 0:
        console.print(f"  [dim]{report.unresolved_refs} reference(s) non resolue(s)[/dim]")
    console.print(f"  [dim]{report.duration_seconds}s[/dim]")
    return 0
