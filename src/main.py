"""
Point d'entrée CLI de Holocron.

Initialise le container DI, configure le logging et fournit les commandes CLI.
"""

from typing import Annotated

import typer
from loguru import logger

from .adapters.cli.commands import characters, movies, sync
from .config import Settings
from .container import Container
from .logging_config import configure_logging

__version__ = "0.1.0"

app = typer.Typer(
    name="holocron",
    help="Catalogue de films et personnages synchronise avec SWAPI",
)
container = Container()


# Monter les commandes depuis commands/
app.command()(sync)
app.command()(movies)
app.command()(characters)


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    typer.echo(f"Base de données : {config.database_url}")
    typer.echo(f"Catalogue : {config.swapi_base_url}")
    typer.echo(f"Vérification TLS : {'activée' if config.swapi_verify_ssl else 'désactivée'}")
    if config.sync_schedule_enabled:
        typer.echo(
            f"Synchronisation planifiée : "
            f"{config.sync_cron_hour:02d}:{config.sync_cron_minute:02d}"
        )
    else:
        typer.echo("Synchronisation planifiée : désactivée")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"Holocron v{__version__}")


@app.command()
def serve(
    host: Annotated[str, typer.Option(help="Adresse d'écoute")] = "0.0.0.0",
    port: Annotated[int, typer.Option(help="Port d'écoute")] = 8000,
    reload: Annotated[bool, typer.Option(help="Rechargement automatique")] = False,
) -> None:
    """Lance le serveur web Holocron (API + synchronisation planifiée)."""
    import uvicorn

    typer.echo(f"Démarrage du serveur sur {host}:{port}")
    uvicorn.run("src.web.app:app", host=host, port=port, reload=reload)


def main() -> None:
    """Point d'entrée de l'application."""
    settings = container.config()
    configure_logging(
        log_level=settings.log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )

    logger.info("Démarrage de Holocron", version=__version__)

    app()


if __name__ == "__main__":
    main()
