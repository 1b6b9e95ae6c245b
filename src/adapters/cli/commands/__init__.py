"""Sous-package CLI commands - re-exporte les commandes publiques."""

from src.adapters.cli.commands.catalog_commands import (
    characters,
    movies,
)
from src.adapters.cli.commands.sync_commands import (
    sync,
)

__all__ = [
    # sync
    "sync",
    # catalogue
    "movies",
    "characters",
]
