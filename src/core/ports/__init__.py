"""
Ports (interfaces abstraites) définissant les contrats pour les adaptateurs.

Ports repository : Contrats de persistance des données
- IMovieRepository : Stockage des films et des associations
- ICharacterRepository : Stockage des personnages

Ports client API : Contrat du catalogue externe
- ICatalogClient : Récupération des films et personnages
- UpstreamMovie, UpstreamCharacter : Enregistrements amont bruts
"""

from src.core.ports.repositories import (
    ICharacterRepository,
    IMovieRepository,
)
from src.core.ports.api_clients import (
    ICatalogClient,
    UpstreamCharacter,
    UpstreamMovie,
)

__all__ = [
    # Repositories
    "IMovieRepository",
    "ICharacterRepository",
    # Client catalogue
    "ICatalogClient",
    "UpstreamMovie",
    "UpstreamCharacter",
]
