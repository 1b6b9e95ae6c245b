"""
Client du catalogue externe.

Ce module fournit l'adaptateur pour communiquer avec le catalogue Star Wars:
- SwapiClient: implementation de ICatalogClient (core/ports/api_clients.py)

Infrastructure partagee:
- RateLimitError: Exception pour les reponses 429/503
- request_with_retry: requete HTTP avec backoff exponentiel
"""

from src.adapters.api.retry import RateLimitError, request_with_retry, with_retry
from src.adapters.api.swapi_client import SwapiClient

__all__ = [
    "SwapiClient",
    "RateLimitError",
    "with_retry",
    "request_with_retry",
]
