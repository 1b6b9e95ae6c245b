"""
Business entities representing core domain concepts.

Exports:
- Movie: Movie record (internal or synchronized)
- Character: Character record (internal or synchronized)
- Provenance: Origin tag of a record
"""

from src.core.entities.catalog import Character, Movie, Provenance

__all__ = [
    "Movie",
    "Character",
    "Provenance",
]
