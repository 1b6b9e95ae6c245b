"""
Holocron - Catalogue de films et personnages synchronise avec SWAPI.

Ce package fournit le stockage des films et personnages (internes ou issus
du catalogue Star Wars) et le moteur de synchronisation qui remplace
periodiquement la copie locale des donnees externes.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entités, ports, erreurs)
- services/ : Couche application (synchronisation, réconciliation)
- adapters/ : Adaptateurs (CLI, client SWAPI)
- infrastructure/ : Persistance SQLModel
- web/ : API FastAPI
"""
