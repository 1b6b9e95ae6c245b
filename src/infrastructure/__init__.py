"""
Couche infrastructure de Holocron.

Ce module contient les implementations concretes des ports de stockage :

- persistence/ : Stockage SQLite avec SQLModel (modeles et repositories)
"""
