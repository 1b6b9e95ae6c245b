"""
Couche domaine (core).

Contient les entités métier, ports (interfaces abstraites) et erreurs.
Cette couche n'a AUCUNE dépendance vers l'infrastructure (adapters, frameworks, BDD).

Sous-packages :
- entities/ : Entités métier (Movie, Character, Provenance)
- ports/ : Interfaces abstraites définissant les contrats pour les adaptateurs
- errors.py : Hiérarchie des exceptions applicatives
"""
