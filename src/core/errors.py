"""
Exceptions metier de Holocron.

Hierarchie :
- HolocronError : base de toutes les erreurs applicatives
- SyncConflictError : une synchronisation est deja en cours
- UpstreamError : echec de recuperation depuis le catalogue externe
- PersistenceError : echec d'une operation de stockage
- SyncInternalError : echec fatal d'une synchronisation (enveloppe la cause)
"""

from typing import Optional


class HolocronError(Exception):
    """Erreur de base de l'application."""


class SyncConflictError(HolocronError):
    """Levee quand une synchronisation est demandee alors qu'une autre tourne."""

    def __init__(self, message: str = "Sync already running") -> None:
        super().__init__(message)


class UpstreamError(HolocronError):
    """
    Exception levee quand le catalogue externe est injoignable ou repond en erreur.

    Attributes:
        status_code: Code HTTP de la reponse, ou None pour une erreur de transport.
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class PersistenceError(HolocronError):
    """Levee quand une ecriture en base echoue (la transaction est annulee)."""


class SyncInternalError(HolocronError):
    """
    Echec fatal d'une synchronisation.

    La cause d'origine est chainee (__cause__) et le nom de l'etape
    en echec est conserve pour les logs.
    """

    def __init__(self, stage: str, message: str = "Error syncing catalog") -> None:
        self.stage = stage
        super().__init__(f"{message} (stage: {stage})")
