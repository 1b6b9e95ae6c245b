"""
Verrou mono-execution des synchronisations.

Le test et la prise du verrou sont une seule operation atomique
(acquire non bloquant), il n'y a donc pas de fenetre entre la
verification "deja en cours ?" et le passage a l'etat "en cours".

Le verrou est local au processus : plusieurs instances deployees
ne sont pas exclues mutuellement.
"""

import threading
from contextlib import contextmanager
from collections.abc import Iterator

from src.core.errors import SyncConflictError


class RunGuard:
    """Drapeau "synchronisation en cours" partage par tous les declencheurs."""

    def __init__(self) -> None:
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        """True si une synchronisation est en cours."""
        return self._lock.locked()

    def try_acquire(self) -> bool:
        """Passe a l'etat "en cours". Retourne False si deja en cours."""
        return self._lock.acquire(blocking=False)

    def acquire(self) -> None:
        """
        Passe a l'etat "en cours".

        Raises:
            SyncConflictError: Si une synchronisation tourne deja.
        """
        if not self.try_acquire():
            raise SyncConflictError()

    def release(self) -> None:
        """Revient a l'etat "inactif"."""
        self._lock.release()

    @contextmanager
    def hold(self) -> Iterator[None]:
        """Context manager : acquire() puis release() quelle que soit l'issue."""
        self.acquire()
        try:
            yield
        finally:
            self.release()
