"""
Routes de declenchement manuel de la synchronisation.

POST /sync/movies prend le verrou dans la requete puis laisse la
synchronisation se poursuivre en tache de fond : la reponse 202 signifie
"demarree", l'issue finale est journalisee. Une synchronisation deja en
cours est signalee par un 409, distinct de toute autre erreur.
"""

import asyncio

from fastapi import APIRouter, HTTPException, Request, status
from loguru import logger
from pydantic import BaseModel

from ...core.errors import SyncConflictError
from ...services.sync import SyncReport

router = APIRouter(prefix="/sync", tags=["sync"])

# References fortes vers les taches en cours (sinon collectables par le GC)
_background_tasks: set["asyncio.Task[SyncReport]"] = set()


class SyncTriggerResponse(BaseModel):
    """Reponse au declenchement manuel."""

    status: str
    message: str


class SyncStatusResponse(BaseModel):
    """Etat courant du verrou de synchronisation."""

    running: bool


def _log_outcome(task: "asyncio.Task[SyncReport]") -> None:
    """Journalise l'issue d'une synchronisation lancee en tache de fond."""
    if task.cancelled():
        logger.warning("Synchronisation manuelle annulee")
        return
    error = task.exception()
    if error is not None:
        logger.error(f"Synchronisation manuelle en echec: {error}")
        return
    report = task.result()
    logger.info(
        f"Synchronisation manuelle terminee: {report.movies_created} film(s), "
        f"{report.characters_created} personnage(s), {report.links_created} lien(s)"
    )


@router.post(
    "/movies",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=SyncTriggerResponse,
)
async def trigger_sync(request: Request) -> SyncTriggerResponse:
    """Declenche une synchronisation manuelle du catalogue."""
    coordinator = request.app.state.container.sync_coordinator()
    try:
        task = coordinator.launch()
    except SyncConflictError as e:
        logger.warning("Synchronisation manuelle refusee: deja en cours")
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e

    _background_tasks.add(task)
    task.add_done_callback(_background_tasks.discard)
    task.add_done_callback(_log_outcome)

    logger.info("Synchronisation manuelle declenchee")
    return SyncTriggerResponse(status="started", message="Manual movie sync triggered")


@router.get("/status", response_model=SyncStatusResponse)
async def sync_status(request: Request) -> SyncStatusResponse:
    """Indique si une synchronisation est en cours."""
    return SyncStatusResponse(running=request.app.state.container.run_guard().running)
