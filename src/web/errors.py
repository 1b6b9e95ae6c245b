"""
Traduction des erreurs metier en reponses HTTP.

Le client ne recoit qu'un message generique ; la cause et l'etape en
echec restent dans les logs.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from loguru import logger

from ..core.errors import HolocronError, SyncConflictError


async def holocron_error_handler(request: Request, exc: HolocronError) -> JSONResponse:
    """Conflit -> 409, toute autre erreur metier -> 500."""
    if isinstance(exc, SyncConflictError):
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)})

    logger.opt(exception=exc).error(
        f"{request.method} {request.url.path} en echec: {type(exc).__name__}: {exc}"
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Enregistre les handlers d'erreurs metier sur l'application."""
    app.add_exception_handler(HolocronError, holocron_error_handler)
