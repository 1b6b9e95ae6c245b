"""
Application FastAPI de Holocron.

Initialise l'application web avec le Container DI, demarre la
synchronisation planifiee et monte les routes.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from ..container import Container
from ..logging_config import configure_logging
from ..scheduler import init_scheduler, shutdown_scheduler
from .errors import register_error_handlers
from .routes.catalog import router as catalog_router
from .routes.sync import router as sync_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialise le Container DI et le scheduler au démarrage, les ferme à l'arrêt."""
    container = Container()
    settings = container.config()
    configure_logging(
        log_level=settings.log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )
    container.database.init()
    app.state.container = container
    init_scheduler(container)
    yield
    shutdown_scheduler()
    await container.catalog_client().close()


app = FastAPI(title="Holocron", lifespan=lifespan)
register_error_handlers(app)

# Routes
app.include_router(catalog_router)
app.include_router(sync_router)
