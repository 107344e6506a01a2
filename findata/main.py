# findata/main.py
import uvicorn
import os
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from findata.api.v1.api import api_router
from findata.core.config import Settings, get_settings
from findata.core.database import Database
from findata.core.errors import register_exception_handlers
from findata.crud.category import seed_default_categories
# Imported for their side effect of registering tables on Base.metadata
from findata.models import user, transaction, category  # noqa: F401

logger = logging.getLogger(__name__)


async def init_db(database: Database) -> None:
    """Create tables and seed the global categories (idempotent)."""
    await database.create_all()
    async with database.session_factory() as session:
        await seed_default_categories(session)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build an application instance around its own settings and database.

    Without explicit settings they are read from the environment; a missing
    SECRET_KEY raises here, before the server starts accepting requests.
    """
    settings = settings or get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL)

    database = Database(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await init_db(database)
        logger.info(f"{settings.APP_NAME} started ({settings.ENVIRONMENT})")
        yield
        await database.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.VERSION,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        docs_url=f"{settings.API_PREFIX}/docs",
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.FRONTEND_URL],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # ------------------------------------------------------------
    # HEALTH CHECK ENDPOINT
    # ------------------------------------------------------------
    @app.get(f"{settings.API_PREFIX}/health", tags=["Health"])
    async def health_check():
        return {
            "status": "OK",
            "message": f"{settings.APP_NAME} funcionando",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    app.include_router(api_router, prefix=settings.API_PREFIX)
    return app


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 3001))
    uvicorn.run("findata.main:create_app", factory=True, host="0.0.0.0", port=port, reload=False)
