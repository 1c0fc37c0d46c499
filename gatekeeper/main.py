# gatekeeper/main.py

import logging
from contextlib import asynccontextmanager
import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from gatekeeper.api import auth, pages
from gatekeeper.config import Settings, load_settings
from gatekeeper.core.sessions import SessionMiddleware, SessionStore
from gatekeeper.database import Database
from gatekeeper.errors import register_error_handlers


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str):
    logging.basicConfig(level=level, format=LOG_FORMAT)


@asynccontextmanager
async def lifespan(app: FastAPI):
    database = app.state.database
    database.init_db()
    purged = app.state.session_store.purge_expired()
    logger.info("Database ready (%d expired sessions purged)", purged)
    yield
    database.dispose()
    logger.info("Database connections closed")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    app = FastAPI(lifespan=lifespan)
    app.state.settings = settings
    app.state.database = Database(settings.database_url)
    app.state.session_store = SessionStore(app.state.database.SessionLocal, settings.session_secret)

    app.add_middleware(SessionMiddleware, store=app.state.session_store)

    app.include_router(pages.router)
    app.include_router(auth.router)
    app.mount("/static", StaticFiles(directory=settings.static_dir), name="static")

    register_error_handlers(app)
    return app


def run():
    settings = load_settings()
    configure_logging(settings.log_level)
    logger.info("Server is running on http://localhost:%d", settings.port)
    uvicorn.run("gatekeeper.main:create_app", factory=True, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
