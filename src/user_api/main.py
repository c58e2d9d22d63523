"""Application entrypoint."""

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI

from user_api.api.routers import health, pages, users
from user_api.config import Settings, get_settings
from user_api.database import UserStore
from user_api.errors import StartupError, register_exception_handlers
from user_api.logging import configure_logging, get_logger
from user_api.middleware import RequestLoggingMiddleware

_logger = get_logger("main")

StoreFactory = Callable[[Settings], UserStore]


def build_lifespan(settings: Settings, store_factory: StoreFactory = UserStore.from_settings):
    """Return a lifespan that owns the user store for the life of the process."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        store = store_factory(settings)
        try:
            await store.connect()
        except StartupError:
            _logger.exception("startup.failed database=%s", settings.database_name)
            raise
        app.state.users = store
        _logger.info("startup.complete port=%d", settings.port)
        try:
            yield
        finally:
            app.state.users = None
            await store.disconnect()

    return lifespan


def create_application(
    settings: Settings | None = None,
    store_factory: StoreFactory = UserStore.from_settings,
) -> FastAPI:
    """Build and configure a FastAPI instance."""

    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.log_file)

    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        lifespan=build_lifespan(settings, store_factory),
    )
    app.state.settings = settings
    app.state.users = None
    register_exception_handlers(app)
    app.add_middleware(RequestLoggingMiddleware)
    app.include_router(pages.router)
    app.include_router(health.router)
    app.include_router(users.router)
    return app


app = create_application()
