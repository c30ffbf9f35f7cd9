from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import sentry_sdk
import structlog
from fastapi import FastAPI
from sentry_sdk.integrations.starlette import StarletteIntegration
from starlette.middleware.cors import CORSMiddleware

from travelmap.api import errors
from travelmap.api.routers.flights import router as flights_router
from travelmap.api.routers.health import router as health_router
from travelmap.api.routers.hotels import router as hotels_router
from travelmap.api.routers.locations import router as locations_router
from travelmap.core.config import Settings, get_settings
from travelmap.infra.container import ServiceContainer, open_services
from travelmap.logging import setup_logging
from travelmap.middleware.request_id import request_id_middleware


def create_app(
    settings: Settings | None = None,
    *,
    container: ServiceContainer | None = None,
) -> FastAPI:
    """Build the API application.

    When ``container`` is given it is used as-is and left open on shutdown
    (the caller owns it); otherwise services are opened in the lifespan.
    """

    settings = settings or (container.settings if container else get_settings())
    setup_logging(app_env=settings.app_env)

    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.app_env,
            integrations=[StarletteIntegration()],
            traces_sample_rate=0.0,
            send_default_pii=False,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if container is not None:
            yield
            return
        async with open_services(settings) as services:
            app.state.container = services
            yield

    app = FastAPI(title="Travel Map Aggregator", lifespan=lifespan)
    if container is not None:
        app.state.container = container

    app.middleware("http")(request_id_middleware)
    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["*"],
        )
    errors.install(app)

    app.include_router(locations_router)
    app.include_router(flights_router)
    app.include_router(hotels_router)
    app.include_router(health_router)

    @app.get("/health")
    def health():
        return {"status": "ok", "env": settings.app_env}

    structlog.get_logger(__name__).info(
        "app_startup", env=settings.app_env, amadeus_hostname=settings.amadeus_hostname
    )
    return app


app = create_app()
