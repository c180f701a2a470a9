from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from user_api.deps import get_settings_dep, get_user_store
from user_api.entities import Clock, utc_now
from user_api.logging_config import configure_logging
from user_api.routers.users import router as users_router
from user_api.settings import Settings, get_settings
from user_api.user_store import InMemoryUserStore

logger = logging.getLogger("user_api")

APP_VERSION = "1.0.0"


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed bodies and non-integer ids are client errors: 400, not FastAPI's default 422.
    logger.warning("Invalid request to %s %s", request.method, request.url.path)
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


def create_app(
    settings: Optional[Settings] = None,
    *,
    store: Optional[InMemoryUserStore] = None,
    clock: Clock = utc_now,
) -> FastAPI:
    """Build the API around a single, process-lifetime user store.

    Tests pass their own ``store``/``clock`` to get isolated, deterministic apps.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        version=APP_VERSION,
        description="A simple API for managing users with CRUD operations",
    )
    app.state.settings = settings
    app.state.clock = clock
    if store is None:
        store = InMemoryUserStore(clock=clock, seed=settings.seed_demo_users)
    app.state.user_store = store

    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.include_router(users_router, prefix=settings.api_prefix)

    @app.get("/healthz")
    def healthz(
        settings: Settings = Depends(get_settings_dep),
        store: InMemoryUserStore = Depends(get_user_store),
    ):
        return JSONResponse(
            {
                "ok": True,
                "service": settings.app_name,
                "version": APP_VERSION,
                "users": store.count(),
            }
        )

    logger.info("%s ready, users served under %s/users", settings.app_name, settings.api_prefix)
    return app


app = create_app()
