from __future__ import annotations

from fastapi import Depends, Request

from user_api.settings import Settings
from user_api.user_service import UserService
from user_api.user_store import InMemoryUserStore


def get_settings_dep(request: Request) -> Settings:
    """FastAPI dependency for settings.

    Returns the Settings the app was built with (see create_app), so tests that
    pass explicit settings see them reflected in handlers.
    """
    return request.app.state.settings


def get_user_store(request: Request) -> InMemoryUserStore:
    # One store per app instance, created in create_app(); never rebuilt per request.
    return request.app.state.user_store


def get_user_service(request: Request, store: InMemoryUserStore = Depends(get_user_store)) -> UserService:
    # The service is stateless, so a fresh one per request is fine.
    return UserService(store, clock=request.app.state.clock)
