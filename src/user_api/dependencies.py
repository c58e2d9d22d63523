"""FastAPI dependencies shared by the routers."""

import logging
from collections.abc import MutableMapping
from typing import Any

from fastapi import Request

from user_api.config import Settings, get_settings
from user_api.database import UserStore
from user_api.errors import InternalError
from user_api.logging import EventLogger, get_logger


class RequestLogger(logging.LoggerAdapter):
    """Prefix every handler log line with the request's correlation id."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        return f"id={self.extra['request_id']} {msg}", kwargs


def get_app_settings(request: Request) -> Settings:
    """Return the settings the application was built with."""

    settings: Settings | None = getattr(request.app.state, "settings", None)
    return settings or get_settings()


def get_user_store(request: Request) -> UserStore:
    """Return the gateway created during application startup."""

    store: UserStore | None = getattr(request.app.state, "users", None)
    if store is None or not store.connected:
        get_logger("users").error("users.store_unavailable path=%s", request.url.path)
        raise InternalError()
    return store


def get_event_logger(request: Request) -> EventLogger:
    """Return the logger handlers report their outcomes to."""

    request_id = getattr(request.state, "request_id", "-")
    return RequestLogger(get_logger("users"), {"request_id": request_id})
