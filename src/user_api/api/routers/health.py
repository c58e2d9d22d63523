"""Health and readiness endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from user_api.config import Settings
from user_api.database import UserStore
from user_api.dependencies import get_app_settings

router = APIRouter(tags=["diagnostics"])


@router.get("/health", summary="Liveness probe")
async def health_check(settings: Annotated[Settings, Depends(get_app_settings)]) -> dict[str, str]:
    """Signal that the API process is running."""

    return {"status": "ok", "service": settings.app_name, "environment": settings.environment}


@router.get("/readiness", summary="Readiness probe")
async def readiness_check(request: Request) -> JSONResponse:
    """Signal whether the document store answers."""

    store: UserStore | None = getattr(request.app.state, "users", None)
    if store is None or not await store.ping():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unavailable", "message": "Database unavailable"},
        )
    return JSONResponse(content={"status": "ready"})
