"""Static landing page."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse

from user_api.config import Settings
from user_api.dependencies import get_app_settings
from user_api.logging import get_logger

router = APIRouter(tags=["pages"])
_logger = get_logger("pages")

INDEX_FILE = "index.html"


@router.get("/", summary="Landing page", include_in_schema=False)
async def index(settings: Annotated[Settings, Depends(get_app_settings)]) -> FileResponse:
    """Serve ``index.html`` from the configured public directory."""

    path = settings.public_dir / INDEX_FILE
    if not path.is_file():
        _logger.warning("landing page missing path=%s", path)
        raise HTTPException(status_code=404, detail="Page not found")
    return FileResponse(path, media_type="text/html")
