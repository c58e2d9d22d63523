"""Endpoints for creating, updating and listing users."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, status

from user_api.database import ID_FIELD, UserStore, serialize_document
from user_api.dependencies import get_event_logger, get_user_store
from user_api.errors import InternalError, NotFoundError, ValidationError
from user_api.logging import EventLogger
from user_api.models import MessageResponse, NewUser, UserCreated

router = APIRouter(prefix="/users", tags=["users"])

Store = Annotated[UserStore, Depends(get_user_store)]
Logger = Annotated[EventLogger, Depends(get_event_logger)]

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    500: {"model": MessageResponse, "description": "Internal server error"},
}


@router.post(
    "",
    summary="Create user",
    status_code=status.HTTP_201_CREATED,
    response_model=UserCreated,
    responses={
        400: {"model": MessageResponse, "description": "Name and email are required"},
        **_ERROR_RESPONSES,
    },
)
async def create_user(
    store: Store,
    logger: Logger,
    payload: Annotated[NewUser | None, Body()] = None,
) -> UserCreated:
    """Store a new user; ``name`` and ``email`` must be present and non-empty."""

    if payload is None:
        payload = NewUser()
    if not payload.has_required_fields():
        logger.warning("users.create.invalid payload=%s", payload.model_dump())
        raise ValidationError()

    try:
        user_id = await store.insert_one(payload.to_document())
    except Exception:
        logger.exception("users.create.error")
        raise InternalError() from None

    logger.info("users.create.ok user_id=%s", user_id)
    return UserCreated(user_id=user_id)


@router.put(
    "/{user_id}",
    summary="Update user",
    response_model=MessageResponse,
    responses={
        404: {"model": MessageResponse, "description": "User not found"},
        **_ERROR_RESPONSES,
    },
)
async def update_user(
    user_id: str,
    fields: Annotated[dict[str, Any], Body()],
    store: Store,
    logger: Logger,
) -> MessageResponse:
    """Set the given fields on a user, leaving every other field untouched."""

    fields.pop(ID_FIELD, None)
    try:
        matched = await store.update_one(user_id, fields)
    except Exception:
        logger.exception("users.update.error user_id=%s", user_id)
        raise InternalError() from None

    if not matched:
        logger.warning("users.update.not_found user_id=%s", user_id)
        raise NotFoundError()

    logger.info("users.update.ok user_id=%s fields=%s", user_id, sorted(fields))
    return MessageResponse(message="User updated")


@router.get("", summary="List users", responses=_ERROR_RESPONSES)
async def list_users(store: Store, logger: Logger) -> list[dict[str, Any]]:
    """Return every stored user in the order the database yields them."""

    try:
        documents = await store.find_all()
    except Exception:
        logger.exception("users.list.error")
        raise InternalError() from None

    logger.info("users.list.ok count=%d", len(documents))
    return [serialize_document(document) for document in documents]
