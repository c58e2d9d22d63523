"""Request and response payloads for the users API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from user_api.database import ID_FIELD


class NewUser(BaseModel):
    """Payload for creating a user.

    ``name`` and ``email`` are typed; any other field is kept as sent and
    stored alongside them.
    """

    model_config = ConfigDict(extra="allow")

    name: str | None = None
    email: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _ignore_non_json_body(cls, data: Any) -> Any:
        # bodies sent without a JSON content type arrive as raw bytes
        if isinstance(data, bytes):
            return {}
        return data

    @property
    def extension_fields(self) -> dict[str, Any]:
        return dict(self.model_extra or {})

    def has_required_fields(self) -> bool:
        return bool(self.name) and bool(self.email)

    def to_document(self) -> dict[str, Any]:
        """Return the document to persist; the identifier is always store-assigned."""
        document: dict[str, Any] = {"name": self.name, "email": self.email}
        document.update(self.extension_fields)
        document.pop(ID_FIELD, None)
        return document


class UserCreated(BaseModel):
    """Response after a user is stored."""

    message: str = "User created"
    user_id: str = Field(serialization_alias="userId")


class MessageResponse(BaseModel):
    """Plain acknowledgement or error body."""

    message: str
