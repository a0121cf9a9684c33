from datetime import datetime
from enum import Enum

from pydantic import UUID4, BaseModel, ConfigDict


class EventKind(str, Enum):
    """Kinds of change the directory notifies subscribers about."""

    USER_REGISTERED = "user_registered"
    USER_UPDATED = "user_updated"
    CURRENT_USER_CHANGED = "current_user_changed"
    MEETUP_REQUEST_SUBMITTED = "meetup_request_submitted"
    MEETUP_REQUEST_APPROVED = "meetup_request_approved"
    CHAT_ROOM_CREATED = "chat_room_created"
    CHAT_ROOM_REMOVED = "chat_room_removed"
    MESSAGE_SENT = "message_sent"
    USER_BLOCKED = "user_blocked"


class DirectoryEvent(BaseModel):
    """A change that was applied to the directory.

    Attributes:
        kind: What changed
        entity_id: ID of the user, request, room or message that changed
        actor_id: ID of the user whose action caused the change, if any
        occurred_at: When the change was applied
    """

    model_config = ConfigDict(frozen=True)

    kind: EventKind
    entity_id: UUID4
    actor_id: UUID4 | None = None
    occurred_at: datetime
