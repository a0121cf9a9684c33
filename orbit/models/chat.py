from datetime import datetime

from pydantic import UUID4, BaseModel, ConfigDict, Field, field_validator


class ChatMessage(BaseModel):
    """A single message in a chat room.

    Attributes:
        message_id: Unique identifier for the message
        sender_id: ID of the user who sent the message
        text: The message text
        created_at: When the message was sent
    """

    model_config = ConfigDict(frozen=True)

    message_id: UUID4
    sender_id: UUID4
    text: str = Field(min_length=1)
    created_at: datetime


class ChatRoom(BaseModel):
    """A two-party chat room created when a meetup request is matched.

    Attributes:
        room_id: Unique identifier for the room
        participant_ids: The two matched users, creator first
        messages: Messages in the order they were sent
        created_at: When the match created the room
    """

    model_config = ConfigDict(frozen=True)

    room_id: UUID4
    participant_ids: tuple[UUID4, UUID4]
    messages: tuple[ChatMessage, ...] = ()
    created_at: datetime

    @field_validator("participant_ids")
    @classmethod
    def validate_distinct_participants(
        cls, v: tuple[UUID4, UUID4]
    ) -> tuple[UUID4, UUID4]:
        if v[0] == v[1]:
            raise ValueError("A chat room needs two distinct participants")
        return v

    @property
    def pair(self) -> frozenset[UUID4]:
        """Participants as an unordered pair."""
        return frozenset(self.participant_ids)

    def has_participant(self, user_id: UUID4) -> bool:
        return user_id in self.participant_ids

    def pairs(self, user_a: UUID4, user_b: UUID4) -> bool:
        """Whether this room connects exactly ``user_a`` and ``user_b``."""
        return self.pair == frozenset((user_a, user_b))

    def other_participant(self, user_id: UUID4) -> UUID4 | None:
        if not self.has_participant(user_id):
            return None
        first, second = self.participant_ids
        return second if first == user_id else first


class ChatMessageCreate(BaseModel):
    """Request body for sending a chat message."""

    model_config = ConfigDict(frozen=True)

    text: str
