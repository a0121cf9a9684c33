from datetime import datetime

from pydantic import UUID4, BaseModel, ConfigDict, Field


class MeetupRequest(BaseModel):
    """A proposal by one user to meet, open for others to approve.

    Approvals are only ever appended; a request is never edited or deleted
    once submitted.

    Attributes:
        request_id: Unique identifier for the request
        creator_id: ID of the user proposing the meetup
        scheduled_at: When the meetup should take place
        location: Where to meet
        discussion_topic: What the meetup is about
        conversation_starter: Opening line shown to other users
        approved_by: IDs of users who approved, in approval order
        created_at: When the request was submitted
    """

    model_config = ConfigDict(frozen=True)

    request_id: UUID4
    creator_id: UUID4
    scheduled_at: datetime
    location: str = Field(min_length=1)
    discussion_topic: str = Field(min_length=1)
    conversation_starter: str = Field(min_length=1)
    approved_by: tuple[UUID4, ...] = ()
    created_at: datetime

    def is_approved_by(self, user_id: UUID4) -> bool:
        return user_id in self.approved_by


class MeetupRequestCreate(BaseModel):
    """Request body for submitting a meetup request."""

    model_config = ConfigDict(frozen=True)

    scheduled_at: datetime
    location: str
    discussion_topic: str
    conversation_starter: str
