from enum import Enum

from pydantic import UUID4, BaseModel, ConfigDict, Field

from orbit.models.block import Block
from orbit.models.chat import ChatMessage, ChatRoom
from orbit.models.meetup import MeetupRequest
from orbit.models.user import User


class DirectoryError(Exception):
    """Base exception for directory operations that did not succeed."""

    pass


class DirectoryNotFoundError(DirectoryError):
    """Exception raised when an operation referenced an unknown id."""

    pass


class DirectoryValidationError(DirectoryError):
    """Exception raised when a required field was empty or invalid."""

    pass


class Outcome(str, Enum):
    """Result class of a directory operation."""

    APPLIED = "applied"
    NO_OP = "no_op"
    NOT_FOUND = "not_found"
    INVALID_INPUT = "invalid_input"


class OperationRecord(BaseModel):
    """Base class for all operation records.

    Attributes:
        outcome: Whether the operation changed anything, and if not, why
        detail: Human readable explanation for non-applied outcomes
    """

    model_config = ConfigDict(frozen=True)

    outcome: Outcome = Field(description="Result class of the operation")
    detail: str | None = Field(
        None, description="Explanation for non-applied outcomes"
    )

    @property
    def success(self) -> bool:
        return self.outcome in (Outcome.APPLIED, Outcome.NO_OP)

    @property
    def changed(self) -> bool:
        return self.outcome is Outcome.APPLIED

    def raise_for_outcome(self) -> None:
        """Raise the matching DirectoryError for failed outcomes.

        Raises:
            DirectoryNotFoundError: If the outcome is NOT_FOUND
            DirectoryValidationError: If the outcome is INVALID_INPUT
        """
        if self.outcome is Outcome.NOT_FOUND:
            raise DirectoryNotFoundError(self.detail or "Not found")
        if self.outcome is Outcome.INVALID_INPUT:
            raise DirectoryValidationError(self.detail or "Invalid input")


class UserRecord(OperationRecord):
    """Record of a registration, profile update or current-user change.

    Attributes:
        user: The stored user after the operation
    """

    user: User | None = Field(None, description="The stored user")


class MeetupRequestRecord(OperationRecord):
    """Record of a meetup request submission.

    Attributes:
        request: The submitted request
    """

    request: MeetupRequest | None = Field(None, description="The submitted request")


class ApprovalRecord(OperationRecord):
    """Record of a meetup request approval.

    Attributes:
        request: The request after the approval
        chat_room: The chat room the approval created, if it created one
    """

    request: MeetupRequest | None = Field(
        None, description="The request after the approval"
    )
    chat_room: ChatRoom | None = Field(
        None, description="The chat room created by this approval"
    )

    @property
    def matched(self) -> bool:
        return self.chat_room is not None


class MessageRecord(OperationRecord):
    """Record of a sent chat message.

    Attributes:
        room_id: ID of the room the message was sent to
        message: The appended message
    """

    room_id: UUID4 | None = Field(None, description="Room the message went to")
    message: ChatMessage | None = Field(None, description="The appended message")


class BlockRecord(OperationRecord):
    """Record of a block.

    Attributes:
        block: The block relationship
        newly_blocked: Whether the block did not exist before
        removed_room_ids: IDs of chat rooms removed by the block
    """

    block: Block | None = Field(None, description="The block relationship")
    newly_blocked: bool = Field(
        False, description="Whether the block did not exist before"
    )
    removed_room_ids: list[UUID4] = Field(
        default_factory=list, description="Chat rooms removed by the block"
    )
