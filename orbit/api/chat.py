from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import UUID4

from orbit.dependencies import get_current_user, get_directory
from orbit.models.chat import ChatMessageCreate, ChatRoom
from orbit.models.user import User
from orbit.schemas.records import (
    DirectoryNotFoundError,
    DirectoryValidationError,
    MessageRecord,
)
from orbit.services.directory import OrbitDirectory

router = APIRouter(prefix="/chats", tags=["chats"])


@router.get("", response_model=list[ChatRoom])
async def list_chat_rooms(
    current_user: Annotated[User, Depends(get_current_user)],
    directory: Annotated[OrbitDirectory, Depends(get_directory)],
) -> list[ChatRoom]:
    """List the chat rooms the acting user participates in."""
    return directory.chat_rooms_for(current_user.user_id)


@router.get("/{room_id}", response_model=ChatRoom)
async def get_chat_room(
    room_id: UUID4,
    current_user: Annotated[User, Depends(get_current_user)],
    directory: Annotated[OrbitDirectory, Depends(get_directory)],
) -> ChatRoom:
    """Get a chat room with its messages.

    Raises:
        HTTPException: If the room does not exist or the actor is not in it
    """
    room = directory.get_chat_room(room_id)
    if room is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Chat room {room_id} not found",
        )
    if not room.has_participant(current_user.user_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Cannot view another user's chat room",
        )
    return room


@router.post("/{room_id}/messages", response_model=MessageRecord)
async def send_message(
    room_id: UUID4,
    body: ChatMessageCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    directory: Annotated[OrbitDirectory, Depends(get_directory)],
) -> MessageRecord:
    """Send a message to a chat room as the acting user.

    Args:
        room_id: ID of the room to post to
        body: The message text
        current_user: The acting user
        directory: The application's directory

    Returns:
        Record holding the appended message

    Raises:
        HTTPException: If the text is empty or the room does not exist
    """
    record = directory.send_message(room_id, current_user.user_id, body.text)
    try:
        record.raise_for_outcome()
    except DirectoryValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DirectoryNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return record
