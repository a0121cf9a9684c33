from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import UUID4

from orbit.dependencies import get_current_user, get_directory
from orbit.models.meetup import MeetupRequest, MeetupRequestCreate
from orbit.models.user import User
from orbit.schemas.records import (
    ApprovalRecord,
    DirectoryNotFoundError,
    DirectoryValidationError,
    MeetupRequestRecord,
)
from orbit.services.directory import OrbitDirectory

router = APIRouter(prefix="/meetups", tags=["meetups"])


@router.post("", response_model=MeetupRequestRecord)
async def submit_meetup_request(
    body: MeetupRequestCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    directory: Annotated[OrbitDirectory, Depends(get_directory)],
) -> MeetupRequestRecord:
    """Submit a meetup request as the acting user.

    Args:
        body: Time, place, topic and conversation starter
        current_user: The acting user
        directory: The application's directory

    Returns:
        Record holding the submitted request

    Raises:
        HTTPException: If a required field is empty
    """
    record = directory.submit_meetup_request(
        current_user.user_id,
        body.scheduled_at,
        body.location,
        body.discussion_topic,
        body.conversation_starter,
    )
    try:
        record.raise_for_outcome()
    except DirectoryValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DirectoryNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return record


@router.get("", response_model=list[MeetupRequest])
async def browse_meetup_requests(
    current_user: Annotated[User, Depends(get_current_user)],
    directory: Annotated[OrbitDirectory, Depends(get_directory)],
) -> list[MeetupRequest]:
    """List other users' meetup requests."""
    return directory.list_meetup_requests(viewer_id=current_user.user_id)


@router.get("/{request_id}", response_model=MeetupRequest)
async def get_meetup_request(
    request_id: UUID4,
    current_user: Annotated[User, Depends(get_current_user)],
    directory: Annotated[OrbitDirectory, Depends(get_directory)],
) -> MeetupRequest:
    if request := directory.get_meetup_request(request_id):
        return request
    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Meetup request {request_id} not found",
    )


@router.post("/{request_id}/approve", response_model=ApprovalRecord)
async def approve_meetup_request(
    request_id: UUID4,
    current_user: Annotated[User, Depends(get_current_user)],
    directory: Annotated[OrbitDirectory, Depends(get_directory)],
) -> ApprovalRecord:
    """Approve a meetup request as the acting user.

    Args:
        request_id: ID of the request to approve
        current_user: The acting user
        directory: The application's directory

    Returns:
        Record holding the request and the chat room opened by a match

    Raises:
        HTTPException: If the request does not exist
    """
    record = directory.approve_meetup_request(request_id, current_user.user_id)
    try:
        record.raise_for_outcome()
    except DirectoryNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return record
