from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import UUID4

from orbit.dependencies import get_current_user, get_directory
from orbit.models.user import User
from orbit.schemas.records import BlockRecord, DirectoryValidationError
from orbit.services.directory import OrbitDirectory

router = APIRouter(prefix="/block", tags=["block"])


@router.post("/user/{target_id}", response_model=BlockRecord)
async def block_user(
    target_id: UUID4,
    current_user: Annotated[User, Depends(get_current_user)],
    directory: Annotated[OrbitDirectory, Depends(get_directory)],
) -> BlockRecord:
    """Block a user.

    Args:
        target_id: ID of the user to block
        current_user: The acting user
        directory: The application's directory

    Returns:
        Record of the block, including removed chat rooms

    Raises:
        HTTPException: If the actor tries to block themselves
    """
    record = directory.block_user(current_user.user_id, target_id)
    try:
        record.raise_for_outcome()
    except DirectoryValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return record


@router.post("/report/{target_id}", response_model=BlockRecord)
async def report_user(
    target_id: UUID4,
    current_user: Annotated[User, Depends(get_current_user)],
    directory: Annotated[OrbitDirectory, Depends(get_directory)],
) -> BlockRecord:
    """Report a user, which also blocks them."""
    record = directory.report_user(current_user.user_id, target_id)
    try:
        record.raise_for_outcome()
    except DirectoryValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return record


@router.get("/user/{user_id}/blocked", response_model=list[User])
async def get_blocked_users(
    user_id: UUID4,
    current_user: Annotated[User, Depends(get_current_user)],
    directory: Annotated[OrbitDirectory, Depends(get_directory)],
) -> list[User]:
    """Get users blocked by a user.

    Raises:
        HTTPException: If the actor asks for another user's list
    """
    if user_id != current_user.user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Cannot view another user's blocked list",
        )
    return directory.get_blocked_users(user_id)


@router.get("/check/{target_id}", response_model=bool)
async def check_block_status(
    target_id: UUID4,
    current_user: Annotated[User, Depends(get_current_user)],
    directory: Annotated[OrbitDirectory, Depends(get_directory)],
) -> bool:
    return directory.is_blocked(current_user.user_id, target_id)
