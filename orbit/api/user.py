from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import UUID4

from orbit.dependencies import get_current_user, get_directory
from orbit.models.user import User, UserProfile
from orbit.schemas.records import DirectoryNotFoundError, UserRecord
from orbit.services.directory import OrbitDirectory

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserRecord)
async def register_user(
    profile: UserProfile,
    directory: Annotated[OrbitDirectory, Depends(get_directory)],
) -> UserRecord:
    """Register a new user and make them the current user.

    Args:
        profile: Onboarding details
        directory: The application's directory

    Returns:
        Record holding the created user
    """
    return directory.register_user(profile)


@router.get("", response_model=list[User])
async def list_users(
    directory: Annotated[OrbitDirectory, Depends(get_directory)],
) -> list[User]:
    return directory.list_users()


@router.get("/me", response_model=User)
async def get_me(current_user: Annotated[User, Depends(get_current_user)]) -> User:
    return current_user


@router.get("/current", response_model=User)
async def get_session_user(
    directory: Annotated[OrbitDirectory, Depends(get_directory)],
) -> User:
    """Get the user designated as the session's current user.

    Raises:
        HTTPException: If no user has been registered or selected yet
    """
    if user := directory.current_user:
        return user
    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="No current user",
    )


@router.put("/{user_id}", response_model=UserRecord)
async def update_user(
    user_id: UUID4,
    profile: UserProfile,
    current_user: Annotated[User, Depends(get_current_user)],
    directory: Annotated[OrbitDirectory, Depends(get_directory)],
) -> UserRecord:
    """Update a user's profile.

    Args:
        user_id: ID of the user whose profile to update
        profile: The edited profile
        current_user: The acting user
        directory: The application's directory

    Returns:
        Record holding the stored user

    Raises:
        HTTPException: If the actor is not the user being edited
    """
    if user_id != current_user.user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Cannot update another user's profile",
        )

    record = directory.update_user(User(user_id=user_id, **profile.model_dump()))
    try:
        record.raise_for_outcome()
    except DirectoryNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return record


@router.post("/{user_id}/select", response_model=UserRecord)
async def select_current_user(
    user_id: UUID4,
    directory: Annotated[OrbitDirectory, Depends(get_directory)],
) -> UserRecord:
    """Pick an existing user as the session's current user."""
    record = directory.select_current_user(user_id)
    try:
        record.raise_for_outcome()
    except DirectoryNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return record
