from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header, HTTPException, Request, status

from orbit.models.user import User
from orbit.services.directory import OrbitDirectory


def get_directory(request: Request) -> OrbitDirectory:
    """Dependency returning the application's directory."""
    return request.app.state.directory


async def get_current_user(
    directory: Annotated[OrbitDirectory, Depends(get_directory)],
    x_orbit_user: Annotated[str | None, Header()] = None,
) -> User:
    """Dependency resolving the acting user from the ``X-Orbit-User`` header.

    The header carries a registered user's id. There is no authentication.

    Args:
        directory: The application's directory
        x_orbit_user: Value of the ``X-Orbit-User`` header

    Returns:
        The acting user

    Raises:
        HTTPException: If the header is missing, malformed or unknown
    """
    if not x_orbit_user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No X-Orbit-User header found",
        )
    try:
        user_id = UUID(x_orbit_user)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid X-Orbit-User header",
        )

    if user := directory.get_user(user_id):
        return user
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=f"Unknown user {user_id}",
    )
