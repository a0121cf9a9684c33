import logging
from uuid import uuid4

from pydantic import UUID4

from orbit.models.event import EventKind
from orbit.models.user import User, UserProfile
from orbit.schemas.records import Outcome, UserRecord
from orbit.store import DirectoryStore

logger = logging.getLogger(__name__)

DEMO_PROFILES: tuple[UserProfile, ...] = (
    UserProfile(
        full_name="Alice Johnson",
        email="alice@example.com",
        university="University A",
        interests=["Reading", "Hiking"],
        university_id="U12345",
        is_verified=True,
    ),
    UserProfile(
        full_name="Bob Smith",
        email="bob@example.com",
        university="University B",
        interests=["Cooking", "Gaming"],
        university_id="U67890",
        is_verified=True,
    ),
)


class UserService:
    """Service for onboarding users and editing their profiles.

    Email addresses and university ids are stored as given; no uniqueness
    checks are made.
    """

    def __init__(self, store: DirectoryStore) -> None:
        self.store = store

    def _register_user(self, profile: UserProfile) -> UserRecord:
        user = User(user_id=uuid4(), **profile.model_dump())
        self.store.users.append(user)
        self.store.current_user_id = user.user_id
        self.store.record(EventKind.USER_REGISTERED, user.user_id, user.user_id)
        logger.info("Registered user %s (%s)", user.user_id, user.full_name)
        return UserRecord(outcome=Outcome.APPLIED, user=user)

    def register_user(self, profile: UserProfile) -> UserRecord:
        """Register a new user and make them the current user.

        Args:
            profile: Onboarding details for the new user

        Returns:
            Record holding the created user
        """
        return self.store.execute_write(self._register_user, profile)

    def _update_user(self, updated_user: User) -> UserRecord:
        index = self.store.user_index(updated_user.user_id)
        if index is None:
            logger.debug("Ignoring update for unknown user %s", updated_user.user_id)
            return UserRecord(
                outcome=Outcome.NOT_FOUND,
                detail=f"User {updated_user.user_id} not found",
            )

        if self.store.users[index] == updated_user:
            return UserRecord(outcome=Outcome.NO_OP, user=updated_user)

        self.store.users[index] = updated_user
        self.store.record(
            EventKind.USER_UPDATED, updated_user.user_id, updated_user.user_id
        )
        logger.info("Updated profile of user %s", updated_user.user_id)
        return UserRecord(outcome=Outcome.APPLIED, user=updated_user)

    def update_user(self, updated_user: User) -> UserRecord:
        """Replace a stored user with an edited copy.

        The stored record keeps its position in the user list. A user id that
        is not registered is ignored.

        Args:
            updated_user: The edited user, carrying the id of the user to replace

        Returns:
            Record holding the stored user, or NOT_FOUND
        """
        return self.store.execute_write(self._update_user, updated_user)

    def _select_current_user(self, user_id: UUID4) -> UserRecord:
        index = self.store.user_index(user_id)
        if index is None:
            return UserRecord(
                outcome=Outcome.NOT_FOUND, detail=f"User {user_id} not found"
            )
        user = self.store.users[index]
        if self.store.current_user_id == user_id:
            return UserRecord(outcome=Outcome.NO_OP, user=user)

        self.store.current_user_id = user_id
        self.store.record(EventKind.CURRENT_USER_CHANGED, user_id, user_id)
        logger.info("Current user is now %s", user_id)
        return UserRecord(outcome=Outcome.APPLIED, user=user)

    def select_current_user(self, user_id: UUID4) -> UserRecord:
        """Designate an existing user as the current user."""
        return self.store.execute_write(self._select_current_user, user_id)

    def _get_user(self, user_id: UUID4) -> User | None:
        index = self.store.user_index(user_id)
        return None if index is None else self.store.users[index]

    def get_user(self, user_id: UUID4) -> User | None:
        return self.store.execute_read(self._get_user, user_id)

    def list_users(self) -> list[User]:
        return self.store.execute_read(lambda: list(self.store.users))

    def get_current_user(self) -> User | None:
        def _current() -> User | None:
            if self.store.current_user_id is None:
                return None
            return self._get_user(self.store.current_user_id)

        return self.store.execute_read(_current)

    def seed_demo_users(self) -> list[User]:
        """Add the demo users without changing the current user.

        Returns:
            The seeded users
        """

        def _seed() -> list[User]:
            seeded = [User(user_id=uuid4(), **p.model_dump()) for p in DEMO_PROFILES]
            self.store.users.extend(seeded)
            for user in seeded:
                self.store.record(EventKind.USER_REGISTERED, user.user_id)
            logger.info("Seeded %d demo users", len(seeded))
            return seeded

        return self.store.execute_write(_seed)
