from datetime import UTC, datetime, timedelta

import pytest

from orbit.models.meetup import MeetupRequest
from orbit.models.user import User, UserProfile
from orbit.services.block import BlockService
from orbit.services.chat import ChatService
from orbit.services.directory import OrbitDirectory
from orbit.services.meetup import MeetupService
from orbit.services.user import UserService
from orbit.store import DirectoryStore


# Store and service fixtures
@pytest.fixture
def store() -> DirectoryStore:
    return DirectoryStore()


@pytest.fixture
def directory(store: DirectoryStore) -> OrbitDirectory:
    return OrbitDirectory(store)


@pytest.fixture
def user_service(directory: OrbitDirectory) -> UserService:
    return directory.users


@pytest.fixture
def chat_service(directory: OrbitDirectory) -> ChatService:
    return directory.chats


@pytest.fixture
def meetup_service(directory: OrbitDirectory) -> MeetupService:
    return directory.meetups


@pytest.fixture
def block_service(directory: OrbitDirectory) -> BlockService:
    return directory.blocks


# Test data fixtures
@pytest.fixture
def test_profile() -> UserProfile:
    return UserProfile(
        full_name="Test User",
        email="test@example.com",
        university="Test University",
        interests=["Chess", "Running"],
        university_id="T10001",
    )


@pytest.fixture
def another_test_profile() -> UserProfile:
    return UserProfile(
        full_name="Another Test User",
        email="another_test@example.com",
        university="Test University",
        interests=["Photography"],
        university_id="T10002",
    )


@pytest.fixture
def test_user(directory: OrbitDirectory, test_profile: UserProfile) -> User:
    return directory.register_user(test_profile).user


@pytest.fixture
def another_test_user(
    directory: OrbitDirectory, another_test_profile: UserProfile
) -> User:
    return directory.register_user(another_test_profile).user


@pytest.fixture
def meetup_time() -> datetime:
    return datetime.now(UTC) + timedelta(days=1)


@pytest.fixture
def test_meetup_request(
    directory: OrbitDirectory, another_test_user: User, meetup_time: datetime
) -> MeetupRequest:
    return directory.submit_meetup_request(
        another_test_user.user_id,
        meetup_time,
        "Library cafe",
        "Distributed systems",
        "What's the best paper you read this term?",
    ).request
