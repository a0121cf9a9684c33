import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from uuid import uuid4

import pytest

from orbit.config import Settings
from orbit.models.event import EventKind
from orbit.models.user import User, UserProfile
from orbit.schemas.records import (
    DirectoryNotFoundError,
    DirectoryValidationError,
    Outcome,
)
from orbit.services.directory import OrbitDirectory


@pytest.mark.unit
class TestOrbitDirectory:
    def test_match_then_block_scenario(
        self,
        directory: OrbitDirectory,
        test_profile: UserProfile,
        another_test_profile: UserProfile,
        meetup_time: datetime,
    ):
        # Arrange
        u1 = directory.register_user(test_profile).user
        u2 = directory.register_user(another_test_profile).user
        request = directory.submit_meetup_request(
            u2.user_id, meetup_time, "Quad", "Astronomy", "Favourite planet?"
        ).request

        # Act
        approval = directory.approve_meetup_request(request.request_id, u1.user_id)

        # Assert
        rooms = directory.list_chat_rooms()
        assert len(rooms) == 1
        assert rooms[0].pair == {u1.user_id, u2.user_id}
        assert directory.other_participant(approval.chat_room, u1.user_id) == u2.user_id

        # Act
        directory.block_user(u1.user_id, u2.user_id)

        # Assert
        assert directory.list_chat_rooms() == []

    def test_self_approval_scenario(
        self,
        directory: OrbitDirectory,
        test_user: User,
        meetup_time: datetime,
    ):
        # Arrange
        request = directory.submit_meetup_request(
            test_user.user_id, meetup_time, "Quad", "Astronomy", "Favourite planet?"
        ).request

        # Act
        directory.approve_meetup_request(request.request_id, test_user.user_id)

        # Assert
        assert directory.list_chat_rooms() == []

    def test_approvals_from_both_sides_never_duplicate_rooms(
        self,
        directory: OrbitDirectory,
        test_user: User,
        another_test_user: User,
        meetup_time: datetime,
    ):
        # Arrange
        requests = [
            directory.submit_meetup_request(
                creator.user_id, meetup_time, "Quad", "Topic", "Starter"
            ).request
            for creator in (test_user, another_test_user, test_user)
        ]

        # Act
        for _ in range(3):
            for request in requests:
                approver = (
                    another_test_user
                    if request.creator_id == test_user.user_id
                    else test_user
                )
                directory.approve_meetup_request(request.request_id, approver.user_id)

        # Assert
        assert len(directory.list_chat_rooms()) == 1

    def test_concurrent_approvals_create_one_room(
        self,
        directory: OrbitDirectory,
        test_user: User,
        another_test_user: User,
        meetup_time: datetime,
    ):
        # Arrange
        forward = directory.submit_meetup_request(
            test_user.user_id, meetup_time, "Quad", "Topic", "Starter"
        ).request
        backward = directory.submit_meetup_request(
            another_test_user.user_id, meetup_time, "Quad", "Topic", "Starter"
        ).request
        calls = [
            (forward.request_id, another_test_user.user_id),
            (backward.request_id, test_user.user_id),
        ] * 50
        start = threading.Barrier(8)

        def approve(args):
            start.wait()
            return directory.approve_meetup_request(*args)

        # Act
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(approve, calls[:8])) + [
                directory.approve_meetup_request(*args) for args in calls[8:]
            ]

        # Assert
        assert len(directory.list_chat_rooms()) == 1
        assert sum(1 for r in results if r.matched) == 1

    def test_subscribers_receive_events(
        self,
        directory: OrbitDirectory,
        test_profile: UserProfile,
        another_test_profile: UserProfile,
        meetup_time: datetime,
        mocker,
    ):
        # Arrange
        callback = mocker.Mock()
        directory.subscribe(callback)
        u1 = directory.register_user(test_profile).user
        u2 = directory.register_user(another_test_profile).user
        request = directory.submit_meetup_request(
            u2.user_id, meetup_time, "Quad", "Topic", "Starter"
        ).request

        # Act
        approval = directory.approve_meetup_request(request.request_id, u1.user_id)
        directory.send_message(approval.chat_room.room_id, u1.user_id, "Hi")
        directory.block_user(u2.user_id, u1.user_id)

        # Assert
        kinds = [call.args[0].kind for call in callback.call_args_list]
        assert kinds == [
            EventKind.USER_REGISTERED,
            EventKind.USER_REGISTERED,
            EventKind.MEETUP_REQUEST_SUBMITTED,
            EventKind.MEETUP_REQUEST_APPROVED,
            EventKind.CHAT_ROOM_CREATED,
            EventKind.MESSAGE_SENT,
            EventKind.USER_BLOCKED,
            EventKind.CHAT_ROOM_REMOVED,
        ]
        removed = callback.call_args_list[-1].args[0]
        assert removed.entity_id == approval.chat_room.room_id
        assert removed.actor_id == u2.user_id

    def test_no_events_for_no_ops(
        self,
        directory: OrbitDirectory,
        test_user: User,
        another_test_user: User,
        mocker,
    ):
        # Arrange
        directory.block_user(test_user.user_id, another_test_user.user_id)
        callback = mocker.Mock()
        directory.subscribe(callback)

        # Act
        directory.block_user(test_user.user_id, another_test_user.user_id)
        directory.send_message(uuid4(), test_user.user_id, "Hi")
        directory.approve_meetup_request(uuid4(), test_user.user_id)
        directory.update_user(test_user)

        # Assert
        callback.assert_not_called()

    def test_unsubscribe(self, directory: OrbitDirectory, test_profile, mocker):
        # Arrange
        callback = mocker.Mock()
        unsubscribe = directory.subscribe(callback)

        # Act
        unsubscribe()
        directory.register_user(test_profile)

        # Assert
        callback.assert_not_called()

    def test_failing_subscriber_does_not_stop_delivery(
        self, directory: OrbitDirectory, test_profile, mocker
    ):
        # Arrange
        failing = mocker.Mock(side_effect=RuntimeError("boom"))
        healthy = mocker.Mock()
        directory.subscribe(failing)
        directory.subscribe(healthy)

        # Act
        result = directory.register_user(test_profile)

        # Assert
        assert result.outcome is Outcome.APPLIED
        healthy.assert_called_once()

    def test_events_delivered_when_write_raises(
        self, directory: OrbitDirectory, test_user: User, mocker
    ):
        # Arrange
        callback = mocker.Mock()
        directory.subscribe(callback)

        def failing_write():
            directory.store.record(EventKind.USER_UPDATED, test_user.user_id)
            raise RuntimeError("write failed")

        # Act
        with pytest.raises(RuntimeError):
            directory.store.execute_write(failing_write)

        # Assert
        callback.assert_called_once()
        assert callback.call_args.args[0].kind is EventKind.USER_UPDATED

    def test_subscriber_may_read_directory(
        self, directory: OrbitDirectory, test_profile
    ):
        # Arrange
        seen: list[int] = []
        directory.subscribe(lambda event: seen.append(len(directory.list_users())))

        # Act
        directory.register_user(test_profile)

        # Assert
        assert seen == [1]

    def test_raise_for_outcome(self, directory: OrbitDirectory, test_user: User):
        with pytest.raises(DirectoryNotFoundError):
            directory.send_message(uuid4(), test_user.user_id, "Hi").raise_for_outcome()
        with pytest.raises(DirectoryValidationError):
            record = directory.block_user(test_user.user_id, test_user.user_id)
            record.raise_for_outcome()

    def test_from_settings_seeds_demo_users(self):
        # Act
        directory = OrbitDirectory.from_settings(Settings(seed_demo_users=True))

        # Assert
        assert [u.full_name for u in directory.list_users()] == [
            "Alice Johnson",
            "Bob Smith",
        ]
        assert directory.current_user is None

    def test_from_settings_without_seed(self):
        directory = OrbitDirectory.from_settings(Settings(seed_demo_users=False))
        assert directory.list_users() == []


@pytest.mark.unit
class TestSettings:
    def test_defaults(self, monkeypatch):
        # Arrange
        for name in ("ORBIT_SEED_DEMO_USERS", "ORBIT_LOG_LEVEL", "ORBIT_LOG_FILE"):
            monkeypatch.delenv(name, raising=False)

        # Act
        settings = Settings.from_environ()

        # Assert
        assert settings == Settings()

    def test_from_environ(self, monkeypatch):
        # Arrange
        monkeypatch.setenv("ORBIT_SEED_DEMO_USERS", "no")
        monkeypatch.setenv("ORBIT_LOG_LEVEL", "debug")
        monkeypatch.setenv("ORBIT_LOG_FILE", "orbit.log")

        # Act
        settings = Settings.from_environ()

        # Assert
        assert settings.seed_demo_users is False
        assert settings.log_level == "debug"
        assert settings.log_file == "orbit.log"
