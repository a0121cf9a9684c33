import logging
from collections.abc import Callable
from datetime import datetime

from pydantic import UUID4

from orbit.config import Settings
from orbit.models.chat import ChatRoom
from orbit.models.event import DirectoryEvent
from orbit.models.meetup import MeetupRequest
from orbit.models.user import User, UserProfile
from orbit.schemas.records import (
    ApprovalRecord,
    BlockRecord,
    MeetupRequestRecord,
    MessageRecord,
    UserRecord,
)
from orbit.services.block import BlockService
from orbit.services.chat import ChatService
from orbit.services.meetup import MeetupService
from orbit.services.user import UserService
from orbit.store import DirectoryStore

logger = logging.getLogger(__name__)


class OrbitDirectory:
    """The Orbit directory: users, meetup requests, chat rooms and blocks.

    Every operation takes the acting user's id explicitly and returns a
    record whose ``outcome`` says whether anything changed. Invalid input
    never raises; call ``raise_for_outcome()`` on a record to opt into
    exceptions.

    Attributes:
        store: The store holding all collections
        users: Onboarding and profile operations
        meetups: Meetup request operations
        chats: Chat room operations
        blocks: Block operations
    """

    def __init__(self, store: DirectoryStore | None = None) -> None:
        self.store = store or DirectoryStore()
        self.users = UserService(self.store)
        self.chats = ChatService(self.store)
        self.meetups = MeetupService(self.store, self.chats)
        self.blocks = BlockService(self.store)

    @classmethod
    def from_settings(cls, settings: Settings) -> "OrbitDirectory":
        directory = cls()
        if settings.seed_demo_users:
            directory.users.seed_demo_users()
        logger.info("Directory ready with %d users", len(directory.list_users()))
        return directory

    def subscribe(
        self, callback: Callable[[DirectoryEvent], None]
    ) -> Callable[[], None]:
        """Register a callback for change events; returns an unsubscribe function."""
        return self.store.subscribe(callback)

    # Users

    def register_user(self, profile: UserProfile) -> UserRecord:
        return self.users.register_user(profile)

    def update_user(self, updated_user: User) -> UserRecord:
        return self.users.update_user(updated_user)

    def select_current_user(self, user_id: UUID4) -> UserRecord:
        return self.users.select_current_user(user_id)

    @property
    def current_user(self) -> User | None:
        return self.users.get_current_user()

    def get_user(self, user_id: UUID4) -> User | None:
        return self.users.get_user(user_id)

    def list_users(self) -> list[User]:
        return self.users.list_users()

    # Meetup requests

    def submit_meetup_request(
        self,
        creator_id: UUID4,
        scheduled_at: datetime,
        location: str,
        discussion_topic: str,
        conversation_starter: str,
    ) -> MeetupRequestRecord:
        return self.meetups.submit_meetup_request(
            creator_id, scheduled_at, location, discussion_topic, conversation_starter
        )

    def approve_meetup_request(
        self, request_id: UUID4, approver_id: UUID4
    ) -> ApprovalRecord:
        return self.meetups.approve_meetup_request(request_id, approver_id)

    def get_meetup_request(self, request_id: UUID4) -> MeetupRequest | None:
        return self.meetups.get_meetup_request(request_id)

    def list_meetup_requests(
        self, viewer_id: UUID4 | None = None
    ) -> list[MeetupRequest]:
        return self.meetups.list_meetup_requests(viewer_id)

    # Chat rooms

    def send_message(
        self, room_id: UUID4, sender_id: UUID4, text: str
    ) -> MessageRecord:
        return self.chats.send_message(room_id, sender_id, text)

    def get_chat_room(self, room_id: UUID4) -> ChatRoom | None:
        return self.chats.get_chat_room(room_id)

    def chat_rooms_for(self, user_id: UUID4) -> list[ChatRoom]:
        return self.chats.chat_rooms_for(user_id)

    def list_chat_rooms(self) -> list[ChatRoom]:
        return self.chats.list_chat_rooms()

    @staticmethod
    def other_participant(room: ChatRoom, user_id: UUID4) -> UUID4 | None:
        return room.other_participant(user_id)

    # Blocks

    def block_user(self, blocker_id: UUID4, blocked_id: UUID4) -> BlockRecord:
        return self.blocks.block(blocker_id, blocked_id)

    def report_user(self, reporter_id: UUID4, reported_id: UUID4) -> BlockRecord:
        return self.blocks.report(reporter_id, reported_id)

    def get_blocked_users(self, blocker_id: UUID4) -> list[User]:
        return self.blocks.get_blocked_users(blocker_id)

    def is_blocked(self, blocker_id: UUID4, blocked_id: UUID4) -> bool:
        return self.blocks.is_blocked(blocker_id, blocked_id)
