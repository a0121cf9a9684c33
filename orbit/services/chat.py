import logging
from datetime import UTC, datetime
from uuid import uuid4

from pydantic import UUID4

from orbit.models.chat import ChatMessage, ChatRoom
from orbit.models.event import EventKind
from orbit.schemas.records import MessageRecord, Outcome
from orbit.store import DirectoryStore, is_uuid4

logger = logging.getLogger(__name__)


class ChatService:
    """Service for two-party chat rooms and their messages.

    Rooms are opened by meetup matches and removed by blocks; this service
    only appends messages and answers lookups.
    """

    def __init__(self, store: DirectoryStore) -> None:
        self.store = store

    def find_room_between(self, user_a: UUID4, user_b: UUID4) -> ChatRoom | None:
        """Find the room pairing two users, in either order.

        Must be called while holding the store lock.
        """
        for room in self.store.chat_rooms:
            if room.pairs(user_a, user_b):
                return room
        return None

    def open_room(self, creator_id: UUID4, approver_id: UUID4) -> ChatRoom:
        """Append a new, empty room for a matched pair.

        Must be called inside a store write after checking that the pair has
        no room yet.
        """
        room = ChatRoom(
            room_id=uuid4(),
            participant_ids=(creator_id, approver_id),
            created_at=datetime.now(UTC),
        )
        self.store.chat_rooms.append(room)
        self.store.record(EventKind.CHAT_ROOM_CREATED, room.room_id, approver_id)
        logger.info(
            "Opened chat room %s between %s and %s",
            room.room_id,
            creator_id,
            approver_id,
        )
        return room

    def _send_message(
        self, room_id: UUID4, sender_id: UUID4, text: str
    ) -> MessageRecord:
        if not text:
            logger.debug("Ignoring empty message to room %s", room_id)
            return MessageRecord(
                outcome=Outcome.INVALID_INPUT, detail="Message text is empty"
            )

        if not is_uuid4(sender_id):
            logger.debug("Ignoring message from malformed sender id %s", sender_id)
            return MessageRecord(
                outcome=Outcome.INVALID_INPUT,
                detail=f"Sender id {sender_id} is not a version-4 UUID",
            )

        index = self.store.room_index(room_id)
        if index is None:
            logger.debug("Ignoring message to unknown room %s", room_id)
            return MessageRecord(
                outcome=Outcome.NOT_FOUND, detail=f"Chat room {room_id} not found"
            )

        # Sender is not checked against the room's participants
        message = ChatMessage(
            message_id=uuid4(),
            sender_id=sender_id,
            text=text,
            created_at=datetime.now(UTC),
        )
        room = self.store.chat_rooms[index]
        self.store.chat_rooms[index] = room.model_copy(
            update={"messages": room.messages + (message,)}
        )
        self.store.record(EventKind.MESSAGE_SENT, message.message_id, sender_id)
        logger.info(
            "User %s sent message %s to room %s",
            sender_id,
            message.message_id,
            room_id,
        )
        return MessageRecord(
            outcome=Outcome.APPLIED, room_id=room_id, message=message
        )

    def send_message(
        self, room_id: UUID4, sender_id: UUID4, text: str
    ) -> MessageRecord:
        """Append a message to a chat room.

        Args:
            room_id: ID of the room to post to
            sender_id: ID of the user sending the message
            text: The message text

        Returns:
            Record holding the appended message, or INVALID_INPUT for empty
            text, or NOT_FOUND for an unknown room
        """
        return self.store.execute_write(self._send_message, room_id, sender_id, text)

    def get_chat_room(self, room_id: UUID4) -> ChatRoom | None:
        def _get() -> ChatRoom | None:
            index = self.store.room_index(room_id)
            return None if index is None else self.store.chat_rooms[index]

        return self.store.execute_read(_get)

    def chat_rooms_for(self, user_id: UUID4) -> list[ChatRoom]:
        """Get the rooms a user participates in, oldest first."""
        return self.store.execute_read(
            lambda: [r for r in self.store.chat_rooms if r.has_participant(user_id)]
        )

    def list_chat_rooms(self) -> list[ChatRoom]:
        return self.store.execute_read(lambda: list(self.store.chat_rooms))
