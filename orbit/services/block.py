import logging

from pydantic import UUID4

from orbit.models.block import Block
from orbit.models.event import EventKind
from orbit.models.user import User
from orbit.schemas.records import BlockRecord, Outcome
from orbit.store import DirectoryStore, is_uuid4

logger = logging.getLogger(__name__)


class BlockService:
    """Service for managing user blocks.

    Blocking is one-directional and permanent: there is no unblock, and the
    blocked user is not made to block back. Any chat room the two users share
    is removed, whichever side blocks.
    """

    def __init__(self, store: DirectoryStore) -> None:
        self.store = store

    def _create_block(self, blocker_id: UUID4, blocked_id: UUID4) -> BlockRecord:
        if blocker_id == blocked_id:
            return BlockRecord(
                outcome=Outcome.INVALID_INPUT, detail="Users cannot block themselves"
            )

        if not (is_uuid4(blocker_id) and is_uuid4(blocked_id)):
            return BlockRecord(
                outcome=Outcome.INVALID_INPUT,
                detail="User ids must be version-4 UUIDs",
            )

        blocked = self.store.blocked_users.setdefault(blocker_id, [])
        newly_blocked = blocked_id not in blocked
        if newly_blocked:
            blocked.append(blocked_id)
            self.store.record(EventKind.USER_BLOCKED, blocked_id, blocker_id)
            logger.info("User %s blocked user %s", blocker_id, blocked_id)

        pair = frozenset((blocker_id, blocked_id))
        removed = [room for room in self.store.chat_rooms if room.pair == pair]
        if removed:
            self.store.chat_rooms[:] = [
                room for room in self.store.chat_rooms if room.pair != pair
            ]
            for room in removed:
                self.store.record(EventKind.CHAT_ROOM_REMOVED, room.room_id, blocker_id)
                logger.info("Removed chat room %s after block", room.room_id)

        return BlockRecord(
            outcome=Outcome.APPLIED if newly_blocked or removed else Outcome.NO_OP,
            block=Block(blocker_id=blocker_id, blocked_id=blocked_id),
            newly_blocked=newly_blocked,
            removed_room_ids=[room.room_id for room in removed],
        )

    def block(self, blocker_id: UUID4, blocked_id: UUID4) -> BlockRecord:
        """Block a user.

        Args:
            blocker_id: ID of the user doing the blocking
            blocked_id: ID of the user to block

        Returns:
            Record of the block, including any chat rooms it removed;
            INVALID_INPUT when a user tries to block themselves
        """
        return self.store.execute_write(self._create_block, blocker_id, blocked_id)

    def report(self, reporter_id: UUID4, reported_id: UUID4) -> BlockRecord:
        """Report a user. Reporting blocks the reported user."""
        logger.info("User %s reported user %s", reporter_id, reported_id)
        return self.block(reporter_id, reported_id)

    def get_blocked_users(self, blocker_id: UUID4) -> list[User]:
        """Get users blocked by a user, in blocking order."""

        def _get() -> list[User]:
            blocked_ids = self.store.blocked_users.get(blocker_id, [])
            by_id = {user.user_id: user for user in self.store.users}
            return [by_id[uid] for uid in blocked_ids if uid in by_id]

        return self.store.execute_read(_get)

    def is_blocked(self, blocker_id: UUID4, blocked_id: UUID4) -> bool:
        """Check whether ``blocker_id`` has blocked ``blocked_id``."""
        return self.store.execute_read(
            lambda: blocked_id in self.store.blocked_users.get(blocker_id, [])
        )
