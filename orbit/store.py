import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import ParamSpec, TypeVar
from uuid import UUID

from pydantic import UUID4

from orbit.models.chat import ChatRoom
from orbit.models.event import DirectoryEvent, EventKind
from orbit.models.meetup import MeetupRequest
from orbit.models.user import User

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")
Subscriber = Callable[[DirectoryEvent], None]


def is_uuid4(value: object) -> bool:
    """Whether ``value`` is a UUID the directory's models accept as an id."""
    return isinstance(value, UUID) and value.version == 4


class DirectoryStore:
    """In-memory owner of the directory's collections.

    All reads and writes go through ``execute_read`` / ``execute_write``,
    which serialize on one re-entrant lock. Events recorded during a write are
    delivered to subscribers once the outermost write has released the lock.

    Attributes:
        users: Registered users in registration order
        current_user_id: ID of the user designated as the session's current user
        meetup_requests: Submitted meetup requests in submission order
        chat_rooms: Live chat rooms in creation order
        blocked_users: Blocker ID to blocked IDs, in blocking order
    """

    def __init__(self) -> None:
        self.users: list[User] = []
        self.current_user_id: UUID4 | None = None
        self.meetup_requests: list[MeetupRequest] = []
        self.chat_rooms: list[ChatRoom] = []
        self.blocked_users: dict[UUID4, list[UUID4]] = {}
        self._lock = threading.RLock()
        self._depth = 0
        self._pending: list[DirectoryEvent] = []
        self._subscribers: list[Subscriber] = []

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Hold the store lock for a read-then-write sequence.

        Nested transactions join the outer one. Events recorded before the
        outermost transaction exits are delivered even when it raises; the
        writes they describe are not rolled back.
        """
        events: list[DirectoryEvent] = []
        try:
            with self._lock:
                outermost = self._depth == 0
                self._depth += 1
                try:
                    yield
                finally:
                    self._depth -= 1
                    if outermost:
                        events, self._pending = self._pending, []
        finally:
            self._dispatch(events)

    def execute_write(
        self, work: Callable[P, R], *args: P.args, **kwargs: P.kwargs
    ) -> R:
        with self.transaction():
            return work(*args, **kwargs)

    def execute_read(
        self, work: Callable[P, R], *args: P.args, **kwargs: P.kwargs
    ) -> R:
        with self._lock:
            return work(*args, **kwargs)

    def record(
        self, kind: EventKind, entity_id: UUID4, actor_id: UUID4 | None = None
    ) -> None:
        """Queue an event for delivery when the current write completes."""
        self._pending.append(
            DirectoryEvent(
                kind=kind,
                entity_id=entity_id,
                actor_id=actor_id,
                occurred_at=datetime.now(UTC),
            )
        )

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a change callback.

        Returns:
            A function that removes the callback again
        """
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def _dispatch(self, events: list[DirectoryEvent]) -> None:
        if not events:
            return
        with self._lock:
            subscribers = list(self._subscribers)
        for event in events:
            for callback in subscribers:
                try:
                    callback(event)
                except Exception:
                    logger.exception(
                        "Subscriber %r failed on %s event", callback, event.kind.value
                    )

    def user_index(self, user_id: UUID4) -> int | None:
        for index, user in enumerate(self.users):
            if user.user_id == user_id:
                return index
        return None

    def request_index(self, request_id: UUID4) -> int | None:
        for index, request in enumerate(self.meetup_requests):
            if request.request_id == request_id:
                return index
        return None

    def room_index(self, room_id: UUID4) -> int | None:
        for index, room in enumerate(self.chat_rooms):
            if room.room_id == room_id:
                return index
        return None
