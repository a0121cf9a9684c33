import logging
from datetime import UTC, datetime
from uuid import uuid4

from pydantic import UUID4

from orbit.models.event import EventKind
from orbit.models.meetup import MeetupRequest
from orbit.schemas.records import ApprovalRecord, MeetupRequestRecord, Outcome
from orbit.services.chat import ChatService
from orbit.store import DirectoryStore

logger = logging.getLogger(__name__)


class MeetupService:
    """Service for submitting, browsing and approving meetup requests.

    An approval by anyone other than the request's creator is a match and
    opens a chat room between the creator and the approver, unless the pair
    already has one.
    """

    def __init__(self, store: DirectoryStore, chat_service: ChatService) -> None:
        self.store = store
        self.chat_service = chat_service

    def _submit_meetup_request(
        self,
        creator_id: UUID4,
        scheduled_at: datetime,
        location: str,
        discussion_topic: str,
        conversation_starter: str,
    ) -> MeetupRequestRecord:
        missing = [
            name
            for name, value in (
                ("location", location),
                ("discussion_topic", discussion_topic),
                ("conversation_starter", conversation_starter),
            )
            if not value
        ]
        if missing:
            logger.debug("Rejecting meetup request with empty %s", missing)
            return MeetupRequestRecord(
                outcome=Outcome.INVALID_INPUT,
                detail=f"Required fields are empty: {', '.join(missing)}",
            )

        if self.store.user_index(creator_id) is None:
            logger.debug("Rejecting meetup request from unknown user %s", creator_id)
            return MeetupRequestRecord(
                outcome=Outcome.NOT_FOUND, detail=f"User {creator_id} not found"
            )

        request = MeetupRequest(
            request_id=uuid4(),
            creator_id=creator_id,
            scheduled_at=scheduled_at,
            location=location,
            discussion_topic=discussion_topic,
            conversation_starter=conversation_starter,
            created_at=datetime.now(UTC),
        )
        self.store.meetup_requests.append(request)
        self.store.record(
            EventKind.MEETUP_REQUEST_SUBMITTED, request.request_id, creator_id
        )
        logger.info(
            "User %s submitted meetup request %s", creator_id, request.request_id
        )
        return MeetupRequestRecord(outcome=Outcome.APPLIED, request=request)

    def submit_meetup_request(
        self,
        creator_id: UUID4,
        scheduled_at: datetime,
        location: str,
        discussion_topic: str,
        conversation_starter: str,
    ) -> MeetupRequestRecord:
        """Submit a new meetup request.

        Args:
            creator_id: ID of the registered user proposing the meetup
            scheduled_at: When to meet
            location: Where to meet
            discussion_topic: What to talk about
            conversation_starter: Opening line for other users

        Returns:
            Record holding the new request, or INVALID_INPUT if a text field
            is empty, or NOT_FOUND if the creator is not registered
        """
        return self.store.execute_write(
            self._submit_meetup_request,
            creator_id,
            scheduled_at,
            location,
            discussion_topic,
            conversation_starter,
        )

    def _approve_meetup_request(
        self, request_id: UUID4, approver_id: UUID4
    ) -> ApprovalRecord:
        index = self.store.request_index(request_id)
        if index is None:
            logger.debug("Ignoring approval of unknown request %s", request_id)
            return ApprovalRecord(
                outcome=Outcome.NOT_FOUND,
                detail=f"Meetup request {request_id} not found",
            )

        request = self.store.meetup_requests[index]
        creator_id = request.creator_id
        if approver_id == creator_id:
            logger.debug("Ignoring self-approval of request %s", request_id)
            return ApprovalRecord(
                outcome=Outcome.NO_OP,
                detail="Creators cannot approve their own request",
                request=request,
            )

        # Registered users all carry version-4 ids, so this also turns away
        # ids of any other UUID version before anything is written.
        if self.store.user_index(approver_id) is None:
            logger.debug("Ignoring approval by unknown user %s", approver_id)
            return ApprovalRecord(
                outcome=Outcome.NOT_FOUND,
                detail=f"User {approver_id} not found",
                request=request,
            )

        appended = False
        if not request.is_approved_by(approver_id):
            request = request.model_copy(
                update={"approved_by": request.approved_by + (approver_id,)}
            )
            self.store.meetup_requests[index] = request
            self.store.record(
                EventKind.MEETUP_REQUEST_APPROVED, request_id, approver_id
            )
            appended = True
            logger.info("User %s approved meetup request %s", approver_id, request_id)

        # Re-checked on every approval so a repeat approval after a block
        # opens a fresh room.
        chat_room = None
        if (
            not request.is_approved_by(creator_id)
            and self.chat_service.find_room_between(creator_id, approver_id) is None
        ):
            chat_room = self.chat_service.open_room(creator_id, approver_id)

        return ApprovalRecord(
            outcome=Outcome.APPLIED if appended or chat_room else Outcome.NO_OP,
            request=request,
            chat_room=chat_room,
        )

    def approve_meetup_request(
        self, request_id: UUID4, approver_id: UUID4
    ) -> ApprovalRecord:
        """Approve a meetup request, matching the approver with its creator.

        Args:
            request_id: ID of the request to approve
            approver_id: ID of the approving user

        Returns:
            Record holding the request and, on a new match, the opened chat
            room; NO_OP for self-approval or a repeat approval that changed
            nothing; NOT_FOUND for an unknown request or an unregistered
            approver
        """
        return self.store.execute_write(
            self._approve_meetup_request, request_id, approver_id
        )

    def get_meetup_request(self, request_id: UUID4) -> MeetupRequest | None:
        def _get() -> MeetupRequest | None:
            index = self.store.request_index(request_id)
            return None if index is None else self.store.meetup_requests[index]

        return self.store.execute_read(_get)

    def list_meetup_requests(
        self, viewer_id: UUID4 | None = None
    ) -> list[MeetupRequest]:
        """List meetup requests in submission order.

        Args:
            viewer_id: If given, the viewer's own requests are left out

        Returns:
            The matching requests
        """
        return self.store.execute_read(
            lambda: [
                r for r in self.store.meetup_requests if r.creator_id != viewer_id
            ]
        )
