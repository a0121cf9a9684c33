from pydantic import UUID4, BaseModel, ConfigDict


class Block(BaseModel):
    """Model representing a block relationship between users.

    Blocks are one-directional and are never removed.

    Attributes:
        blocker_id: ID of the user doing the blocking
        blocked_id: ID of the user being blocked
    """

    model_config = ConfigDict(frozen=True)

    blocker_id: UUID4
    blocked_id: UUID4
