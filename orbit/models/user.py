from pydantic import UUID4, BaseModel, ConfigDict, Field


class UserProfile(BaseModel):
    """Profile details collected at onboarding and on the edit-profile form.

    Attributes:
        full_name: User's full name
        email: Contact email address (not checked for uniqueness)
        university: Name of the user's university
        interests: Interest tags in the order they were entered
        university_id: Student id issued by the university
        is_verified: Whether the university id has been verified
    """

    model_config = ConfigDict(frozen=True)

    full_name: str
    email: str
    university: str
    interests: list[str] = Field(default_factory=list)
    university_id: str
    is_verified: bool = False

    @staticmethod
    def split_interests(raw: str) -> list[str]:
        """Parse the comma-separated interests text from the profile form.

        Order and duplicates are kept; surrounding whitespace is trimmed.
        """
        if not raw:
            return []
        return [part.strip() for part in raw.split(",")]


class User(UserProfile):
    """A registered Orbit user.

    Attributes:
        user_id: Unique identifier for the user, fixed at registration
    """

    user_id: UUID4

    @property
    def profile(self) -> UserProfile:
        return UserProfile(**self.model_dump(exclude={"user_id"}))
