from os import environ

from pydantic import BaseModel, ConfigDict


def _env_flag(name: str, default: bool) -> bool:
    value = environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """Application settings.

    Attributes:
        seed_demo_users: Whether a new directory starts with the demo users
        log_level: Name of the root log level
        log_file: Optional path of a log file to write alongside the console
    """

    model_config = ConfigDict(frozen=True)

    seed_demo_users: bool = True
    log_level: str = "INFO"
    log_file: str | None = None

    @classmethod
    def from_environ(cls) -> "Settings":
        """Build settings from ``ORBIT_*`` environment variables."""
        return cls(
            seed_demo_users=_env_flag("ORBIT_SEED_DEMO_USERS", True),
            log_level=environ.get("ORBIT_LOG_LEVEL", "INFO"),
            log_file=environ.get("ORBIT_LOG_FILE") or None,
        )
