import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _build_handlers(logfile: str | None) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        handlers.append(
            logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
        )
    return handlers


def setup_logging(
    level: str = "INFO",
    logfile: str | None = None,
    logger: logging.Logger | None = None,
) -> None:
    """Set up directory logging from the ORBIT_LOG_* settings.

    Service modules log through ``logging.getLogger(__name__)``; this routes
    those records to the console and, optionally, a log file. A logger that
    already has handlers is left untouched, so repeated app startups in one
    process do not duplicate output.

    Args:
        level: Level name such as ``"debug"``; unknown names fall back to INFO
        logfile: Path of a file to write alongside the console
        logger: Logger to set up; defaults to the root logger
    """
    target = logger or logging.getLogger()
    if target.handlers:
        return

    target.setLevel(logging.getLevelNamesMapping().get(level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    for handler in _build_handlers(logfile):
        handler.setFormatter(formatter)
        target.addHandler(handler)
