from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
HANDLER_NAME = "course_attendance"


def configure_logging(level: str = "INFO") -> None:
    """Install one stream handler on the package logger.

    Calling it again only changes the level.
    """

    logger = logging.getLogger("course_attendance")
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    if not any(h.get_name() == HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.set_name(HANDLER_NAME)
        logger.addHandler(handler)
