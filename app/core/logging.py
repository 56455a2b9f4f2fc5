"""Process-wide logging setup shared by the API and CLI entrypoints."""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def configure_logging(settings: "Settings") -> None:
    """Configure the root logger at LOG_LEVEL; later calls only adjust the level."""
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )
    logging.getLogger().setLevel(settings.LOG_LEVEL)
    # SQL echo is controlled by DEBUG on the engine; keep the pool quiet otherwise.
    if not settings.DEBUG:
        logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)
