"""Root logger setup shared by the API and the CLI."""

import logging

from journal.config import settings

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str | None = None) -> None:
    """Configure the root logger once. Later calls only adjust the level."""
    level_name = (level or settings.log_level).upper()
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT, datefmt=DATE_FORMAT)
    root.setLevel(getattr(logging, level_name, logging.INFO))
    # SQL echo is controlled by the engine, keep the sqlalchemy logger quiet
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
