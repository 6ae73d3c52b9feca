"""
Logging setup - one call at application startup.

Modules log through `logging.getLogger(__name__)`; this only sets the
root handler and level from Settings.
"""

import logging
from typing import Optional

from placement_tracker.core.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging. Safe to call more than once."""
    settings = get_settings()
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=LOG_FORMAT,
    )
    # SQL echo goes through sqlalchemy.engine; keep it quiet unless debugging
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.debug else logging.WARNING
    )
