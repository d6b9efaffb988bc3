"""Logging setup for the service process."""

from __future__ import annotations

import logging

from cooked_court.core.settings import settings

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once, honouring ``LOG_LEVEL``."""
    resolved = (level or settings.log_level).upper()
    logging.basicConfig(level=resolved, format=_LOG_FORMAT)
    logging.getLogger("cooked_court").setLevel(resolved)
